"""Shared test fixtures."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import pytest


@dataclass
class FakeRun:
    """Stand-in for ``subprocess.run`` that records argv instead of spawning."""

    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    raises: OSError | None = None
    calls: list[list[str]] = field(default_factory=list)

    def __call__(self, argv: Sequence[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.calls.append(list(argv))
        if self.raises is not None:
            raise self.raises
        return subprocess.CompletedProcess(
            list(argv),
            self.returncode,
            stdout=self.stdout,
            stderr=self.stderr,
        )


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRun:
    """Replace process spawning in the executor with a recorder."""
    fake = FakeRun()
    monkeypatch.setattr("zcc.executor.subprocess.run", fake)
    return fake
