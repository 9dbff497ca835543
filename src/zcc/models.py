"""Core typed values shared by the builder, executor and CLI."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

import cbor2

from zcc.errors import ZccError


class Mode(StrEnum):
    """zig driver personality; the value is the zig subcommand."""

    C = "cc"
    CXX = "c++"


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    status: int
    command: tuple[str, ...]
    mode: str
    stdout: str = ""
    stderr: str = ""
    error: ZccError | None = None

    @property
    def ok(self) -> bool:
        return self.status == 0


@dataclass(frozen=True, slots=True)
class InvocationRecord:
    """Serializable summary of one zig invocation."""

    mode: str
    command: tuple[str, ...]
    status: int
    triple: str = ""
    cpu: str = ""
    warnings: tuple[str, ...] = field(default_factory=tuple)
    error_code: str | None = None
    schema_version: int = 1

    @classmethod
    def from_result(
        cls,
        result: ExecutionResult,
        *,
        triple: str,
        cpu: str,
        warnings: tuple[str, ...],
    ) -> InvocationRecord:
        return cls(
            mode=result.mode,
            command=result.command,
            status=result.status,
            triple=triple,
            cpu=cpu,
            warnings=warnings,
            error_code=result.error.code if result.error is not None else None,
        )

    def to_json(self, path: str | Path | None = None) -> str:
        encoded = json.dumps(self._payload(), indent=2, sort_keys=True) + "\n"
        if path is not None:
            Path(path).write_text(encoded, encoding="utf-8")
        return encoded

    def to_cbor(self, path: str | Path | None = None) -> bytes:
        encoded = cbor2.dumps(self._payload(), canonical=True)
        if path is not None:
            Path(path).write_bytes(encoded)
        return encoded

    def write(self, path: str | Path) -> Path:
        """Write as CBOR for ``.cbor`` paths, JSON otherwise."""
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if output_path.suffix == ".cbor":
            self.to_cbor(output_path)
        else:
            self.to_json(output_path)
        return output_path

    def _payload(self) -> dict[str, object]:
        return {
            "schema_version": self.schema_version,
            "mode": self.mode,
            "command": list(self.command),
            "status": self.status,
            "triple": self.triple,
            "cpu": self.cpu,
            "warnings": list(self.warnings),
            "error_code": self.error_code,
        }
