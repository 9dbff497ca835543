"""Compare the LLVM versions behind ``zig cc`` and ``ldc2``.

Link-time optimization across the two compilers only works when both emit
bitcode from the same LLVM release.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

from zcc.errors import ToolchainError


def zig_clang_version(zig: str = "zig") -> str:
    output = _run_version([zig, "cc", "--version"])
    lines = output.splitlines()
    if not lines:
        raise ToolchainError("No output from zig cc --version.", context={"tool": zig})
    first_line = lines[0].strip()
    fields = first_line.split()
    if len(fields) < 3 or fields[0] != "clang" or fields[1] != "version":
        raise ToolchainError(
            "Unexpected zig cc --version format.",
            context={"tool": zig, "line": first_line},
        )
    return fields[2]


def ldc_llvm_version(ldc: str = "ldc2") -> str:
    output = _run_version([ldc, "--version"])
    lines = output.splitlines()
    if len(lines) < 2:
        raise ToolchainError("Insufficient output from ldc2 --version.", context={"tool": ldc})
    second_line = lines[1].strip()
    fields = second_line.split()
    if "LLVM" not in fields or fields.index("LLVM") + 1 >= len(fields):
        raise ToolchainError(
            "Unexpected ldc2 --version format.",
            context={"tool": ldc, "line": second_line},
        )
    return fields[fields.index("LLVM") + 1].strip()


def has_matching_llvm_versions(zig: str = "zig", ldc: str = "ldc2") -> bool:
    return zig_clang_version(zig) == ldc_llvm_version(ldc)


def _run_version(argv: Sequence[str]) -> str:
    try:
        completed = subprocess.run(
            list(argv),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise ToolchainError(
            f"Failed to execute {' '.join(argv)}: {exc}",
            hint=f"Make sure `{argv[0]}` is installed and on PATH.",
        ) from exc
    if completed.returncode != 0:
        raise ToolchainError(
            f"Failed to execute {' '.join(argv)}.",
            context={
                "returncode": str(completed.returncode),
                "stderr": completed.stderr[:2000] if completed.stderr else "",
            },
        )
    return completed.stdout
