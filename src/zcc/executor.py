"""Run assembled zig commands as child processes.

Failures never propagate as exceptions out of :func:`execute_command`; they
come back as an :class:`~zcc.models.ExecutionResult` with ``status == 1`` and
the error attached, and a diagnostic is printed to stderr.
"""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Sequence

from zcc.errors import ExecutionError, PreconditionError, ZccError
from zcc.models import ExecutionResult
from zcc.observability import StructuredLogger
from zcc.triple import NATIVE_TRIPLE, triple_arch

RESTRICTED_HOST_ARCHES: tuple[str, ...] = ("x86_64", "x86", "i386", "i686")


def check_host_arch(triple: str) -> None:
    """Reject targets a non-cross-capable host toolchain cannot assemble."""
    if not triple or triple == NATIVE_TRIPLE:
        return
    if triple_arch(triple) in RESTRICTED_HOST_ARCHES:
        return
    raise PreconditionError(
        "This host toolchain only supports x86/x86_64 targets or -target native-native.",
        hint="Disable ZCC_RESTRICT_HOST_ARCHES or build with a cross-capable host compiler.",
        context={"triple": triple, "allowed": ", ".join(RESTRICTED_HOST_ARCHES)},
    )


def execute_command(
    cmd: Sequence[str],
    mode: str,
    *,
    triple: str = "",
    restrict_host_arches: bool = False,
    logger: StructuredLogger | None = None,
) -> ExecutionResult:
    command = tuple(cmd)
    log = logger if logger is not None else StructuredLogger()

    if restrict_host_arches:
        try:
            check_host_arch(triple)
        except PreconditionError as exc:
            return _failed(command, mode, exc, log=log, triple=triple)

    log.log(
        operation="execute",
        mode=mode,
        triple=triple or None,
        message="Running zig.",
        extra={"command": list(command)},
    )
    try:
        completed = subprocess.run(
            list(command),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        error = ExecutionError(
            f"Error executing zig {mode}: {exc}",
            hint="Install zig and make sure it is on PATH, or set ZCC_ZIG.",
            context={"mode": mode, "command": " ".join(command)},
        )
        return _failed(command, mode, error, log=log, triple=triple)

    if completed.stdout:
        sys.stdout.write(completed.stdout)
        sys.stdout.flush()
    if completed.stderr:
        sys.stderr.write(completed.stderr)

    if completed.returncode != 0:
        error = ExecutionError(
            f"Zig {mode} failed with exit code {completed.returncode}.",
            context={
                "mode": mode,
                "returncode": str(completed.returncode),
                "output": completed.stdout[:2000] if completed.stdout else "",
            },
        )
        return _failed(
            command,
            mode,
            error,
            log=log,
            triple=triple,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    log.log(operation="execute_complete", mode=mode, triple=triple or None, message="zig succeeded.")
    return ExecutionResult(
        status=0,
        command=command,
        mode=mode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


def _failed(
    command: tuple[str, ...],
    mode: str,
    error: ZccError,
    *,
    log: StructuredLogger,
    triple: str,
    stdout: str = "",
    stderr: str = "",
) -> ExecutionResult:
    print(f"Error: {error}", file=sys.stderr)
    log.log(
        operation="execute_failed",
        mode=mode,
        triple=triple or None,
        level="error",
        message=error.args[0],
        extra=error.to_dict(),
    )
    return ExecutionResult(
        status=1,
        command=command,
        mode=mode,
        stdout=stdout,
        stderr=stderr,
        error=error,
    )
