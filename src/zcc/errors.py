"""Typed error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import ClassVar


class ErrorCode(StrEnum):
    """Stable error identifiers reported alongside diagnostics."""

    VALIDATION = "E_VALIDATION"
    PRECONDITION = "E_PRECONDITION"
    EXECUTION = "E_EXECUTION"
    TOOLCHAIN = "E_TOOLCHAIN"


class ZccError(Exception):
    """Base error carrying a code, an optional hint, and string context.

    Subclasses pin their code through ``default_code``; the base class needs
    an explicit ``code=``.
    """

    default_code: ClassVar[ErrorCode | None] = None

    code: str
    hint: str | None
    context: Mapping[str, str]

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | None = None,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        resolved = code if code is not None else self.default_code
        if resolved is None:
            raise TypeError(f"{type(self).__name__} requires an error code.")
        super().__init__(message)
        self.code = resolved.value
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        lines = [self.args[0]]
        if self.hint:
            lines.append(f"Hint: {self.hint}")
        lines.extend(f"  {key}: {value}" for key, value in self.context.items() if value)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ValidationError(ZccError):
    default_code = ErrorCode.VALIDATION


class PreconditionError(ZccError):
    """A required input is missing or not allowed on this host; nothing ran."""

    default_code = ErrorCode.PRECONDITION


class ExecutionError(ZccError):
    """zig could not be started or exited non-zero."""

    default_code = ErrorCode.EXECUTION


class ToolchainError(ZccError):
    default_code = ErrorCode.TOOLCHAIN


__all__ = [
    "ErrorCode",
    "ExecutionError",
    "PreconditionError",
    "ToolchainError",
    "ValidationError",
    "ZccError",
]
