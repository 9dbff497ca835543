"""Public package entrypoint for the zig C/C++ compiler wrapper."""

from .builder import Builder, BuilderState
from .config import BuildConfig, config_from_env
from .errors import (
    ErrorCode,
    ExecutionError,
    PreconditionError,
    ToolchainError,
    ValidationError,
    ZccError,
)
from .flags import is_compiler_flag, process_flag
from .models import ExecutionResult, InvocationRecord, Mode
from .observability import StructuredLogger
from .triple import NormalizedTriple, normalize_triple

__all__ = [
    "BuildConfig",
    "Builder",
    "BuilderState",
    "ErrorCode",
    "ExecutionError",
    "ExecutionResult",
    "InvocationRecord",
    "Mode",
    "NormalizedTriple",
    "PreconditionError",
    "StructuredLogger",
    "ToolchainError",
    "ValidationError",
    "ZccError",
    "config_from_env",
    "is_compiler_flag",
    "normalize_triple",
    "process_flag",
]
