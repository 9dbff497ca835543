"""Fluent builder that turns generic C/C++ compiler arguments into zig commands."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Self

from zcc.config import BuildConfig
from zcc.errors import PreconditionError
from zcc.executor import execute_command
from zcc.flags import (
    TARGET_FLAGS,
    is_compiler_flag,
    is_cxx_source,
    is_source_file,
    process_flag,
    target_from_flag,
)
from zcc.models import ExecutionResult, InvocationRecord, Mode
from zcc.observability import StructuredLogger
from zcc.triple import is_msvc, normalize_triple

# zig, mode, and one real argument: no hardening flag at or below this.
MIN_HARDENING_LENGTH = 3
LIBRARY_MODE = "build-lib"
# Options whose next token is a path, never a source input.
VALUE_FLAGS: frozenset[str] = frozenset({"-o", "-MF", "-MT", "-MQ"})


@dataclass(slots=True)
class BuilderState:
    """Mutable accumulation owned by a single :class:`Builder`."""

    initial_mode: Mode = Mode.C
    flags: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)
    triple: str = ""
    cpu: str = ""
    saw_cxx_source: bool = False
    warnings: list[str] = field(default_factory=list)
    flushed_warnings: int = 0

    @property
    def mode(self) -> Mode:
        # Recomputed on every read so triple and file order never matter.
        if is_msvc(self.triple):
            return Mode.C
        if self.saw_cxx_source or self.initial_mode is Mode.CXX:
            return Mode.CXX
        return Mode.C


@dataclass(slots=True)
class Builder:
    """Accumulates files, flags, triple and CPU, then runs ``zig``.

    Every mutator returns the same builder so calls can be chained::

        Builder().set_target_triple("arm64-apple-macos").file("main.c").execute()

    A builder describes one invocation and must not be shared between threads.
    """

    config: BuildConfig = field(default_factory=BuildConfig)
    use_cpp: bool = False
    logger: StructuredLogger = field(default_factory=StructuredLogger)
    _state: BuilderState = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._state = BuilderState(initial_mode=Mode.CXX if self.use_cpp else Mode.C)
        if self.config.triple:
            self.set_target_triple(self.config.triple)
        if self.config.cpu:
            self.set_cpu(self.config.cpu)

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def mode(self) -> Mode:
        return self._state.mode

    @property
    def warnings(self) -> tuple[str, ...]:
        return tuple(self._state.warnings)

    def add_arg(self, arg: str) -> Self:
        if is_source_file(arg):
            return self.file(arg)
        triple = target_from_flag(arg)
        if triple is not None:
            return self.set_target_triple(triple)
        if arg in TARGET_FLAGS:
            self.logger.log(
                operation="add_arg",
                level="warning",
                message=f"Dropping {arg} without a target value.",
            )
            return self
        tokens = process_flag(arg)
        if not tokens:
            self.logger.log(
                operation="add_arg",
                level="debug",
                message="Skipping flag unsupported by zig.",
                extra={"flag": arg},
            )
        elif tokens != (arg,):
            self.logger.log(
                operation="add_arg",
                level="debug",
                message="Rewrote flag for zig.",
                extra={"flag": arg, "tokens": list(tokens)},
            )
        self._state.flags.extend(tokens)
        return self

    def add_args(self, args: Iterable[str]) -> Self:
        remaining = iter(args)
        for arg in remaining:
            if arg in TARGET_FLAGS:
                value = next(remaining, None)
                if value is None:
                    self.add_arg(arg)
                else:
                    self.set_target_triple(value)
            elif arg in VALUE_FLAGS:
                self._state.flags.append(arg)
                value = next(remaining, None)
                if value is not None:
                    self._state.flags.append(value)
            else:
                self.add_arg(arg)
        return self

    def file(self, path: str | Path) -> Self:
        source = str(path)
        if not is_source_file(source):
            self.logger.log(
                operation="file",
                level="warning",
                message="Ignoring path without a recognized source extension.",
                extra={"path": source},
            )
            return self
        if is_cxx_source(source):
            self._state.saw_cxx_source = True
        self._state.sources.append(source)
        return self

    def files(self, paths: Iterable[str | Path]) -> Self:
        for path in paths:
            self.file(path)
        return self

    def set_target_triple(self, triple: str) -> Self:
        normalized = normalize_triple(triple)
        self._state.triple = normalized.triple
        self._state.warnings.extend(normalized.warnings)
        self.logger.log(
            operation="set_target_triple",
            mode=self.mode.value,
            triple=normalized.triple,
            message="Normalized target triple.",
            extra={"input": triple},
        )
        for warning in normalized.warnings:
            self.logger.log(
                operation="set_target_triple",
                triple=normalized.triple,
                level="warning",
                message=warning,
            )
        return self

    def set_cpu(self, cpu: str) -> Self:
        self._state.cpu = cpu
        return self

    def build(self) -> list[str]:
        state = self._state
        command = [self.config.zig, state.mode.value, *state.flags, *state.sources]
        command.extend(self._target_args())
        if len(command) > MIN_HARDENING_LENGTH:
            command.append(self.config.hardening_flag)
        self.logger.log(
            operation="assemble",
            mode=state.mode.value,
            triple=state.triple or None,
            level="debug",
            message="Assembled zig command.",
            extra={"flags": command[2:]},
        )
        return command

    def execute(self) -> ExecutionResult:
        command = self.build()
        self.flush_warnings()
        return execute_command(
            command,
            self.mode.value,
            triple=self._state.triple,
            restrict_host_arches=self.config.restrict_host_arches,
            logger=self.logger,
        )

    def library_command(self, output_path: str | Path, is_shared: bool = False) -> list[str]:
        state = self._state
        command = [self.config.zig, LIBRARY_MODE, *state.sources]
        command.append(f"-femit-bin={output_path}")
        command.append(f"-O{self.config.library_optimize}")
        if is_shared:
            command.append("-dynamic")
        command.append("-fno-sanitize-c")
        command.extend(self._target_args())

        compiler_flags = [flag for flag in state.flags if is_compiler_flag(flag)]
        linker_flags = [flag for flag in state.flags if not is_compiler_flag(flag)]
        if compiler_flags:
            command.extend(["-cflags", *compiler_flags, "--"])
        if linker_flags:
            self.logger.log(
                operation="library_command",
                mode=LIBRARY_MODE,
                level="debug",
                message="Linker flags are not forwarded to zig build-lib.",
                extra={"flags": linker_flags},
            )
        command.append("-lc++" if state.mode is Mode.CXX else "-lc")
        self.logger.log(
            operation="assemble",
            mode=LIBRARY_MODE,
            triple=state.triple or None,
            level="debug",
            message="Assembled zig build-lib command.",
            extra={"flags": command[2:]},
        )
        return command

    def build_library(self, output_path: str | Path, is_shared: bool = False) -> ExecutionResult:
        if not self._state.sources:
            error = PreconditionError(
                "No source files specified for library build.",
                hint="Add at least one source with file() before build_library().",
                context={"output": str(output_path)},
            )
            print(f"Error: {error}", file=sys.stderr)
            self.logger.log(
                operation="build_library",
                mode=LIBRARY_MODE,
                level="error",
                message=error.args[0],
                extra=error.to_dict(),
            )
            return ExecutionResult(status=1, command=(), mode=LIBRARY_MODE, error=error)

        command = self.library_command(output_path, is_shared)
        self.flush_warnings()
        return execute_command(
            command,
            LIBRARY_MODE,
            triple=self._state.triple,
            restrict_host_arches=self.config.restrict_host_arches,
            logger=self.logger,
        )

    def flush_warnings(self) -> None:
        """Print warnings not yet shown to stderr; they stay in :attr:`warnings`."""
        state = self._state
        for warning in state.warnings[state.flushed_warnings :]:
            print(f"Warning: {warning}", file=sys.stderr)
        state.flushed_warnings = len(state.warnings)

    def record(self, result: ExecutionResult) -> InvocationRecord:
        return InvocationRecord.from_result(
            result,
            triple=self._state.triple,
            cpu=self._state.cpu,
            warnings=self.warnings,
        )

    def _target_args(self) -> list[str]:
        args: list[str] = []
        if self._state.triple:
            args.extend(["-target", self._state.triple])
        if self._state.cpu:
            args.append(f"-mcpu={self._state.cpu}")
        return args
