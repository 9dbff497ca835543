"""Build configuration defaults and environment loading."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

from zcc.errors import ValidationError

OptimizeMode = Literal["Debug", "ReleaseSafe", "ReleaseFast", "ReleaseSmall"]

OPTIMIZE_MODES: tuple[OptimizeMode, ...] = ("Debug", "ReleaseSafe", "ReleaseFast", "ReleaseSmall")
_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Defaults a builder starts from.

    Passed explicitly to every :class:`~zcc.builder.Builder`; there is no
    process-wide mutable default.
    """

    zig: str = "zig"
    triple: str = ""
    cpu: str = ""
    hardening_flag: str = "-fno-sanitize=all"
    library_optimize: OptimizeMode = "ReleaseSafe"
    # Hosts that cannot cross-assemble only accept x86 targets.
    restrict_host_arches: bool = False
    record_path: Path | None = None
    log_path: Path | None = None


def config_from_env(environ: Mapping[str, str]) -> BuildConfig:
    optimize = environ.get("ZCC_OPTIMIZE", "ReleaseSafe")
    if optimize not in OPTIMIZE_MODES:
        raise ValidationError(
            f"Unsupported optimize mode: {optimize!r}.",
            hint=f"Use one of: {', '.join(OPTIMIZE_MODES)}.",
            context={"variable": "ZCC_OPTIMIZE"},
        )
    record = environ.get("ZCC_RECORD", "")
    log = environ.get("ZCC_LOG", "")
    return BuildConfig(
        zig=environ.get("ZCC_ZIG", "") or "zig",
        triple=environ.get("ZCC_TRIPLE", ""),
        cpu=environ.get("ZCC_CPU", ""),
        library_optimize=cast(OptimizeMode, optimize),
        restrict_host_arches=environ.get("ZCC_RESTRICT_HOST_ARCHES", "").lower() in _TRUTHY,
        record_path=Path(record) if record else None,
        log_path=Path(log) if log else None,
    )
