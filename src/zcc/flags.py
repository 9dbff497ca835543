"""Flag filtering and rewriting for the zig frontend.

Shared by the compile and library paths. Every function here is pure.
"""

from __future__ import annotations

import os

# Linker options zig's lld driver rejects, plus MSVC banner switches.
SKIP_FLAGS: frozenset[str] = frozenset(
    {"--exclude-libs", "ALL", "--no-as-needed", "/nologo", "/NOLOGO"},
)

START_GROUP = "-Wl,--start-group"
END_GROUP = "-Wl,--end-group"
EXPORT_DYNAMIC = "-Wl,--export-dynamic"
LINKER_REWRITES: frozenset[str] = frozenset({START_GROUP, END_GROUP, EXPORT_DYNAMIC})

CXX_SOURCE_EXTENSIONS: frozenset[str] = frozenset({".cpp", ".cxx", ".cc", ".c++"})
SOURCE_EXTENSIONS: frozenset[str] = CXX_SOURCE_EXTENSIONS | {".c", ".o", ".obj", ".s"}

TARGET_FLAGS: frozenset[str] = frozenset({"-target", "--target"})
TARGET_PREFIX = "--target="


def process_flag(flag: str) -> tuple[str, ...]:
    """Return the tokens *flag* becomes on the zig command line."""
    if flag in SKIP_FLAGS:
        return ()
    if flag.endswith("-group"):
        return (START_GROUP, END_GROUP)
    if flag.endswith("-dynamic"):
        return (EXPORT_DYNAMIC,)
    return (flag,)


def is_compiler_flag(flag: str) -> bool:
    """True for flags meant for clang rather than the linker."""
    return not flag.startswith("-Wl,") and flag not in LINKER_REWRITES


def source_extension(token: str) -> str:
    return os.path.splitext(token)[1].lower()


def is_source_file(token: str) -> bool:
    return source_extension(token) in SOURCE_EXTENSIONS


def is_cxx_source(token: str) -> bool:
    return source_extension(token) in CXX_SOURCE_EXTENSIONS


def target_from_flag(flag: str) -> str | None:
    """Extract the triple from ``--target=<triple>``, if *flag* is one."""
    if flag.startswith(TARGET_PREFIX):
        return flag[len(TARGET_PREFIX) :]
    return None
