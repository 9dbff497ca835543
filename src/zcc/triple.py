"""Target triple normalization.

Rewrites the triple dialects emitted by other toolchains (Apple, GNU
``unknown`` vendors, versioned ARM and RISC-V cores, WebAssembly ABI suffixes)
into the ``<arch>-<os>[-<abi>]`` grammar zig accepts. Passes run in order and
each one only sees the output of the previous pass::

    >>> normalize_triple("riscv64gc-unknown-linux-gnu").triple
    'riscv64-linux-gnu'

Nothing here raises: a triple that cannot be rewritten confidently is left
as-is and a warning is recorded instead.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

NATIVE_TRIPLE = "native-native"

# `zig targets` libc list, plus the freestanding, native, Apple, MSVC and
# WebAssembly spellings the rewrite passes produce.
SUPPORTED_TRIPLES: frozenset[str] = frozenset(
    {
        "aarch64-freestanding",
        "aarch64-ios",
        "aarch64-linux-gnu",
        "aarch64-linux-musl",
        "aarch64-macos",
        "aarch64-macos-none",
        "aarch64-windows-gnu",
        "aarch64-windows-msvc",
        "aarch64_be-linux-gnu",
        "aarch64_be-linux-musl",
        "arc-linux-gnu",
        "arm-freestanding",
        "arm-linux-gnueabi",
        "arm-linux-gnueabihf",
        "arm-linux-musleabi",
        "arm-linux-musleabihf",
        "armeb-linux-gnueabi",
        "armeb-linux-gnueabihf",
        "armeb-linux-musleabi",
        "armeb-linux-musleabihf",
        "csky-linux-gnueabi",
        "csky-linux-gnueabihf",
        "loongarch64-linux-gnu",
        "loongarch64-linux-musl",
        "m68k-linux-gnu",
        "m68k-linux-musl",
        "mips-linux-gnueabi",
        "mips-linux-gnueabihf",
        "mips-linux-musleabi",
        "mips-linux-musleabihf",
        "mips64-linux-gnuabi64",
        "mips64-linux-gnuabin32",
        "mips64-linux-muslabi64",
        "mips64el-linux-gnuabi64",
        "mips64el-linux-gnuabin32",
        "mips64el-linux-muslabi64",
        "mipsel-linux-gnueabi",
        "mipsel-linux-gnueabihf",
        "mipsel-linux-musleabi",
        "mipsel-linux-musleabihf",
        "native",
        "native-linux-gnu",
        "native-linux-musl",
        "native-macos",
        "native-native",
        "native-native-msvc",
        "native-windows-gnu",
        "native-windows-msvc",
        "powerpc-linux-gnueabi",
        "powerpc-linux-gnueabihf",
        "powerpc-linux-musleabi",
        "powerpc-linux-musleabihf",
        "powerpc64-linux-gnu",
        "powerpc64-linux-musl",
        "powerpc64le-linux-gnu",
        "powerpc64le-linux-musl",
        "riscv32-freestanding",
        "riscv32-linux-gnu",
        "riscv32-linux-musl",
        "riscv64-freestanding",
        "riscv64-linux-gnu",
        "riscv64-linux-musl",
        "s390x-linux-gnu",
        "s390x-linux-musl",
        "sparc-linux-gnu",
        "sparc64-linux-gnu",
        "thumb-linux-musleabi",
        "thumb-linux-musleabihf",
        "wasm32-emscripten",
        "wasm32-freestanding",
        "wasm32-wasi",
        "wasm32-wasi-musl",
        "x86-linux-gnu",
        "x86-linux-musl",
        "x86-windows-gnu",
        "x86-windows-msvc",
        "x86_64-freestanding",
        "x86_64-ios",
        "x86_64-linux-gnu",
        "x86_64-linux-gnux32",
        "x86_64-linux-musl",
        "x86_64-macos",
        "x86_64-macos-none",
        "x86_64-windows-gnu",
        "x86_64-windows-msvc",
    },
)

_RISCV_PREFIX = re.compile(r"^(riscv32|riscv64)[a-z0-9_]*$")
_ARM_PREFIX = re.compile(r"^armv[5-8][a-z0-9_.]*$")
_WASI_ALIASES = {"wasip1": "wasi", "wasip2": "wasi"}


@dataclass(frozen=True, slots=True)
class NormalizedTriple:
    triple: str
    warnings: tuple[str, ...] = ()


def normalize_triple(triple: str) -> NormalizedTriple:
    warnings: list[str] = []
    result = _rename_arch_family(triple, warnings)
    result = _fold_wasm_abi(result, warnings)
    # Dropping an unknown vendor can expose an Apple prefix, so fold both until stable.
    folded = None
    while folded != result:
        folded = result
        result = _fold_unknown_vendor(_fold_apple_vendor(result))
    if result and result not in SUPPORTED_TRIPLES:
        warnings.append(
            f"Target triple {result!r} is not in zig's list of known targets; "
            "passing it through unchanged.",
        )
    return NormalizedTriple(triple=result, warnings=tuple(warnings))


def _rename_arch_family(triple: str, warnings: list[str]) -> str:
    if not (triple.startswith(("riscv32", "riscv64")) or _ARM_PREFIX.match(triple.split("-")[0])):
        return triple
    arch, sep, rest = triple.partition("-")
    if not sep:
        warnings.append(f"Malformed target triple {triple!r}: expected <arch>-<os>[-<abi>].")
        return triple
    riscv = _RISCV_PREFIX.match(arch)
    if riscv is not None:
        return f"{riscv.group(1)}-{rest}"
    if _ARM_PREFIX.match(arch):
        return f"arm-{rest}"
    return triple


def _fold_wasm_abi(triple: str, warnings: list[str]) -> str:
    if not triple.startswith("wasm32-"):
        return triple
    parts = triple.split("-")
    if any(not part for part in parts):
        warnings.append(f"Malformed WebAssembly triple {triple!r}: empty component.")
        return triple
    rest = [part for part in parts[1:] if part != "unknown"]
    if rest and rest[-1] == "wasm":
        rest.pop()
    if "emscripten" in rest:
        return "wasm32-emscripten"
    if not rest or rest[0] in ("freestanding", "none"):
        return "wasm32-freestanding"
    rest = [_WASI_ALIASES.get(part, part) for part in rest]
    return "-".join(["wasm32", *rest])


def _fold_apple_vendor(triple: str) -> str:
    if triple.startswith("arm64-apple"):
        return "aarch64" + triple[len("arm64-apple") :]
    if triple.startswith("x86_64-apple"):
        return "x86_64" + triple[len("x86_64-apple") :]
    return triple


def _fold_unknown_vendor(triple: str) -> str:
    # Repeat until stable: "a-unknown-unknown-unknown" folds in two steps.
    while True:
        parts = triple.split("-unknown-")
        if triple.endswith("-unknown-unknown"):
            triple = triple[: -len("-unknown-unknown")] + "-freestanding"
        elif len(parts) == 2:
            triple = f"{parts[0]}-{parts[1]}"
        else:
            return triple


def triple_arch(triple: str) -> str:
    return triple.split("-", 1)[0]


def is_msvc(triple: str) -> bool:
    return triple.endswith("msvc")
