"""Build the C++ FFI sample as a shared library.

On Windows the MSVC ABI has no separate C++ driver, so the library goes
through ``zig build-lib``; elsewhere ``zig c++`` links it directly.
"""

import sys
from pathlib import Path

from zcc import Builder


def build_ffi(source_dir: Path, build_dir: Path) -> int:
    build_dir.mkdir(parents=True, exist_ok=True)
    if sys.platform == "win32":
        builder = Builder().set_target_triple("native-native-msvc").file(source_dir / "ffi.cc")
        return builder.build_library(build_dir / "cffi.lib").status

    lib = "libcffi.dylib" if sys.platform == "darwin" else "libcffi.so"
    builder = Builder().add_args(["-shared", "-fPIC", "-s", "-O2", "-o", str(build_dir / lib)])
    return builder.file(source_dir / "ffi.cc").execute().status


if __name__ == "__main__":
    raise SystemExit(build_ffi(Path("source"), Path("build")))
