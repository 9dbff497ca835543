"""Check whether zig cc and ldc2 share an LLVM release before enabling LTO."""

from zcc.errors import ToolchainError
from zcc.llvmversion import has_matching_llvm_versions


def main() -> int:
    try:
        matching = has_matching_llvm_versions()
    except ToolchainError as exc:
        print(f"error: {exc}")
        return 1
    print("LTO: enabled" if matching else "LTO: disabled (LLVM versions differ)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
