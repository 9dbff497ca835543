"""Print the zig commands generated for triples from other toolchains."""

from zcc import Builder

TRIPLES = (
    "x86_64-unknown-linux-gnu",
    "arm64-apple-macos",
    "armv7-unknown-linux-gnueabihf",
    "riscv64gc-unknown-linux-gnu",
    "wasm32-unknown-unknown-wasm",
    "x86_64-pc-windows-msvc",
)


def show_commands() -> None:
    for triple in TRIPLES:
        builder = Builder().file("main.cpp").add_arg("-O2").set_target_triple(triple)
        print(" ".join(builder.build()))
        for warning in builder.warnings:
            print(f"  warning: {warning}")


if __name__ == "__main__":
    show_commands()
