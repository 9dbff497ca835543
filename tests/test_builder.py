from pathlib import Path

import pytest

from zcc import BuildConfig, Builder, Mode


def test_skipped_flags_leave_bare_prefix() -> None:
    builder = Builder().add_arg("--no-as-needed").add_arg("--exclude-libs").add_arg("/nologo")
    assert builder.build() == ["zig", "cc"]


def test_empty_builder_has_no_hardening_flag() -> None:
    assert Builder().build() == ["zig", "cc"]


def test_group_flag_rewrite_triggers_hardening() -> None:
    builder = Builder().add_arg("-group")
    assert builder.build() == [
        "zig",
        "cc",
        "-Wl,--start-group",
        "-Wl,--end-group",
        "-fno-sanitize=all",
    ]


@pytest.mark.parametrize("flag", ["-lm", "--help", "-h"])
def test_single_argument_is_not_hardened(flag: str) -> None:
    assert Builder().add_arg(flag).build() == ["zig", "cc", flag]


def test_triple_and_cpu_are_appended_after_sources() -> None:
    builder = Builder().set_target_triple("arm64-apple-macos").set_cpu("generic")
    assert builder.build() == [
        "zig",
        "cc",
        "-target",
        "aarch64-macos",
        "-mcpu=generic",
        "-fno-sanitize=all",
    ]


def test_cpp_file_switches_to_cxx_mode() -> None:
    builder = Builder().file("test.cpp")
    assert builder.mode is Mode.CXX
    assert builder.build() == ["zig", "c++", "test.cpp"]


def test_cxx_mode_applies_to_flags_added_before_the_file() -> None:
    builder = Builder().add_arg("-some-flag").file("test.cpp")
    assert builder.build() == ["zig", "c++", "-some-flag", "test.cpp", "-fno-sanitize=all"]


def test_flags_precede_sources_in_command() -> None:
    builder = Builder().file("test.c").add_arg("-Wall").add_arg("-std=c99").add_arg("-h")
    assert builder.build() == [
        "zig",
        "cc",
        "-Wall",
        "-std=c99",
        "-h",
        "test.c",
        "-fno-sanitize=all",
    ]


def test_wasm_triple_is_folded_in_command() -> None:
    builder = Builder().set_target_triple("wasm32-unknown-unknown-wasm")
    assert builder.build() == ["zig", "cc", "-target", "wasm32-freestanding", "-fno-sanitize=all"]


def test_versioned_arm_triple_is_collapsed_in_command() -> None:
    command = Builder().set_target_triple("armv5te-linux-gnu").build()
    assert command[command.index("-target") + 1] == "arm-linux-gnu"


def test_msvc_triple_keeps_c_mode() -> None:
    builder = Builder().set_target_triple("x86_64-windows-msvc").file("test.cc")
    assert builder.mode is Mode.C
    assert builder.build() == [
        "zig",
        "cc",
        "test.cc",
        "-target",
        "x86_64-windows-msvc",
        "-fno-sanitize=all",
    ]


def test_msvc_triple_set_after_cpp_file_forces_c_mode() -> None:
    builder = Builder().file("test.cpp").set_target_triple("native-windows-msvc")
    assert builder.mode is Mode.C
    assert builder.build()[1] == "cc"


def test_replacing_msvc_triple_restores_cxx_mode() -> None:
    builder = Builder().set_target_triple("x86_64-windows-msvc").file("test.cpp")
    builder.set_target_triple("x86_64-linux-gnu")
    assert builder.mode is Mode.CXX
    assert builder.build()[1] == "c++"


def test_mode_is_independent_of_call_order() -> None:
    first = Builder().file("a.cc").set_target_triple("x86_64-windows-msvc").add_arg("-O2")
    second = Builder().add_arg("-O2").set_target_triple("x86_64-windows-msvc").file("a.cc")
    assert first.build() == second.build()


def test_cpp_constructed_builder_starts_in_cxx_mode() -> None:
    assert Builder(use_cpp=True).build() == ["zig", "c++"]


def test_add_arg_redirects_sources_and_targets() -> None:
    builder = Builder().add_arg("main.cpp").add_arg("--target=x86_64-unknown-linux-gnu")
    assert builder.state.sources == ["main.cpp"]
    assert builder.state.flags == []
    assert builder.state.triple == "x86_64-linux-gnu"
    assert builder.mode is Mode.CXX


def test_add_args_consumes_target_and_output_values() -> None:
    builder = Builder().add_args(["-target", "arm64-apple-ios", "-o", "out.o", "-c", "-target"])
    assert builder.state.triple == "aarch64-ios"
    assert builder.state.flags == ["-o", "out.o", "-c"]
    assert builder.state.sources == []
    dropped = [record for record in builder.logger.records if record["level"] == "warning"]
    assert dropped and "-target" in dropped[0]["message"]


def test_files_accept_paths_and_ignore_unknown_extensions(tmp_path: Path) -> None:
    builder = Builder().files([tmp_path / "a.c", "b.s", "README.md", "obj/c.o"])
    assert builder.state.sources == [str(tmp_path / "a.c"), "b.s", "obj/c.o"]


def test_config_supplies_default_triple_cpu_and_executable() -> None:
    config = BuildConfig(zig="/opt/zig/zig", triple="x86_64-unknown-linux-musl", cpu="baseline")
    assert Builder(config=config).build() == [
        "/opt/zig/zig",
        "cc",
        "-target",
        "x86_64-linux-musl",
        "-mcpu=baseline",
        "-fno-sanitize=all",
    ]


def test_triple_warnings_accumulate_and_are_logged() -> None:
    builder = Builder().set_target_triple("riscv64gc").set_target_triple("x86_64-apple-darwin")
    assert len(builder.warnings) == 3
    logged = builder.logger.records_for_operation("set_target_triple")
    assert [r["message"] for r in logged if r["level"] == "warning"] == list(builder.warnings)


def test_build_is_deterministic() -> None:
    builder = Builder().file("a.c").add_arg("-Wall").set_target_triple("aarch64-linux-gnu")
    assert builder.build() == builder.build()


def test_empty_target_flag_leaves_triple_unset() -> None:
    builder = Builder().add_arg("--target=").file("a.c")
    assert builder.warnings == ()
    assert builder.build() == ["zig", "cc", "a.c"]
