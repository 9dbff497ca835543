import pytest

from zcc.flags import (
    EXPORT_DYNAMIC,
    SKIP_FLAGS,
    is_compiler_flag,
    is_cxx_source,
    is_source_file,
    process_flag,
    target_from_flag,
)


@pytest.mark.parametrize("flag", sorted(SKIP_FLAGS))
def test_skip_list_flags_produce_no_tokens(flag: str) -> None:
    assert process_flag(flag) == ()


@pytest.mark.parametrize("flag", ["-group", "--start-group", "-Wl,--end-group", "--whole-group"])
def test_group_flags_expand_to_start_and_end_group(flag: str) -> None:
    assert process_flag(flag) == ("-Wl,--start-group", "-Wl,--end-group")


def test_dynamic_suffix_becomes_export_dynamic() -> None:
    assert process_flag("--export-dynamic") == (EXPORT_DYNAMIC,)
    assert process_flag("-dynamic") == (EXPORT_DYNAMIC,)


@pytest.mark.parametrize("flag", ["-Wall", "-lm", "-std=c99", "--help", "-h", "-O2"])
def test_other_flags_pass_through(flag: str) -> None:
    assert process_flag(flag) == (flag,)


def test_compiler_flag_classification_separates_linker_flags() -> None:
    assert is_compiler_flag("-Wall")
    assert is_compiler_flag("-std=c++11")
    assert not is_compiler_flag("-Wl,-rpath,/opt/lib")
    for token in process_flag("-group") + process_flag("-dynamic"):
        assert not is_compiler_flag(token)


@pytest.mark.parametrize(
    ("token", "source", "cxx"),
    [
        ("main.c", True, False),
        ("MAIN.C", True, False),
        ("app.cpp", True, True),
        ("app.cxx", True, True),
        ("app.cc", True, True),
        ("app.c++", True, True),
        ("start.s", True, False),
        ("start.S", True, False),
        ("obj/util.o", True, False),
        ("util.obj", True, False),
        ("libfoo.a", False, False),
        ("-Wall", False, False),
    ],
)
def test_source_classification_by_extension(token: str, source: bool, cxx: bool) -> None:
    assert is_source_file(token) is source
    assert is_cxx_source(token) is cxx


def test_target_from_flag_extracts_equals_form_only() -> None:
    assert target_from_flag("--target=x86_64-linux-gnu") == "x86_64-linux-gnu"
    assert target_from_flag("-target") is None
    assert target_from_flag("-Wall") is None
