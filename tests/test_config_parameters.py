from __future__ import annotations

from pathlib import Path

import pytest

from fsi_driver.config import (
    LoadStatus,
    ParameterType,
    dump_parameters,
    load_parameters,
    rewrite_parameter,
)
from fsi_driver.errors import (
    DuplicateParameterError,
    ParameterFormatError,
    UnknownParameterError,
)


def test_load_parameters_types_values(write_input) -> None:
    loaded = load_parameters(write_input())

    assert loaded.status is LoadStatus.OK
    table = loaded.table
    assert table.get_float("smChHeight") == pytest.approx(0.003)
    assert table.get_int("numOfPlates") == 1
    assert table.get_string("CFDOrFSI") == "FSI"
    assert table.type_of("avgChVelocity") is ParameterType.FLOAT
    assert len(table) == 16


def test_load_parameters_missing_file_is_reported(tmp_path: Path) -> None:
    loaded = load_parameters(tmp_path / "absent.txt")

    assert loaded.missing
    assert len(loaded.table) == 0


def test_load_parameters_strips_whitespace_inside_lines(tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_text("  # indented comment\n\n   \nplate Name : string : Flat Plate : note\n")

    table = load_parameters(path).table

    assert table.get_string("plateName") == "FlatPlate"


@pytest.mark.parametrize(
    "line",
    [
        "smChHeight:float\n",
        "smChHeight:float:abc:m\n",
        "numOfPlates:integer:2.5:-\n",
        "smChHeight:double:0.1:m\n",
    ],
)
def test_load_parameters_rejects_malformed_lines(tmp_path: Path, line: str) -> None:
    path = tmp_path / "input.txt"
    path.write_text("# header\n" + line)

    with pytest.raises(ParameterFormatError) as info:
        load_parameters(path)
    assert info.value.line_no == 2


def test_load_parameters_rejects_duplicate_names(tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_text("runStar:string:yes:-\nrunStar:float:1.0:-\n")

    with pytest.raises(DuplicateParameterError) as info:
        load_parameters(path)
    assert info.value.name == "runStar"
    assert info.value.first_line == 1


def test_typed_getters_name_the_missing_key(write_input) -> None:
    table = load_parameters(write_input()).table

    with pytest.raises(UnknownParameterError) as info:
        table.get_int("smChHeight")
    assert "smChHeight" in str(info.value)
    assert "integer" in str(info.value)
    with pytest.raises(KeyError):
        table.get_string("couplingScheme")


def test_dump_parameters_round_trips(write_input, tmp_path: Path) -> None:
    original = load_parameters(write_input()).table
    copy_path = tmp_path / "copy.txt"
    copy_path.write_text(dump_parameters(original))

    reloaded = load_parameters(copy_path).table

    assert sorted(reloaded.items()) == sorted(original.items())


def test_rewrite_parameter_only_touches_target_value(write_input) -> None:
    path = write_input()
    before = path.read_text().splitlines()

    rewrite_parameter(path, "avgChVelocity", "1.5")

    after = path.read_bytes().decode().split("\r\n")
    assert after[-1] == ""
    after = after[:-1]
    assert len(after) == len(before)
    changed = [(old, new) for old, new in zip(before, after) if old != new]
    assert changed == [("avgChVelocity:\tfloat:\t\t1.0:\t-", "avgChVelocity:\tfloat:\t\t1.5:\t-")]
    assert load_parameters(path).table.get_float("avgChVelocity") == 1.5


def test_rewrite_parameter_is_idempotent(write_input) -> None:
    path = write_input()

    rewrite_parameter(path, "stepSize", "0.25")
    first = path.read_bytes()
    rewrite_parameter(path, "stepSize", "0.25")

    assert path.read_bytes() == first


def test_rewrite_parameter_matches_whole_key(tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_text("avgChVelocityScale:float:2.0:-\navgChVelocity:float:1.0:-\n")

    rewrite_parameter(path, "avgChVelocity", "3.0")

    table = load_parameters(path).table
    assert table.get_float("avgChVelocityScale") == 2.0
    assert table.get_float("avgChVelocity") == 3.0


def test_rewrite_parameter_unknown_name_leaves_file(write_input) -> None:
    path = write_input()
    before = path.read_bytes()

    with pytest.raises(UnknownParameterError):
        rewrite_parameter(path, "wallHeight", "1.0")
    assert path.read_bytes() == before


def test_load_parameters_ignores_byte_order_mark(tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_bytes(b"\xef\xbb\xbf# saved by Notepad\r\nrunStar:string:yes:-\r\n")
    first_key = tmp_path / "first_key.txt"
    first_key.write_bytes(b"\xef\xbb\xbfrunStar:string:yes:-\r\n")

    assert load_parameters(path).table.get_string("runStar") == "yes"
    assert load_parameters(first_key).table.get_string("runStar") == "yes"


def test_rewrite_parameter_keeps_byte_order_mark(tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_bytes(b"\xef\xbb\xbfstepSize:float:0.5:-\r\n")

    rewrite_parameter(path, "stepSize", "0.25")

    assert path.read_bytes() == b"\xef\xbb\xbfstepSize:float:0.25:-\r\n"
    assert load_parameters(path).table.get_float("stepSize") == 0.25
