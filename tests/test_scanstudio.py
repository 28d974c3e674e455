import pytest

from carmenlog.scanstudio import convert_scanstudio, main

SCAN = ["RobotPos: 1000 2000 0.5", "NumPoints: 2", "DATA", "0 1500", "1 2500"]
EXPECTED = "FLASER 2 1.5 2.5 1 2 0.50 0 0 0 pippo 0"


def test_convert_single_scan():
    assert convert_scanstudio(SCAN) == [EXPECTED]


def test_pairs_may_share_a_line():
    lines = ["RobotPos: 1000 2000 0.5", "NumPoints: 2", "DATA", "0 1500 1 2500"]
    assert convert_scanstudio(lines) == convert_scanstudio(SCAN)


def test_truncated_data_has_no_header():
    lines = ["NumPoints: 2", "DATA", "0 1500"]
    result = convert_scanstudio(lines)
    assert len(result) == 1
    assert not result[0].startswith("FLASER")


def test_data_before_numpoints_raises():
    with pytest.raises(ValueError):
        convert_scanstudio(["DATA", "0 1"])


def test_too_many_points_raises():
    with pytest.raises(ValueError):
        convert_scanstudio(["NumPoints: 20000"])


def test_main_round_trip(tmp_path):
    source = tmp_path / "scan.txt"
    source.write_text("\n".join(SCAN) + "\n")
    target = tmp_path / "out.log"
    assert main([str(source), str(target)]) == 0
    assert target.read_text() == EXPECTED + "\n"
    assert main([str(source)]) == 1