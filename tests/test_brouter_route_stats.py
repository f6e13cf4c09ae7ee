import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from route_tools.route_statistics import brouter_route_stats
from route_tools.route_statistics.route_records import ROUTE_COLUMNS

FIXTURE_PATH = Path(__file__).parent / "fixtures" / "route_segments.tsv"


def _run(argv: list[str]) -> None:
    with patch.object(sys, "argv", ["brouter-route-stats"] + argv):
        brouter_route_stats.main()


def test_full_report_from_fixture(capsys) -> None:
    """Integration test: the fixture route produces all seven sections."""
    _run([str(FIXTURE_PATH)])
    out = capsys.readouterr().out
    lines = out.splitlines()

    assert "  Name    : brouter-route-stats" in lines
    assert f"name = {FIXTURE_PATH}" in lines
    assert f"size = {FIXTURE_PATH.stat().st_size} byte" in lines

    # Highway types
    assert f"{'highway=track (grade2)':<28}   20.0 %     100 m" in lines
    assert f"{'highway=residential':<28}   60.0 %     300 m" in lines
    assert f"{'':<28}    2.0 %      10 m" in lines
    # Altitude
    assert f"{'uphill':<38}    +60 m" in lines
    assert f"{'downhill':<38}    -30 m" in lines
    # Paved split
    assert f"{'paved':<28}   62.0 %     310 m" in lines
    assert f"{'unpaved':<28}   38.0 %     190 m" in lines
    # sac_scale uses the wide layout
    assert f"{'sac_scale=hiking':<38}    8.0 %      40 m" in lines
    assert lines.count(f"{'total':<28}  100.0 %     500 m") == 5
    assert lines.count(f"{'total':<38}  100.0 %     500 m") == 1


def test_file_name_is_echoed_as_given(monkeypatch, capsys) -> None:
    monkeypatch.chdir(FIXTURE_PATH.parent)

    _run(["." + os.sep + FIXTURE_PATH.name])
    lines = capsys.readouterr().out.splitlines()

    assert f"name = .{os.sep}{FIXTURE_PATH.name}" in lines


def test_header_only_file_reports_zero(tmp_path: Path, capsys) -> None:
    path = tmp_path / "header_only.tsv"
    path.write_text("\t".join(ROUTE_COLUMNS) + "\n", encoding="utf-8")

    _run([str(path)])
    lines = capsys.readouterr().out.splitlines()

    assert f"{'paved':<28}    0.0 %       0 m" in lines
    assert f"{'unpaved':<28}    0.0 %       0 m" in lines
    assert lines.count(f"{'total':<28}    0.0 %       0 m") == 5
    assert f"{'height difference':<38}      0 m" in lines


def test_missing_file_exits_with_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _run([str(tmp_path / "missing.tsv")])

    assert "input file not found" in str(excinfo.value.code)


def test_malformed_file_exits_with_error(tmp_path: Path) -> None:
    path = tmp_path / "narrow.tsv"
    path.write_text("a\tb\n1\t2\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        _run([str(path)])

    assert str(excinfo.value.code).startswith("ERROR:")


def test_short_row_exits_with_error(tmp_path: Path) -> None:
    path = tmp_path / "short_row.tsv"
    path.write_text("\t".join(ROUTE_COLUMNS) + "\n1\t2\t10\t5\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        _run([str(path)])

    assert "fewer fields than the header" in str(excinfo.value.code)


@pytest.mark.parametrize("argv", [[], ["one.tsv", "two.tsv"]])
def test_wrong_argument_count_prints_usage(argv: list[str], capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _run(argv)

    assert excinfo.value.code != 0
    assert "usage:" in capsys.readouterr().err


def test_main_accepts_explicit_argv(capsys) -> None:
    brouter_route_stats.main([str(FIXTURE_PATH), "--verbose"])

    assert "Hiking difficulties (sac_scale):" in capsys.readouterr().out
