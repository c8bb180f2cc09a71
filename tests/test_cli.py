from __future__ import annotations

import json
from pathlib import Path

from conftest import make_package_bytes
from typer.testing import CliRunner

from wbpart import __version__, open_file
from wbpart.cli.main import app


def _write_sample(tmp_path: Path) -> Path:
    path = tmp_path / "sample.xlsx"
    path.write_bytes(make_package_bytes())
    return path


def test_version() -> None:
    result = CliRunner().invoke(app, ["version"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == __version__


def test_set_props_then_props_json(tmp_path: Path) -> None:
    runner = CliRunner()
    path = _write_sample(tmp_path)

    result = runner.invoke(app, ["set-props", str(path), "--date1904", "--code-name", "Book"])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["props", str(path)])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"code_name": "Book", "date1904": True, "filter_privacy": False}


def test_set_props_out_leaves_source_untouched(tmp_path: Path) -> None:
    runner = CliRunner()
    path = _write_sample(tmp_path)
    original = path.read_bytes()
    out = tmp_path / "edited.xlsx"

    result = runner.invoke(app, ["set-props", str(path), "--no-date1904", "--out", str(out)])
    assert result.exit_code == 0, result.output

    assert path.read_bytes() == original
    assert open_file(out).get_workbook_props().date1904 is False


def test_protect_and_unprotect(tmp_path: Path) -> None:
    runner = CliRunner()
    path = _write_sample(tmp_path)

    result = runner.invoke(
        app,
        ["protect", str(path), "--password", "pw", "--algorithm", "sha-256", "--lock-structure", "--spin-count", "10"],
    )
    assert result.exit_code == 0, result.output
    p = open_file(path).workbook().workbook_protection
    assert (p.algorithm_name, p.spin_count, p.lock_structure) == ("SHA-256", 10, True)

    result = runner.invoke(app, ["unprotect", str(path), "--password", "wrong"])
    assert result.exit_code == 1
    assert "does not match" in result.output
    assert open_file(path).workbook().workbook_protection is not None

    result = runner.invoke(app, ["unprotect", str(path), "--password", "pw"])
    assert result.exit_code == 0, result.output
    assert open_file(path).workbook().workbook_protection is None


def test_protect_unknown_algorithm_reports_error(tmp_path: Path) -> None:
    path = _write_sample(tmp_path)
    result = CliRunner().invoke(app, ["protect", str(path), "--password", "pw", "--algorithm", "CRC32"])
    assert result.exit_code == 1
    assert "unsupported hash algorithm" in result.output


def test_sheets_listing(tmp_path: Path) -> None:
    path = _write_sample(tmp_path)
    result = CliRunner().invoke(app, ["sheets", str(path)])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["1\trId1\tSheet1", "2\trId2\tHidden  (hidden)"]


def test_missing_file_is_usage_error(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["props", str(tmp_path / "absent.xlsx")])
    assert result.exit_code == 2
