import json
from pathlib import Path
import pytest
from csvigo.__main__ import main

def _seed(tmp: Path) -> Path:
    p = tmp / "people.csv"
    p.write_bytes(b"id,name\r\n1,alice\r\n2,bob\r\n")
    return p

@pytest.mark.e2e
def test_cli_json_head(tmp_path: Path, capsys):
    path = _seed(tmp_path)
    rc = main([str(path), "--json", "--head", "2"])
    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data["lines"] == 3
    assert [r["text"] for r in data["rows"]] == ["id,name", "1,alice"]
    assert data["rows"][1]["offset"] == 9

@pytest.mark.e2e
def test_cli_fields_for_selected_lines(tmp_path: Path, capsys):
    path = _seed(tmp_path)
    rc = main([str(path), "--line", "2", "0", "--fields", "--json"])
    assert rc == 0
    rows = json.loads(capsys.readouterr().out)["rows"]
    assert rows[0]["fields"] == ["2", "bob"]
    assert rows[1]["fields"] == ["id", "name"]

@pytest.mark.e2e
def test_cli_save_then_load(tmp_path: Path, capsys):
    path = _seed(tmp_path)
    assert main([str(path), "--save"]) == 0
    assert (tmp_path / "people.csv.lix").exists()
    capsys.readouterr()

    assert main([str(path), "--load"]) == 0
    out = capsys.readouterr().out
    assert "3 lines" in out
    assert "1,alice" in out

@pytest.mark.e2e
def test_cli_reports_errors(tmp_path: Path, capsys):
    bad = tmp_path / "mac.csv"; bad.write_bytes(b"a\rb\rc\n")
    assert main([str(bad)]) == 1
    assert "line count mismatch" in capsys.readouterr().err

    path = _seed(tmp_path)
    assert main([str(path), "--line", "99"]) == 1
    assert main([str(tmp_path / "missing.csv")]) == 1
