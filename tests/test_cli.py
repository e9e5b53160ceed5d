import json
from datetime import date
from types import SimpleNamespace

import pytest

import pledger.cli as cli
import pledger.periods as periods


@pytest.fixture
def ledger_dir(tmp_path, monkeypatch):
    """Ledger directory plus an isolated working directory and environment."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.delenv("PLEDGER_DIR", raising=False)
    monkeypatch.delenv("EDITOR", raising=False)
    monkeypatch.setattr(cli, "current_period", lambda: "2025-05")
    monkeypatch.setattr(periods, "_today", lambda: date(2025, 5, 31))

    ledgers = tmp_path / "ledgers"
    ledgers.mkdir()
    (ledgers / "2025-04.ledger").write_text(
        "C 2,000.00 salary #work\nD 800.00 rent #home\n", encoding="utf-8"
    )
    (ledgers / "2025-05.ledger").write_text(
        "# May\nC 100 #x\nD 50 #x\nC 20 #y\n", encoding="utf-8"
    )
    (ledgers / "2024-12.ledger").write_text("D 1.00 old #x\n", encoding="utf-8")
    return ledgers


def test_version(capsys) -> None:
    """--version prints the package version and exits cleanly."""
    assert cli.main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == f"pledger version {cli.__version__}"


def test_summary_of_current_month(ledger_dir, capsys) -> None:
    """Without a selection the current month is summarized."""
    assert cli.main([str(ledger_dir)]) == 0

    out = capsys.readouterr().out
    assert out.startswith("Ledger for 2025-05\n")
    assert "3 entries, totaling 01.20 in credits and 00.50 in debits" in out
    assert "for a net of 00.70 in credit" in out


def test_json_output_for_month_name(ledger_dir, capsys) -> None:
    """A month name selects that month of the current year."""
    assert cli.main([str(ledger_dir), "--date", "april", "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["date"] == "2025-04"
    assert data["entries"][0] == {
        "kind": "Credit",
        "amount": [2000, 0],
        "comment": "salary #work",
        "tags": ["#work"],
    }


def test_previous_month(ledger_dir, capsys) -> None:
    """-p selects the month before the current one."""
    assert cli.main([str(ledger_dir), "-p", "-j"]) == 0
    assert json.loads(capsys.readouterr().out)["date"] == "2025-04"


def test_all_and_year_selections(ledger_dir, capsys) -> None:
    """--all merges every ledger; --year keeps one year."""
    assert cli.main([str(ledger_dir), "--all", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["date"] == "*"
    assert len(data["entries"]) == 6

    assert cli.main([str(ledger_dir), "--year", "2025", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["date"] == "2025"
    assert len(data["entries"]) == 5


def test_tag_filter_adds_hash_prefix(ledger_dir, capsys) -> None:
    """Bare tag names given to -t get a leading '#'."""
    assert cli.main([str(ledger_dir), "-a", "-t", "x", "-t", "#home", "-j"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert [e["comment"] for e in data["entries"]] == ["old #x", "rent #home", "#x", "#x"]


def test_directory_from_environment(ledger_dir, monkeypatch, capsys) -> None:
    """PLEDGER_DIR is used when no directory argument is given."""
    monkeypatch.setenv("PLEDGER_DIR", str(ledger_dir))
    assert cli.main(["-j"]) == 0
    assert json.loads(capsys.readouterr().out)["date"] == "2025-05"


def test_directory_and_display_from_config(ledger_dir, capsys) -> None:
    """The config file supplies the directory and output mode."""
    config = ledger_dir.parent / "pledger.toml"
    config.write_text(
        '[ledger]\ndirectory = "ledgers"\n[display]\nmode = "json"\n', encoding="utf-8"
    )

    assert cli.main(["--config", str(config)]) == 0
    assert json.loads(capsys.readouterr().out)["date"] == "2025-05"


def test_missing_directory_is_a_configuration_error(ledger_dir, capsys) -> None:
    """No directory from any source is fatal."""
    assert cli.main([]) == 1
    assert capsys.readouterr().err.startswith("Fatal: No ledger directory given.")


def test_conflicting_selections_fail(ledger_dir, capsys) -> None:
    """Two selection flags at once are rejected."""
    assert cli.main([str(ledger_dir), "--all", "--previous"]) == 1
    assert "Fatal: conflicting ledger selections: all, previous" in capsys.readouterr().err


def test_missing_ledger_fails(ledger_dir, capsys) -> None:
    """A missing ledger file is reported with its path."""
    assert cli.main([str(ledger_dir), "-d", "2020-01"]) == 1
    assert "Fatal: missing requested ledger file:" in capsys.readouterr().err


def test_bad_month_fails(ledger_dir, capsys) -> None:
    """An out-of-range month number is fatal."""
    assert cli.main([str(ledger_dir), "-d", "13"]) == 1
    assert capsys.readouterr().err.strip() == "Fatal: month out of range: 13"


def test_parse_error_reports_location(ledger_dir, capsys) -> None:
    """Parse errors name the file, the line and the offset."""
    (ledger_dir / "2025-03.ledger").write_text("C 1.00 ok\nD 1.000 bad\n", encoding="utf-8")

    assert cli.main([str(ledger_dir), "-d", "2025-03"]) == 1
    assert capsys.readouterr().err.strip() == (
        "Fatal: parse error on line 2 of 2025-03.ledger: "
        "offset 6: more than two decimal places in value"
    )


def test_edit_runs_editor(ledger_dir, monkeypatch) -> None:
    """--edit splits EDITOR into argv and opens the ledger path."""
    calls = []

    def fake_run(command, check):
        calls.append(command)
        return SimpleNamespace(returncode=0)

    monkeypatch.setenv("EDITOR", "vim -n")
    monkeypatch.setattr(cli.subprocess, "run", fake_run)

    assert cli.main([str(ledger_dir), "-d", "june", "--edit"]) == 0
    assert calls == [["vim", "-n", str(ledger_dir / "2025-06.ledger")]]


def test_edit_failures(ledger_dir, monkeypatch, capsys) -> None:
    """Missing EDITOR, editor failure and non-single selections are fatal."""
    assert cli.main([str(ledger_dir), "--edit"]) == 1
    assert "EDITOR lookup failed" in capsys.readouterr().err

    monkeypatch.setenv("EDITOR", "vim")
    monkeypatch.setattr(
        cli.subprocess, "run", lambda command, check: SimpleNamespace(returncode=2)
    )
    assert cli.main([str(ledger_dir), "--edit"]) == 1
    assert "EDITOR exited with: 2" in capsys.readouterr().err

    assert cli.main([str(ledger_dir), "--all", "--edit"]) == 1
    assert "--edit requires a single ledger selection" in capsys.readouterr().err
