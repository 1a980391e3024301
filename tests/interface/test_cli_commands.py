"""Tests for CLI commands: help, grades, sessions, stats, config and server."""

import json
import logging
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from ascend.interface.cli import app

runner = CliRunner()


@pytest.fixture
def logbook(mock_home, tmp_path):
    path = tmp_path / "log.json"
    path.write_text(
        json.dumps(
            {
                "sessions": [
                    {"id": "a", "discipline": "BOULDER", "grade": "V2", "date": "2025-01-02", "sent": True},
                    {"id": "b", "discipline": "BOULDER", "grade": "V6", "date": "2025-01-03", "sent": False, "notes": "Crimpy roof"},
                    {"id": "c", "discipline": "LEAD", "grade": "5.11a", "date": "2025-01-09", "sent": True},
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


def invoke(logbook, *args):
    return runner.invoke(app, ["--sessions-file", str(logbook), *args])


# --- Help ---


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "climbing logbook" in result.stdout
    assert "sessions" in result.stdout
    assert "stats" in result.stdout


# --- Grades ---


def test_grades_boulder():
    result = runner.invoke(app, ["grades", "BOULDER"])
    assert result.exit_code == 0
    lines = result.stdout.strip().splitlines()
    assert len(lines) == 18
    assert lines[0].split() == ["V0", "0"]
    assert lines[-1].split() == ["V17", "17"]


def test_grades_json_case_insensitive():
    result = runner.invoke(app, ["grades", "lead", "--json"])
    assert result.exit_code == 0
    labels = json.loads(result.stdout)
    assert labels[0] == "5.6"
    assert labels[4] == "5.10a"
    assert labels[-1] == "5.15d"


def test_grades_unknown_discipline():
    result = runner.invoke(app, ["grades", "SPEED"])
    assert result.exit_code != 0


# --- Sessions ---


def test_sessions_list_json(logbook):
    result = invoke(logbook, "sessions", "list", "--json")
    assert result.exit_code == 0
    assert [s["id"] for s in json.loads(result.stdout)] == ["a", "b", "c"]


def test_sessions_list_filters(logbook):
    result = invoke(logbook, "sessions", "list", "--discipline", "boulder", "--search", "roof")
    assert result.exit_code == 0
    assert "V6" in result.stdout
    assert "V2" not in result.stdout


def test_sessions_list_empty(mock_home, tmp_path):
    result = invoke(tmp_path / "empty.json", "sessions", "list")
    assert result.exit_code == 0
    assert "No sessions found" in result.stdout


def test_sessions_add(logbook):
    result = invoke(
        logbook,
        "sessions", "add",
        "--discipline", "TOPROPE",
        "--grade", "5.10d",
        "--date", "2025-02-01",
        "--sent",
        "--notes", "Smooth",
        "--json",
    )

    assert result.exit_code == 0, result.output
    created = json.loads(result.stdout)
    assert created["grade"] == "5.10d"
    assert created["sent"] is True

    stored = json.loads(logbook.read_text(encoding="utf-8"))["sessions"]
    assert stored[-1]["id"] == created["id"]


def test_sessions_add_defaults_to_today(logbook):
    from datetime import date

    result = invoke(logbook, "sessions", "add", "--discipline", "BOULDER", "--grade", "V1", "--json")
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["date"] == date.today().isoformat()


def test_sessions_add_rejects_cross_vocabulary(logbook):
    before = logbook.read_text(encoding="utf-8")

    result = invoke(
        logbook, "sessions", "add", "--discipline", "BOULDER", "--grade", "5.10a", "--date", "2025-01-01"
    )

    assert result.exit_code == 1
    assert "not valid for discipline BOULDER" in result.output
    assert logbook.read_text(encoding="utf-8") == before


def test_sessions_add_rejects_bad_date(logbook):
    result = invoke(
        logbook, "sessions", "add", "--discipline", "BOULDER", "--grade", "V1", "--date", "2025-13-01"
    )
    assert result.exit_code == 1
    assert "calendar date" in result.output


def test_sessions_update(logbook):
    result = invoke(logbook, "sessions", "update", "b", "--sent", "--clear-notes", "--json")

    assert result.exit_code == 0, result.output
    updated = json.loads(result.stdout)
    assert updated["sent"] is True
    assert "notes" not in updated


def test_sessions_update_requires_changes(logbook):
    result = invoke(logbook, "sessions", "update", "b")
    assert result.exit_code == 2


def test_sessions_update_unknown_id(logbook):
    result = invoke(logbook, "sessions", "update", "zzz", "--grade", "V3")
    assert result.exit_code == 1
    assert "Session not found" in result.output


def test_sessions_delete(logbook):
    result = invoke(logbook, "sessions", "delete", "a", "--force")
    assert result.exit_code == 0
    ids = [s["id"] for s in json.loads(logbook.read_text(encoding="utf-8"))["sessions"]]
    assert ids == ["b", "c"]


# --- Stats ---


def test_stats_overview(logbook):
    result = invoke(logbook, "stats", "overview", "--json")
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["total_sessions"] == 3
    assert data["sent_percentage"] == pytest.approx(2 / 3)


def test_stats_overview_no_data(mock_home, tmp_path):
    result = invoke(tmp_path / "empty.json", "stats", "overview")
    assert result.exit_code == 0
    assert "Total sessions:     0" in result.stdout
    assert "n/a" in result.stdout


def test_stats_disciplines_omits_absent(logbook):
    result = invoke(logbook, "stats", "disciplines", "--json")
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert set(data) == {"BOULDER", "LEAD"}
    assert data["BOULDER"]["average_difficulty"] == 4.0


def test_stats_highest(logbook):
    result = invoke(logbook, "stats", "highest", "--json")
    assert json.loads(result.stdout) == {"BOULDER": "V6", "LEAD": "5.11a", "TOPROPE": None}

    text = invoke(logbook, "stats", "highest")
    assert "TOPROPE  n/a" in text.stdout


def test_stats_average(logbook):
    result = invoke(logbook, "stats", "average", "--json")
    assert json.loads(result.stdout) == {"BOULDER": 4.0, "LEAD": 11.0, "TOPROPE": None}


def test_stats_progress_weekly_and_monthly(logbook):
    weekly = json.loads(invoke(logbook, "stats", "progress", "--json").stdout)
    monthly = json.loads(invoke(logbook, "stats", "progress", "--by", "month", "--json").stdout)

    assert [(b["key"], b["session_count"]) for b in weekly] == [("2025-W01", 2), ("2025-W02", 1)]
    assert [(b["key"], b["session_count"]) for b in monthly] == [("2025-01", 3)]


def test_stats_snapshot(logbook):
    result = invoke(logbook, "stats", "snapshot")
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["overview"]["total_sessions"] == 3
    assert data["average_grades"]["TOPROPE"] is None


def test_stats_corrupt_logbook(mock_home, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(
        '[{"discipline": "LEAD", "grade": "V4", "date": "2025-01-01", "sent": true}]',
        encoding="utf-8",
    )
    result = invoke(path, "stats", "overview")
    assert result.exit_code == 1
    assert "not valid for discipline LEAD" in result.output


# --- Config ---


def test_config_show(logbook):
    result = invoke(logbook, "config", "show")
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["backend"] == "file"
    assert data["sessions_file"] == str(logbook.resolve())


def test_config_show_masks_token(mock_home, monkeypatch):
    monkeypatch.setenv("ASCEND_API_TOKEN", "very-secret")
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    assert "very-secret" not in result.stdout


@pytest.fixture
def root_level():
    root = logging.getLogger()
    saved = root.level
    yield root
    root.setLevel(saved)


def test_verbosity_from_environment(mock_home, monkeypatch, root_level):
    monkeypatch.setenv("ASCEND_VERBOSE", "2")
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    assert root_level.level == logging.DEBUG

    monkeypatch.setenv("ASCEND_VERBOSE", "0")
    runner.invoke(app, ["config", "show"])
    assert root_level.level == logging.WARNING


def test_verbose_flag_beats_environment(mock_home, monkeypatch, root_level):
    monkeypatch.setenv("ASCEND_VERBOSE", "0")
    result = runner.invoke(app, ["-v", "config", "show"])
    assert result.exit_code == 0
    assert root_level.level == logging.DEBUG


def test_verbosity_from_config_file(mock_home, root_level):
    cfg_dir = mock_home / ".config/ascend"
    cfg_dir.mkdir(parents=True)
    (cfg_dir / "config.toml").write_text("verbose = 0\n", encoding="utf-8")

    runner.invoke(app, ["config", "show"])

    assert root_level.level == logging.WARNING


# --- Server ---


@patch("uvicorn.run")
def test_server_command(mock_run):
    result = runner.invoke(app, ["server", "--port", "9000"])
    assert result.exit_code == 0
    mock_run.assert_called_with("ascend.server:app", host="127.0.0.1", port=9000, reload=False)
