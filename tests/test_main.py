from __future__ import annotations

import json
from pathlib import Path

import pytest

from routines.core.routine_parse import parse_routine
from routines.main import build_preview, main

pytestmark = pytest.mark.usefixtures("restore_root_logger")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ("LOG_LEVEL", "LOG_FILE", "ROUTINES_PEOPLE_PATH", "APP_ENV"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def people_file(tmp_path: Path) -> Path:
    path = tmp_path / "people.json"
    path.write_text(json.dumps([{"id": "iris-id", "name": "Iris"}]), encoding="utf-8")
    return path


def test_build_preview_chips(people, today) -> None:
    preview = build_preview(parse_routine("iris walks jax every weekday at 7am", people), today=today)

    assert preview["action"] == "walks jax"
    assert preview["recurrence"] == {"type": "weekdays"}
    assert preview["chips"] == ["Weekdays", "7 AM", "Iris"]
    assert preview["valid"] is True
    assert preview["record"]["default_assignee"] == "iris-id"


def test_build_preview_uses_time_of_day_when_no_clock(today) -> None:
    preview = build_preview(parse_routine("stretch every other day evening"), today=today)

    assert preview["recurrence"] == {"type": "daily", "interval": 2}
    assert preview["chips"] == ["Every other day", "evening"]
    assert preview["record"]["recurrence_pattern"]["start_date"] == "2026-03-02"


def test_build_preview_lists_weekly_days(today) -> None:
    preview = build_preview(parse_routine("gym monday and wednesday at 6pm"), today=today)

    assert preview["recurrence"] == {"type": "weekly", "days": [1, 3]}
    assert preview["chips"] == ["Every Mon, Wed", "6 PM"]


def test_main_prints_preview(capsys, people_file: Path) -> None:
    code = main(["iris walks jax every weekday at 7am", "--people", str(people_file), "--today", "2026-03-02"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["assignee"] == "iris-id"
    assert payload["time"] == "07:00"
    assert payload["record"]["name"] == "walks jax"


def test_main_reads_people_path_from_env(capsys, monkeypatch, people_file: Path) -> None:
    monkeypatch.setenv("ROUTINES_PEOPLE_PATH", str(people_file))

    code = main(["Iris feeds the cat daily"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["assignee_name"] == "Iris"


def test_main_returns_one_for_invalid_routine(capsys) -> None:
    code = main(["every day at 7am"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 1
    assert payload["valid"] is False
    assert payload["record"] is None


def test_main_returns_two_for_bad_people_file(capsys, tmp_path: Path) -> None:
    path = tmp_path / "people.json"
    path.write_text("[not json", encoding="utf-8")

    code = main(["walk the dog", "--people", str(path)])

    assert code == 2
    assert capsys.readouterr().out == ""
