"""Tests for the dayplan command line."""

from datetime import date
from pathlib import Path

import pytest

from dayplan import cli
from dayplan.plan import Plan

PLAN = (
    "# 03/14/2024\n"
    "Thursday\n"
    "\n"
    "## Tasks\n"
    "- **Personal**\n"
    "  - [ ] Buy milk\n"
    "  - [x] Call bank\n"
    "\n"
    "## Notes\n"
    "\n"
    "Remember the umbrella.\n"
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path: Path):
    for name in ("PLANNER_DIR", "PLANNER_EDITOR", "VISUAL", "EDITOR", "PLANNER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setattr(cli, "_today", lambda: date(2024, 3, 15))


def _write_plan(root: Path, name: str = "2024.03.14.plan.md", text: str = PLAN) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    path = root / name
    path.write_text(text, encoding="utf-8")
    return path


def test_view_prints_plan(tmp_path: Path, capsys) -> None:
    _write_plan(tmp_path)

    code = cli.main(["--dir", str(tmp_path), "view", "--date", "2024-03-14"])

    assert code == 0
    assert capsys.readouterr().out == PLAN


def test_view_canonical(tmp_path: Path, capsys) -> None:
    _write_plan(tmp_path)

    code = cli.main(["--dir", str(tmp_path), "view", "--date", "2024-03-14", "--canonical"])

    assert code == 0
    assert capsys.readouterr().out == Plan.from_markdown(PLAN).to_markdown()


def test_view_section(tmp_path: Path, capsys) -> None:
    _write_plan(tmp_path)

    code = cli.main(["--dir", str(tmp_path), "view", "--date", "2024-03-14", "--section", "notes"])

    assert code == 0
    assert capsys.readouterr().out == "Remember the umbrella.\n"


def test_view_missing_section(tmp_path: Path, capsys) -> None:
    _write_plan(tmp_path)

    code = cli.main(["--dir", str(tmp_path), "view", "--date", "2024-03-14", "--section", "schedule"])

    assert code == 1
    assert "no 'schedule' section" in capsys.readouterr().err


def test_view_defaults_to_today_and_reports_missing(tmp_path: Path, capsys) -> None:
    _write_plan(tmp_path)

    code = cli.main(["--dir", str(tmp_path), "view"])

    assert code == 1
    assert "no plan for 2024-03-15" in capsys.readouterr().err


def test_view_canonical_reports_parse_errors(tmp_path: Path, capsys) -> None:
    _write_plan(tmp_path, text="# not a date\n")

    code = cli.main(["--dir", str(tmp_path), "view", "--date", "2024-03-14", "--canonical"])

    assert code == 1
    assert "[dayplan] error: Could not parse plan date" in capsys.readouterr().err


def test_edit_copies_forward_and_opens_editor(tmp_path: Path, monkeypatch) -> None:
    _write_plan(tmp_path)
    opened = []
    monkeypatch.setattr(cli, "open_in_editor", lambda path, editor: opened.append((path, editor)))

    code = cli.main(["--dir", str(tmp_path), "--editor", "nano"])

    today = tmp_path / "2024.03.15.plan.md"
    assert code == 0
    assert opened == [(today, "nano")]
    plan = Plan.from_markdown(today.read_text(encoding="utf-8"))
    assert plan.date == date(2024, 3, 15)
    assert [task.description for task in plan.tasks.categories[0].tasks] == ["Buy milk"]


def test_edit_reports_editor_failure(tmp_path: Path, capsys) -> None:
    code = cli.main(["--dir", str(tmp_path), "--editor", "definitely-not-an-editor-4f2a", "edit"])

    assert code == 1
    assert "Editor not found" in capsys.readouterr().err
    assert (tmp_path / "2024.03.15.plan.md").exists()


def test_new_writes_template(tmp_path: Path, capsys) -> None:
    code = cli.main(["--dir", str(tmp_path), "new", "--date", "2024-03-18"])

    path = tmp_path / "2024.03.18.plan.md"
    assert code == 0
    assert capsys.readouterr().out.strip() == str(path)
    assert Plan.from_markdown(path.read_text(encoding="utf-8")) == Plan.template(date(2024, 3, 18))


def test_new_refuses_to_overwrite(tmp_path: Path, capsys) -> None:
    path = _write_plan(tmp_path, name="2024.03.15.plan.md")

    assert cli.main(["--dir", str(tmp_path), "new"]) == 1
    assert "already exists" in capsys.readouterr().err
    assert path.read_text(encoding="utf-8") == PLAN

    assert cli.main(["--dir", str(tmp_path), "new", "--force"]) == 0
    assert Plan.from_markdown(path.read_text(encoding="utf-8")) == Plan.template(date(2024, 3, 15))


def test_invalid_settings_are_reported(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("PLANNER_LOG_LEVEL", "chatty")

    assert cli.main(["--dir", str(tmp_path), "view"]) == 1
    assert "invalid settings" in capsys.readouterr().err


def test_invalid_date_argument(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--dir", str(tmp_path), "view", "--date", "15/03/2024"])
    assert excinfo.value.code == 2
