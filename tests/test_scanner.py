"""Tests for the top-level section scanner."""

from datetime import date, time

import pytest

from dayplan.document import bullet_list, heading, item, paragraph, text
from dayplan.errors import DateParseError, ScheduleLabelError
from dayplan.scanner import (
    ScanEffect,
    ScanState,
    format_plan_date,
    parse_plan_date,
    scan,
    transition,
)
from dayplan.schedule import Event

TASKS = heading(2, text("Tasks"))
SCHEDULE = heading(2, text("Schedule"))
DATE = heading(1, text("03/15/2024"))
LIST = bullet_list(item(paragraph(text("Personal"))))


@pytest.mark.parametrize(
    ("state", "node", "expected"),
    [
        (ScanState.INITIAL, DATE, (ScanState.DATE_FOUND, ScanEffect.CAPTURE_DATE)),
        (ScanState.INITIAL, TASKS, (ScanState.INITIAL, ScanEffect.NONE)),
        (ScanState.INITIAL, LIST, (ScanState.INITIAL, ScanEffect.NONE)),
        (ScanState.DATE_FOUND, TASKS, (ScanState.TASK_SECTION_START, ScanEffect.NONE)),
        (ScanState.DATE_FOUND, heading(2, text("  TASKS ")), (ScanState.TASK_SECTION_START, ScanEffect.NONE)),
        (ScanState.DATE_FOUND, heading(3, text("Tasks")), (ScanState.DATE_FOUND, ScanEffect.NONE)),
        (ScanState.DATE_FOUND, SCHEDULE, (ScanState.DATE_FOUND, ScanEffect.NONE)),
        (ScanState.TASK_SECTION_START, LIST, (ScanState.TASK_SECTION_END, ScanEffect.PARSE_TASKS)),
        (ScanState.TASK_SECTION_START, SCHEDULE, (ScanState.TASK_SECTION_START, ScanEffect.NONE)),
        (ScanState.TASK_SECTION_END, SCHEDULE, (ScanState.SCHEDULE_SECTION_START, ScanEffect.NONE)),
        (ScanState.TASK_SECTION_END, heading(2, text("Notes")), (ScanState.TASK_SECTION_END, ScanEffect.NONE)),
        (ScanState.SCHEDULE_SECTION_START, LIST, (ScanState.SCHEDULE_SECTION_END, ScanEffect.PARSE_SCHEDULE)),
        (ScanState.SCHEDULE_SECTION_START, paragraph(text("x")), (ScanState.SCHEDULE_SECTION_START, ScanEffect.NONE)),
        (ScanState.SCHEDULE_SECTION_END, LIST, (ScanState.SCHEDULE_SECTION_END, ScanEffect.STOP)),
    ],
)
def test_transition(state, node, expected):
    assert transition(state, node) == expected


def _schedule_list(*sections):
    return bullet_list(
        *(
            item(paragraph(text(label)), bullet_list(*(item(paragraph(text(line))) for line in lines)))
            for label, lines in sections
        )
    )


def test_scan_collects_all_sections():
    nodes = [
        paragraph(text("preamble")),
        DATE,
        paragraph(text("Friday")),
        TASKS,
        bullet_list(item(paragraph(text("Personal")), bullet_list(item(paragraph(text("[ ] Buy milk")))))),
        SCHEDULE,
        _schedule_list(("Planned", ["0900\tStandup"]), ("Actual", [])),
    ]

    result = scan(nodes)

    assert result.date_text == "03/15/2024"
    assert result.tasks.categories[0].name == "Personal"
    assert result.schedule.planned == [Event(time(9, 0), "Standup")]


def test_scan_without_sections_leaves_them_absent():
    result = scan([DATE, paragraph(text("Friday"))])
    assert result.date_text == "03/15/2024"
    assert result.tasks is None
    assert result.schedule is None


def test_scan_stops_after_schedule():
    bad_schedule = _schedule_list(("Someday", []))
    nodes = [DATE, TASKS, LIST, SCHEDULE, _schedule_list(("Planned", [])), SCHEDULE, bad_schedule]
    result = scan(nodes)
    assert result.schedule is not None


def test_scan_propagates_schedule_label_error():
    nodes = [DATE, TASKS, LIST, SCHEDULE, _schedule_list(("Someday", []))]
    with pytest.raises(ScheduleLabelError):
        scan(nodes)


def test_schedule_before_tasks_is_ignored():
    nodes = [DATE, SCHEDULE, _schedule_list(("Planned", ["0900\tStandup"])), TASKS, LIST]
    result = scan(nodes)
    assert result.schedule is None
    assert result.tasks is not None


@pytest.mark.parametrize("value", [date(2024, 3, 15), date(2000, 2, 29), date(1, 1, 1), date(9999, 12, 31)])
def test_date_format_round_trip(value):
    assert format_plan_date(value) == value.strftime("%m/%d/") + f"{value.year:04d}"
    assert parse_plan_date(format_plan_date(value)) == value


@pytest.mark.parametrize("value", ["", "13/40/2024", "2024-03-15", "02/30/2023", "Friday"])
def test_parse_plan_date_rejects_malformed(value):
    with pytest.raises(DateParseError):
        parse_plan_date(value)
