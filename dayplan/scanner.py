"""
Section scanner for plan documents.

Walks the top-level blocks of a document once, in order:

    # <date>          -> date candidate
    ## Tasks          -> next list block is the task list
    ## Schedule       -> next list block is the schedule

Headings that do not match the expected title are skipped, so extra sections
are tolerated as long as the known ones appear in this order.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
import logging
from typing import Iterable, Optional

from .document import Node, NodeKind
from .errors import DateParseError
from .schedule import Schedule, parse_schedule
from .tasks import TaskList, parse_task_list
from .text import get_node_text

logger = logging.getLogger(__name__)

DATE_FORMAT = "%m/%d/%Y"
TASKS_TITLE = "tasks"
SCHEDULE_TITLE = "schedule"


class ScanState(Enum):
    INITIAL = "initial"
    DATE_FOUND = "date_found"
    TASK_SECTION_START = "task_section_start"
    TASK_SECTION_END = "task_section_end"
    SCHEDULE_SECTION_START = "schedule_section_start"
    SCHEDULE_SECTION_END = "schedule_section_end"


class ScanEffect(Enum):
    NONE = "none"
    CAPTURE_DATE = "capture_date"
    PARSE_TASKS = "parse_tasks"
    PARSE_SCHEDULE = "parse_schedule"
    STOP = "stop"


@dataclass
class ScanResult:
    date_text: str = ""
    tasks: Optional[TaskList] = None
    schedule: Optional[Schedule] = None


def _is_section_heading(node: Node, title: str) -> bool:
    return node.is_heading(2) and get_node_text(node).strip().lower() == title


def transition(state: ScanState, node: Node) -> tuple[ScanState, ScanEffect]:
    """Return the next state and the effect to apply for ``node``."""
    if state is ScanState.INITIAL:
        if node.is_heading(1):
            return ScanState.DATE_FOUND, ScanEffect.CAPTURE_DATE
    elif state is ScanState.DATE_FOUND:
        if _is_section_heading(node, TASKS_TITLE):
            return ScanState.TASK_SECTION_START, ScanEffect.NONE
    elif state is ScanState.TASK_SECTION_START:
        if node.kind is NodeKind.LIST:
            return ScanState.TASK_SECTION_END, ScanEffect.PARSE_TASKS
    elif state is ScanState.TASK_SECTION_END:
        if _is_section_heading(node, SCHEDULE_TITLE):
            return ScanState.SCHEDULE_SECTION_START, ScanEffect.NONE
    elif state is ScanState.SCHEDULE_SECTION_START:
        if node.kind is NodeKind.LIST:
            return ScanState.SCHEDULE_SECTION_END, ScanEffect.PARSE_SCHEDULE
    elif state is ScanState.SCHEDULE_SECTION_END:
        return state, ScanEffect.STOP
    return state, ScanEffect.NONE


def scan(nodes: Iterable[Node]) -> ScanResult:
    """Run the scanner over top-level blocks and collect the raw sections."""
    result = ScanResult()
    state = ScanState.INITIAL

    for node in nodes:
        state, effect = transition(state, node)
        logger.debug("Parsing state: %s", state.value)

        if effect is ScanEffect.STOP:
            break
        if effect is ScanEffect.CAPTURE_DATE:
            result.date_text = get_node_text(node)
        elif effect is ScanEffect.PARSE_TASKS:
            result.tasks = parse_task_list(node)
        elif effect is ScanEffect.PARSE_SCHEDULE:
            result.schedule = parse_schedule(node)

    return result


def parse_plan_date(text: str) -> date:
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except ValueError as exc:
        raise DateParseError(text) from exc


def format_plan_date(value: date) -> str:
    # strftime does not zero-pad years below 1000 on every platform.
    return f"{value.month:02d}/{value.day:02d}/{value.year:04d}"
