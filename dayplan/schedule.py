"""Schedule section model and parser.

The schedule is a two-level list. Each top-level item is labelled
``Planned`` or ``Actual`` and holds a nested list of events written as
``HHMM<TAB>description``::

    - **Planned**
      - 0900	Standup
    - **Actual**
      - 0905	Standup
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from enum import Enum
import logging
import re
from typing import List, Optional

from .document import Node, NodeKind
from .errors import ScheduleLabelError
from .text import get_node_text

logger = logging.getLogger(__name__)

TIME_RE = re.compile(r"^([01]\d|2[0-3])([0-5]\d)$")


class ScheduleSection(Enum):
    PLANNED = "planned"
    ACTUAL = "actual"


@dataclass(frozen=True)
class Event:
    start: time
    description: str

    def format_start(self) -> str:
        return self.start.strftime("%H%M")


@dataclass
class Schedule:
    planned: List[Event] = field(default_factory=list)
    actual: List[Event] = field(default_factory=list)

    def clean(self) -> None:
        """Reset both event lists; a new day starts with no recorded schedule."""
        self.planned = []
        self.actual = []


def parse_time(value: str) -> Optional[time]:
    match = TIME_RE.match(value)
    if not match:
        return None
    return time(hour=int(match.group(1)), minute=int(match.group(2)))


def parse_event_text(text: str) -> Optional[Event]:
    """Parse ``HHMM<TAB>description``; returns None when either half is unusable."""
    pieces = [piece for piece in text.split("\t") if piece]
    if not pieces:
        logger.warning("Could not parse event string '%s'", text)
        return None

    start = parse_time(pieces[0])
    if start is None:
        logger.warning("Could not parse event string '%s'", text)
        return None

    if len(pieces) < 2:
        logger.warning("Parsed time %s, but could not parse description from '%s'", start, text)
        return None
    if len(pieces) > 2:
        logger.debug("Ignoring extra tab-separated fields in '%s'", text)

    return Event(start=start, description=pieces[1])


def parse_event(node: Node) -> Optional[Event]:
    if node.kind is not NodeKind.ITEM:
        logger.warning("Expected a list item, but found %s", node.kind.value)
        return None
    return parse_event_text(get_node_text(node))


def _parse_label(text: str) -> ScheduleSection:
    label = text.strip().lower()
    if label == ScheduleSection.PLANNED.value:
        return ScheduleSection.PLANNED
    if label == ScheduleSection.ACTUAL.value:
        return ScheduleSection.ACTUAL
    logger.error("Schedule parsing error: Expected 'Planned' or 'Actual', but found '%s'", text)
    raise ScheduleLabelError(text)


def parse_schedule(node: Node) -> Schedule:
    """Parse the schedule list block.

    An unknown label aborts the whole parse with ScheduleLabelError. Bad events
    and unexpected nodes are logged and skipped.
    """
    logger.debug("Parsing schedule...")

    schedule = Schedule()
    section = ScheduleSection.PLANNED

    for ul_child in node.children:
        if ul_child.kind is not NodeKind.ITEM:
            logger.warning("Expected a list item, but found %s", ul_child.kind.value)
            continue

        for li_child in ul_child.children:
            if li_child.kind is NodeKind.PARAGRAPH:
                section = _parse_label(get_node_text(li_child))
                logger.debug("Parsing %s events", section.value)
            elif li_child.kind is NodeKind.LIST:
                events = schedule.planned if section is ScheduleSection.PLANNED else schedule.actual
                for inner in li_child.children:
                    event = parse_event(inner)
                    if event is not None:
                        events.append(event)
            else:
                logger.warning(
                    "Expected a list or paragraph, but found %s", li_child.tag or li_child.kind.value
                )

    return schedule
