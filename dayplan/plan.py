"""Daily plan aggregate and its canonical markdown rendering."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import logging
from typing import Optional

from .document import parse_document
from .scanner import format_plan_date, parse_plan_date, scan
from .schedule import Event, Schedule
from .tasks import TaskCategory, TaskList

logger = logging.getLogger(__name__)

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
DEFAULT_CATEGORY = "General"


@dataclass
class Plan:
    date: date
    tasks: Optional[TaskList] = None
    schedule: Optional[Schedule] = None

    @classmethod
    def from_markdown(cls, markdown: str) -> "Plan":
        """Parse a plan document.

        Raises:
            DateParseError: the date heading is missing or malformed.
            ScheduleLabelError: a schedule sub-list is not Planned/Actual.
        """
        document = parse_document(markdown)
        result = scan(document.children)
        plan_date = parse_plan_date(result.date_text)
        logger.debug("Parsed plan for %s", plan_date.isoformat())
        return cls(date=plan_date, tasks=result.tasks, schedule=result.schedule)

    @classmethod
    def template(cls, plan_date: date) -> "Plan":
        """A blank plan for a day with no earlier plan to copy from."""
        return cls(
            date=plan_date,
            tasks=TaskList(categories=[TaskCategory(name=DEFAULT_CATEGORY)]),
            schedule=Schedule(),
        )

    @property
    def day_of_week(self) -> str:
        return WEEKDAYS[self.date.weekday()]

    def set_date(self, plan_date: date) -> None:
        self.date = plan_date

    def clean(self) -> None:
        """Prepare the plan as a template for a new day.

        Completed tasks are removed (empty categories stay) and the schedule
        is emptied.
        """
        if self.tasks is not None:
            self.tasks.clean()
        if self.schedule is not None:
            self.schedule.clean()

    def to_markdown(self) -> str:
        # Completed tasks are never written, cleaned or not.
        lines = [f"# {format_plan_date(self.date)}", self.day_of_week, ""]

        if self.tasks is not None:
            lines.append("## Tasks")
            for category in self.tasks.categories:
                lines.append(f"- **{category.name}**")
                lines.extend(
                    f"  - [ ] {task.description}" for task in category.tasks if not task.is_complete
                )
            lines.append("")

        if self.schedule is not None:
            lines.append("## Schedule")
            lines.append("- **Planned**")
            lines.extend(_event_line(event) for event in self.schedule.planned)
            lines.append("- **Actual**")
            lines.extend(_event_line(event) for event in self.schedule.actual)
            lines.append("")

        lines.extend(["## Notes", ""])
        return "\n".join(lines) + "\n"


def _event_line(event: Event) -> str:
    return f"  - {event.format_start()}\t{event.description}"
