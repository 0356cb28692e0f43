"""Plaintext daily plans: parse, clean, and re-render plan markdown."""

from .errors import DateParseError, EditorError, PlanFileError, PlanParseError, ScheduleLabelError
from .plan import Plan
from .schedule import Event, Schedule
from .tasks import Task, TaskCategory, TaskList, TaskStatus

__all__ = [
    "DateParseError",
    "EditorError",
    "Event",
    "Plan",
    "PlanFileError",
    "PlanParseError",
    "Schedule",
    "ScheduleLabelError",
    "Task",
    "TaskCategory",
    "TaskList",
    "TaskStatus",
]
