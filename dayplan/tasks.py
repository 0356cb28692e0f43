"""Task section model and parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .document import Node, NodeKind
from .text import get_node_text

COMPLETE_MARKER = "[x]"
INCOMPLETE_MARKER = "[ ]"


class TaskStatus(Enum):
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"


@dataclass(frozen=True)
class Task:
    description: str
    status: TaskStatus = TaskStatus.INCOMPLETE

    @property
    def is_complete(self) -> bool:
        return self.status is TaskStatus.COMPLETE


@dataclass
class TaskCategory:
    name: str
    tasks: List[Task] = field(default_factory=list)

    def clean(self) -> None:
        """Drop completed tasks, keeping the category itself."""
        self.tasks = [task for task in self.tasks if not task.is_complete]


@dataclass
class TaskList:
    categories: List[TaskCategory] = field(default_factory=list)

    def clean(self) -> None:
        for category in self.categories:
            category.clean()


def parse_task_line(text: str) -> Task:
    """Interpret one task line such as ``[ ] Buy milk`` or ``[x] Call bank``."""
    if text.startswith(COMPLETE_MARKER):
        return Task(description=text[len(COMPLETE_MARKER) :].strip(), status=TaskStatus.COMPLETE)
    if text.startswith(INCOMPLETE_MARKER):
        text = text[len(INCOMPLETE_MARKER) :]
    return Task(description=text.strip(), status=TaskStatus.INCOMPLETE)


def parse_task_category(node: Node) -> TaskCategory:
    name = ""
    tasks: List[Task] = []

    for child in node.children:
        if child.kind is NodeKind.PARAGRAPH:
            # Multiple paragraphs are joined without a separator.
            name += get_node_text(child)
        elif child.kind is NodeKind.LIST:
            for entry in child.children:
                if entry.kind is NodeKind.ITEM:
                    tasks.append(parse_task_line(get_node_text(entry)))

    return TaskCategory(name=name, tasks=tasks)


def parse_task_list(node: Node) -> TaskList:
    """Parse a list block whose items are task categories."""
    return TaskList(categories=[parse_task_category(child) for child in node.children])
