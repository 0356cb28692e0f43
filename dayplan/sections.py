"""
Level-2 sections of a plan document.

A section begins at a level 2 heading (``##``) and ends at the next level 1
or level 2 heading, or the end of the document::

    ## Notes

    Some free text.

    ### Level 3 headings do not start a new section.

    ## Another section begins here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .document import Node, NodeKind, parse_document
from .text import get_node_text


@dataclass(frozen=True)
class PlanSection:
    heading: Node
    contents: tuple[Node, ...]

    @property
    def title(self) -> str:
        return get_node_text(self.heading)

    @property
    def text(self) -> str:
        parts = (get_node_text(node) for node in self.contents)
        return " ".join(part for part in parts if part)


def _ends_section(node: Node) -> bool:
    return node.kind is NodeKind.HEADING and node.level <= 2


def iter_sections(document: Node) -> Iterator[PlanSection]:
    blocks = document.children
    for index, node in enumerate(blocks):
        if not node.is_heading(2):
            continue
        contents: list[Node] = []
        for sibling in blocks[index + 1 :]:
            if _ends_section(sibling):
                break
            contents.append(sibling)
        yield PlanSection(heading=node, contents=tuple(contents))


def _normalize_title(title: str) -> str:
    return title.strip().rstrip(":").strip().lower()


def find_section(markdown: str, title: str) -> Optional[PlanSection]:
    wanted = _normalize_title(title)
    for section in iter_sections(parse_document(markdown)):
        if _normalize_title(section.title) == wanted:
            return section
    return None
