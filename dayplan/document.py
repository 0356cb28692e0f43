"""
Block tree for plan documents.

markdown-it-py produces a flat token stream with open/close pairs. The plan
parsers want a tree, so the stream is folded into immutable ``Node`` values
here. Only the node kinds the parsers care about get their own tag; everything
else becomes an opaque ``OTHER`` container.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token


class NodeKind(Enum):
    DOCUMENT = "document"
    HEADING = "heading"
    LIST = "list"
    ITEM = "item"
    PARAGRAPH = "paragraph"
    TEXT = "text"
    CODE = "code"
    LINE_BREAK = "line_break"
    SOFT_BREAK = "soft_break"
    OTHER = "other"


@dataclass(frozen=True)
class Node:
    kind: NodeKind
    children: tuple[Node, ...] = ()
    level: int = 0
    literal: str = ""
    tag: str = ""

    def is_heading(self, level: int | None = None) -> bool:
        if self.kind is not NodeKind.HEADING:
            return False
        return level is None or self.level == level


_OPEN_KINDS = {
    "bullet_list_open": NodeKind.LIST,
    "ordered_list_open": NodeKind.LIST,
    "list_item_open": NodeKind.ITEM,
    "paragraph_open": NodeKind.PARAGRAPH,
}

_LEAF_KINDS = {
    "text": NodeKind.TEXT,
    "code_inline": NodeKind.CODE,
    "hardbreak": NodeKind.LINE_BREAK,
    "softbreak": NodeKind.SOFT_BREAK,
}

_markdown = MarkdownIt("commonmark")


# Convenience constructors, mostly for building trees by hand in tests.
def heading(level: int, *children: Node) -> Node:
    return Node(NodeKind.HEADING, tuple(children), level=level)


def bullet_list(*items: Node) -> Node:
    return Node(NodeKind.LIST, tuple(items))


def item(*children: Node) -> Node:
    return Node(NodeKind.ITEM, tuple(children))


def paragraph(*children: Node) -> Node:
    return Node(NodeKind.PARAGRAPH, tuple(children))


def text(literal: str) -> Node:
    return Node(NodeKind.TEXT, literal=literal)


def code(literal: str) -> Node:
    return Node(NodeKind.CODE, literal=literal)


def _open_node(token: Token, children: tuple[Node, ...]) -> Node:
    if token.type == "heading_open":
        return Node(NodeKind.HEADING, children, level=int(token.tag[1:]), tag=token.tag)
    kind = _OPEN_KINDS.get(token.type, NodeKind.OTHER)
    tag = token.type[: -len("_open")] if token.type.endswith("_open") else token.type
    return Node(kind, children, tag=tag)


def _leaf_node(token: Token) -> Node:
    kind = _LEAF_KINDS.get(token.type)
    if kind is not None:
        return Node(kind, literal=token.content, tag=token.type)
    # Inline tokens carry their own token list rather than open/close pairs.
    return Node(NodeKind.OTHER, _fold(token.children or []), tag=token.type)


def _fold(tokens: Iterable[Token]) -> tuple[Node, ...]:
    stack: list[tuple[Token | None, list[Node]]] = [(None, [])]
    for token in tokens:
        if token.nesting == 1:
            stack.append((token, []))
        elif token.nesting == -1:
            opener, children = stack.pop()
            if opener is None:
                raise ValueError(f"Unbalanced markdown token stream at '{token.type}'")
            stack[-1][1].append(_open_node(opener, tuple(children)))
        else:
            stack[-1][1].append(_leaf_node(token))

    if len(stack) != 1:
        raise ValueError("Unbalanced markdown token stream: unclosed blocks at end of document")
    return tuple(stack[0][1])


def build_tree(tokens: Sequence[Token]) -> Node:
    """Fold a markdown-it token stream into a DOCUMENT node."""
    return Node(NodeKind.DOCUMENT, _fold(tokens))


def parse_document(markdown: str) -> Node:
    """Parse CommonMark text into an immutable block tree."""
    return build_tree(_markdown.parse(markdown))
