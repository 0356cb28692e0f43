"""Plain-text extraction from block tree nodes."""

from __future__ import annotations

from .document import Node, NodeKind


def collect_text(node: Node, output: list[str]) -> None:
    """Collect text from ``node`` and all descendants, appending it to ``output``."""
    if node.kind is NodeKind.TEXT:
        output.append(node.literal)
    elif node.kind is NodeKind.CODE:
        output.append(f"`{node.literal}`")
    elif node.kind in (NodeKind.LINE_BREAK, NodeKind.SOFT_BREAK):
        output.append(" ")
    else:
        for child in node.children:
            collect_text(child, output)


def get_node_text(node: Node) -> str:
    parts: list[str] = []
    collect_text(node, parts)
    return "".join(parts).strip()
