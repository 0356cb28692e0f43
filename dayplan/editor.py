"""External editor invocation."""

from __future__ import annotations

import logging
from pathlib import Path
import shlex
import subprocess

from .errors import EditorError

logger = logging.getLogger(__name__)


def build_editor_command(editor: str, path: Path) -> list[str]:
    args = shlex.split(editor)
    if not args:
        raise EditorError("No editor configured")
    return [*args, str(path)]


def open_in_editor(path: Path, editor: str) -> None:
    """Open ``path`` in ``editor`` and wait for it to exit."""
    command = build_editor_command(editor, path)
    logger.debug("Opening plan file in editor: %s", command)
    try:
        subprocess.run(command, check=True)
    except FileNotFoundError as exc:
        raise EditorError(f"Editor not found: {command[0]}") from exc
    except subprocess.CalledProcessError as exc:
        raise EditorError(f"Editor exited with status {exc.returncode}: {command[0]}") from exc
