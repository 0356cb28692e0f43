#!/usr/bin/env python3
"""
Daily Planner CLI
=================

A plaintext planning tool for a particular kind of nerd.

Usage:
  dayplan              # same as 'dayplan edit'
  dayplan edit
  dayplan view --canonical
  dayplan view --section tasks --date 2024-03-15
  dayplan new --date 2024-03-16
"""

from __future__ import annotations

import argparse
from datetime import date
import logging
import sys
from typing import Sequence

from pydantic import ValidationError

from .config import PlannerSettings, load_settings
from .editor import open_in_editor
from .errors import EditorError, PlanFileError, PlanParseError
from .plan import Plan
from .plan_files import PlanDirectory, PlanFile
from .sections import find_section

logger = logging.getLogger(__name__)


def _today() -> date:
    return date.today()


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dayplan", description="Plaintext daily planner.")
    parser.add_argument("--dir", dest="root_dir", default=None, help="Directory holding plan files")
    parser.add_argument("--editor", default=None, help="Editor command used by 'edit'")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("edit", help="Edit today's plan, creating it if needed")

    view = subparsers.add_parser("view", help="Send a plan to stdout")
    view.add_argument("--date", type=_parse_date, default=None, help="Plan date (YYYY-MM-DD)")
    view.add_argument("--canonical", action="store_true", help="Print the re-rendered plan")
    view.add_argument("--section", default=None, help="Print only the text of one section")

    new = subparsers.add_parser("new", help="Write a fresh template plan")
    new.add_argument("--date", type=_parse_date, default=None, help="Plan date (YYYY-MM-DD)")
    new.add_argument("--force", action="store_true", help="Overwrite an existing plan file")
    return parser


def _configure_logging(settings: PlannerSettings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _edit(plan_dir: PlanDirectory, settings: PlannerSettings) -> int:
    plan_file = plan_dir.today_plan(_today())
    open_in_editor(plan_file.path, settings.editor)
    return 0


def _view(plan_dir: PlanDirectory, args: argparse.Namespace) -> int:
    plan_date = args.date or _today()
    plan_file = plan_dir.get_plan(plan_date)
    if plan_file is None:
        print(f"[dayplan] error: no plan for {plan_date.isoformat()}", file=sys.stderr)
        return 1

    markdown = plan_file.read_text()
    if args.section:
        section = find_section(markdown, args.section)
        if section is None:
            print(f"[dayplan] error: no '{args.section}' section in {plan_file.path}", file=sys.stderr)
            return 1
        print(section.text)
    elif args.canonical:
        print(Plan.from_markdown(markdown).to_markdown(), end="")
    else:
        print(markdown, end="")
    return 0


def _new(plan_dir: PlanDirectory, args: argparse.Namespace) -> int:
    plan_date = args.date or _today()
    if plan_dir.get_plan(plan_date) is not None and not args.force:
        print(
            f"[dayplan] error: plan for {plan_date.isoformat()} already exists (use --force)",
            file=sys.stderr,
        )
        return 1
    plan_file: PlanFile = plan_dir.create_plan(plan_date)
    print(plan_file.path)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings({"root_dir": args.root_dir, "editor": args.editor})
    except ValidationError as exc:
        print(f"[dayplan] error: invalid settings: {exc}", file=sys.stderr)
        return 1

    _configure_logging(settings, args.verbose)
    plan_dir = PlanDirectory(settings.root_dir)
    command = args.command or "edit"

    try:
        if command == "view":
            return _view(plan_dir, args)
        if command == "new":
            return _new(plan_dir, args)
        return _edit(plan_dir, settings)
    except (PlanParseError, PlanFileError, EditorError, OSError) as exc:
        logger.debug("Command '%s' failed", command, exc_info=True)
        print(f"[dayplan] error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
