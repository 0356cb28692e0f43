"""
Plan files on disk.

One file per day, named ``%Y.%m.%d.plan.md``, all in a single directory.
"""

from __future__ import annotations

from datetime import date, datetime
import logging
from pathlib import Path
from typing import Optional

from .errors import PlanFileError
from .plan import Plan

logger = logging.getLogger(__name__)

PLAN_EXT = "plan.md"
FILE_DATE_FORMAT = "%Y.%m.%d"


class PlanFile:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"PlanFile({str(self.path)!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PlanFile) and self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    @property
    def date(self) -> date:
        name = self.path.name
        suffix = f".{PLAN_EXT}"
        stem = name[: -len(suffix)] if name.endswith(suffix) else name
        try:
            return datetime.strptime(stem, FILE_DATE_FORMAT).date()
        except ValueError as exc:
            raise PlanFileError(f"Could not parse date from plan file name: {name}") from exc

    def exists(self) -> bool:
        return self.path.exists()

    def read_text(self) -> str:
        return self.path.read_text(encoding="utf-8")

    def load(self) -> Plan:
        return Plan.from_markdown(self.read_text())

    def write(self, plan: Plan) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(plan.to_markdown(), encoding="utf-8")


class PlanDirectory:
    def __init__(self, path: Path) -> None:
        logger.debug("Initializing plan directory at '%s'.", path)
        self.path = Path(path)

    def plan_path(self, plan_date: date) -> Path:
        return self.path / f"{plan_date.strftime(FILE_DATE_FORMAT)}.{PLAN_EXT}"

    def get_plan(self, plan_date: date) -> Optional[PlanFile]:
        plan_path = self.plan_path(plan_date)
        if plan_path.exists():
            logger.debug("Plan file found at path: %s", plan_path)
            return PlanFile(plan_path)
        logger.debug("No plan file found at path: %s", plan_path)
        return None

    def create_plan(self, plan_date: date) -> PlanFile:
        """Write a fresh template plan for ``plan_date``."""
        plan_file = PlanFile(self.plan_path(plan_date))
        logger.debug("Creating plan file for date: %s", plan_date.isoformat())
        plan_file.write(Plan.template(plan_date))
        return plan_file

    def copy_plan(self, source: PlanFile, plan_date: date) -> PlanFile:
        """Carry ``source`` forward to ``plan_date`` as a cleaned plan."""
        target = PlanFile(self.plan_path(plan_date))
        logger.debug("Copying plan file: %s to %s", source.path, target.path)

        plan = source.load()
        plan.clean()
        plan.set_date(plan_date)
        target.write(plan)
        return target

    def get_most_recent_plan(self, today: date) -> Optional[PlanFile]:
        """Latest plan dated on or before ``today``."""
        most_recent: Optional[PlanFile] = None
        most_recent_date: Optional[date] = None

        for plan_file in self._get_files():
            try:
                plan_date = plan_file.date
            except PlanFileError as exc:
                logger.warning("Skipping %s: %s", plan_file.path, exc)
                continue
            if plan_date > today:
                continue
            if most_recent_date is None or plan_date > most_recent_date:
                most_recent, most_recent_date = plan_file, plan_date

        logger.debug("Most recent plan: %s", most_recent)
        return most_recent

    def today_plan(self, today: date) -> PlanFile:
        """Today's plan, copied forward or created when it does not exist yet."""
        existing = self.get_plan(today)
        if existing is not None:
            return existing

        most_recent = self.get_most_recent_plan(today)
        if most_recent is not None:
            return self.copy_plan(most_recent, today)
        return self.create_plan(today)

    def _get_files(self) -> list[PlanFile]:
        if not self.path.is_dir():
            return []
        return [PlanFile(path) for path in sorted(self.path.iterdir()) if self._is_plan_file(path)]

    @staticmethod
    def _is_plan_file(path: Path) -> bool:
        is_plan = path.is_file() and path.name.endswith(f".{PLAN_EXT}")
        logger.debug("%s is plan file: %s", path, is_plan)
        return is_plan
