"""Exceptions raised while reading and writing plans."""

from __future__ import annotations


class PlanParseError(ValueError):
    """A plan document could not be turned into a Plan."""


class DateParseError(PlanParseError):
    def __init__(self, text: str) -> None:
        self.text = text
        if text:
            message = f"Could not parse plan date from '{text}'. Expected a '# MM/DD/YYYY' heading."
        else:
            message = "No date heading found. Expected a '# MM/DD/YYYY' heading."
        super().__init__(message)


class ScheduleLabelError(PlanParseError):
    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Expected 'Planned' or 'Actual', but found '{text}'")


class PlanFileError(ValueError):
    """A file in the plan directory does not follow the plan naming scheme."""


class EditorError(RuntimeError):
    """The external editor could not be started or failed."""
