"""Diagnostics core types."""

from dataclasses import dataclass
from enum import IntEnum


class Severity(IntEnum):
    """Diagnostic severity; ordered so that `>=` expresses "at least as severe"."""

    BOX_OVERFLOW = 0
    WARNING = 1
    ERROR = 2

    @staticmethod
    def parse(name: str) -> "Severity":
        """Resolve a user-facing severity name (`error`, `warning`, `badbox`)."""
        normalized = name.strip().lower().replace("-", "_")
        resolved = _SEVERITY_ALIASES.get(normalized)
        if resolved is None:
            choices = ", ".join(sorted(_SEVERITY_ALIASES))
            raise ValueError(f"Unknown severity `{name}`; expected one of: {choices}")
        return resolved

    @property
    def label(self) -> str:
        return _SEVERITY_LABELS[self]


_SEVERITY_ALIASES: dict[str, Severity] = {
    "badbox": Severity.BOX_OVERFLOW,
    "box_overflow": Severity.BOX_OVERFLOW,
    "warning": Severity.WARNING,
    "error": Severity.ERROR,
}

_SEVERITY_LABELS: dict[Severity, str] = {
    Severity.BOX_OVERFLOW: "bad box",
    Severity.WARNING: "warning",
    Severity.ERROR: "error",
}


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One error, warning or bad box found in an engine transcript.

    `row` is the input line the engine reported, or 0 when it did not report one.
    """

    severity: Severity
    file: str | None
    row: int
    description: str
