"""Pipeline run result carriers."""

from __future__ import annotations

from dataclasses import dataclass

from texlogpy.diagnostics import Diagnostic, Severity, count_by_severity
from texlogpy.parser.log_parser import LogParseResult
from texlogpy.parser.options import SortBy
from texlogpy.parser.rerun import StaleAuxAdvisory


@dataclass(frozen=True, slots=True)
class CheckRunResult:
    """Result of checking one transcript: ordered diagnostics and any advisory."""

    parse: LogParseResult
    diagnostics: list[Diagnostic]
    sort_by: SortBy
    has_errors: bool
    advisory: StaleAuxAdvisory | None = None
    aux_removal_accepted: bool | None = None

    @property
    def counts(self) -> dict[Severity, int]:
        return count_by_severity(self.diagnostics)
