"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from texlogpy.diagnostics.diagnostic import Diagnostic, Severity


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == Severity.ERROR for d in diagnostics)


def sort_by_severity(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Group errors first, then warnings, then bad boxes; stable within a group."""
    return sorted(diagnostics, key=lambda d: -d.severity)


def count_by_severity(diagnostics: Iterable[Diagnostic]) -> dict[Severity, int]:
    counts = {severity: 0 for severity in Severity}
    for diagnostic in diagnostics:
        counts[diagnostic.severity] += 1
    return counts
