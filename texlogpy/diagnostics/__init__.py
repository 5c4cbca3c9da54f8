"""Diagnostics."""

from texlogpy.diagnostics.diagnostic import Diagnostic, Severity
from texlogpy.diagnostics.report import (
    count_by_severity,
    has_errors,
    sort_by_severity,
)

__all__ = [
    "Diagnostic",
    "Severity",
    "count_by_severity",
    "has_errors",
    "sort_by_severity",
]
