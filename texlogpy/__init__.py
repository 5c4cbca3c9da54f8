"""Diagnostics extraction for TeX engine transcripts."""

from texlogpy.diagnostics import Diagnostic, Severity
from texlogpy.parser import LogParserOptions, SortBy, parse_log
from texlogpy.pipeline import run_check

__all__ = [
    "Diagnostic",
    "LogParserOptions",
    "Severity",
    "SortBy",
    "parse_log",
    "run_check",
]
