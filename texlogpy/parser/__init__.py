"""Transcript parser (pattern table + file-reference resolver + cursor)."""

from texlogpy.parser.files import (
    FileExistence,
    FileOracle,
    FileReference,
    FilesystemFileOracle,
    MappingFileOracle,
    NullFileOracle,
    SetFileOracle,
    resolve_file_reference,
)
from texlogpy.parser.log_parser import LogParser, LogParseResult, parse_log
from texlogpy.parser.options import DEFAULT_WRAP_WIDTH, LogParserOptions, SortBy
from texlogpy.parser.patterns import (
    BadBoxRule,
    DiagnosticKind,
    DiagnosticRule,
    PatternRule,
    match_diagnostic,
    pattern_table,
)
from texlogpy.parser.rerun import (
    Confirm,
    RemoveAuxFiles,
    StaleAuxAdvisory,
    find_stale_aux_advisory,
    offer_aux_removal,
    rerun_rule_at,
)
from texlogpy.parser.state import ParseState

__all__ = [
    "DEFAULT_WRAP_WIDTH",
    "BadBoxRule",
    "Confirm",
    "DiagnosticKind",
    "DiagnosticRule",
    "FileExistence",
    "FileOracle",
    "FileReference",
    "FilesystemFileOracle",
    "LogParseResult",
    "LogParser",
    "LogParserOptions",
    "MappingFileOracle",
    "NullFileOracle",
    "ParseState",
    "PatternRule",
    "RemoveAuxFiles",
    "SetFileOracle",
    "SortBy",
    "StaleAuxAdvisory",
    "find_stale_aux_advisory",
    "match_diagnostic",
    "offer_aux_removal",
    "parse_log",
    "pattern_table",
    "rerun_rule_at",
    "resolve_file_reference",
]
