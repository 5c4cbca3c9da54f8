"""Entrypoint that parses a transcript, orders its diagnostics and runs the advisory."""

from __future__ import annotations

from texlogpy.diagnostics import Diagnostic, has_errors, sort_by_severity
from texlogpy.parser import (
    Confirm,
    FileOracle,
    LogParseResult,
    LogParserOptions,
    RemoveAuxFiles,
    SortBy,
    find_stale_aux_advisory,
    offer_aux_removal,
    parse_log,
)
from texlogpy.pipeline.results import CheckRunResult


def run_check(
    text: str,
    options: LogParserOptions | None = None,
    *,
    root_file: str | None = None,
    oracle: FileOracle | None = None,
    parse: LogParseResult | None = None,
    confirm: Confirm | None = None,
    remove_aux_files: RemoveAuxFiles | None = None,
) -> CheckRunResult:
    """Parse `text` (or reuse `parse`) and prepare diagnostics for reporting."""
    resolved_options = options or LogParserOptions()
    resolved_parse = _resolve_parse(
        text,
        options=resolved_options,
        root_file=root_file,
        oracle=oracle,
        parse=parse,
    )

    advisory = find_stale_aux_advisory(resolved_parse.diagnostics)
    accepted: bool | None = None
    if advisory is not None and confirm is not None:
        accepted = offer_aux_removal(advisory, confirm, remove_aux_files)

    return CheckRunResult(
        parse=resolved_parse,
        diagnostics=order_diagnostics(resolved_parse.diagnostics, resolved_options.sort_by),
        sort_by=resolved_options.sort_by,
        has_errors=has_errors(resolved_parse.diagnostics),
        advisory=advisory,
        aux_removal_accepted=accepted,
    )


def order_diagnostics(diagnostics: list[Diagnostic], sort_by: SortBy) -> list[Diagnostic]:
    if sort_by == SortBy.SEVERITY:
        return sort_by_severity(diagnostics)
    return list(diagnostics)


def _resolve_parse(
    text: str,
    *,
    options: LogParserOptions,
    root_file: str | None,
    oracle: FileOracle | None,
    parse: LogParseResult | None,
) -> LogParseResult:
    if parse is not None:
        if root_file is not None or oracle is not None:
            raise ValueError("Pass either parse or root_file/oracle, not both")
        return parse
    return parse_log(text, root_file=root_file, oracle=oracle, options=options)
