"""Plain-text report for terminals."""

from __future__ import annotations

from collections.abc import Sequence

from texlogpy.diagnostics import Diagnostic, Severity, count_by_severity


def format_diagnostic(diagnostic: Diagnostic) -> str:
    location = diagnostic.file or "<unknown>"
    if diagnostic.row:
        location = f"{location}:{diagnostic.row}"
    summary = diagnostic.description.strip().splitlines()[0] if diagnostic.description.strip() else ""
    return f"{location}: {diagnostic.severity.label}: {summary}"


def render_text(diagnostics: Sequence[Diagnostic]) -> str:
    lines = [format_diagnostic(d) for d in diagnostics]
    counts = count_by_severity(diagnostics)
    lines.append(
        f"{counts[Severity.ERROR]} error(s), "
        f"{counts[Severity.WARNING]} warning(s), "
        f"{counts[Severity.BOX_OVERFLOW]} bad box(es)"
    )
    return "\n".join(lines)
