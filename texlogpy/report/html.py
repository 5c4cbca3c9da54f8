"""HTML table report over parsed diagnostics."""

from __future__ import annotations

from collections.abc import Sequence
import re
from typing import Final
from urllib.parse import quote

from texlogpy.diagnostics import Diagnostic, Severity, count_by_severity, sort_by_severity
from texlogpy.parser.options import SortBy

SEVERITY_COLORS: Final[dict[Severity, str]] = {
    Severity.BOX_OVERFLOW: "#8080FF",
    Severity.WARNING: "#F8F800",
    Severity.ERROR: "#F80000",
}

# Characters `encodeURI` leaves alone, minus the quote that delimits the href.
_URI_SAFE: Final[str] = ";,/?:@&=+$-_.!~*()#"
_FILE_NAME_RE = re.compile(r"[^\\/]+$")


def escape_html(text: str) -> str:
    """Escape markup and keep the engine's spacing and line breaks visible."""
    escaped = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    escaped = escaped.replace("\n ", "\n&nbsp;")
    escaped = escaped.replace("  ", "&nbsp;&nbsp;")
    escaped = escaped.replace("&nbsp; ", "&nbsp;&nbsp;")
    return escaped.replace("\n", "<br />\n")


def render_row(diagnostic: Diagnostic, *, link_scheme: str = "file") -> str:
    file_cell = "&#8212;"
    if diagnostic.file is not None:
        anchor = f"#{diagnostic.row}" if diagnostic.row else ""
        name_match = _FILE_NAME_RE.search(diagnostic.file)
        name = name_match.group(0) if name_match else diagnostic.file
        href = f"{link_scheme}:{quote(diagnostic.file, safe=_URI_SAFE)}{anchor}"
        file_cell = f"<a href='{href}'>{escape_html(name)}</a>"
    return (
        "<tr>"
        f'<td style="background-color: {SEVERITY_COLORS[diagnostic.severity]}"></td>'
        f'<td valign="top">{file_cell}</td>'
        f'<td valign="top">{diagnostic.row or ""}</td>'
        f'<td valign="top">{escape_html(diagnostic.description)}</td>'
        "</tr>"
    )


def render_html(
    diagnostics: Sequence[Diagnostic],
    *,
    sort_by: SortBy = SortBy.SEVERITY,
    only_table: bool = False,
    link_scheme: str = "file",
) -> str | None:
    """Render diagnostics as an HTML table; `None` when there is nothing to report."""
    if not diagnostics:
        return None

    ordered = sort_by_severity(diagnostics) if sort_by == SortBy.SEVERITY else list(diagnostics)
    rows = "".join(render_row(d, link_scheme=link_scheme) for d in ordered)
    table = f"<table border='0' cellspacing='0' cellpadding='4'>{rows}</table>"
    if only_table:
        return table

    counts = count_by_severity(diagnostics)
    header = (
        f"Errors: {counts[Severity.ERROR]}, "
        f"Warnings: {counts[Severity.WARNING]}, "
        f"Bad boxes: {counts[Severity.BOX_OVERFLOW]}<hr/>"
    )
    return f"<html><body>{header}{table}</body></html>"
