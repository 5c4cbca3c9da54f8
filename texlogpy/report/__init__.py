"""Report renderers."""

from texlogpy.report.html import escape_html, render_html, render_row
from texlogpy.report.text import format_diagnostic, render_text

__all__ = [
    "escape_html",
    "format_diagnostic",
    "render_html",
    "render_row",
    "render_text",
]
