"""Ordered diagnostic pattern table.

Each rule is anchored at the head of the unread transcript. Rules are tried in
order; the first that produces a diagnostic wins. Most rules are a regex plus
an extractor, and an extractor may decline a match (return `None`), in which
case the next rule is tried. Bad boxes need byte-measured line lengths and are
scanned line by line instead.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache
import re
from typing import Protocol, TypeAlias

from texlogpy.diagnostics import Diagnostic, Severity
from texlogpy.parser.files import byte_length


class DiagnosticKind(StrEnum):
    """Transcript shapes recognised by the pattern table, in priority order."""

    CONTEXT_ERROR = "context_error"
    LINE_ERROR = "line_error"
    CRITICAL_ERROR = "critical_error"
    PACKAGE_WARNING = "package_warning"
    LATEX_WARNING = "latex_warning"
    BAD_BOX = "bad_box"


class DiagnosticRule(Protocol):
    @property
    def kind(self) -> DiagnosticKind: ...

    def apply(self, text: str, pos: int, current_file: str | None) -> tuple[Diagnostic, int] | None: ...


Extractor: TypeAlias = Callable[[re.Match[str], str | None], Diagnostic | None]


@dataclass(frozen=True, slots=True)
class PatternRule:
    kind: DiagnosticKind
    regex: re.Pattern[str]
    extract: Extractor

    def apply(self, text: str, pos: int, current_file: str | None) -> tuple[Diagnostic, int] | None:
        """Match at `pos`; return the diagnostic and the end of the matched span."""
        match = self.regex.match(text, pos)
        if match is None:
            return None
        diagnostic = self.extract(match, current_file)
        if diagnostic is None:
            return None
        return diagnostic, match.end()


_INPUT_LINE_RE = re.compile(r"on input line (\d+)\.")
_WHITESPACE_RUN_RE = re.compile(r"\s+")

# Errors such as "Undefined control sequence" print the offending input line
# split in two: `l.<N> <before>` and, below it, the rest indented by exactly
# the width of the first half.
_CONTEXT_ERROR_RE = re.compile(r"!\s+((?:.*\n)+?(l\.(\d+).*)\n(\s+).*)\n")

# Anything raised through \errmessage (\GenericError, \PackageError, ...).
_LINE_ERROR_RE = re.compile(r"!\s+((?:.*\n)+?l\.(\d+)\s(?:.*\S.*\n)?)")

# "Emergency stop.", "Missing \begin{document}.", "File ended while scanning ..."
_CRITICAL_ERROR_RE = re.compile(r"!\s+(.+)\n")

# \ClassWarning, \PackageWarning and "LaTeX Font Warning" style messages whose
# continuation lines repeat the emitter name in parentheses.
_PACKAGE_WARNING_RE = re.compile(r"((?:Class|Package|LaTeX) (\S+) Warning: .+\n)(?:\(\2\)\s([^\n]+)\n)*(?!\(\2\))")

# \@latex@warning output; \MessageBreak is not always used, so read up to a
# full stop that ends a line.
_LATEX_WARNING_RE = re.compile(r"LaTeX Warning: (?:(?!\.\n).|\n)+\.\n")


def _extract_context_error(match: re.Match[str], current_file: str | None) -> Diagnostic | None:
    if len(match.group(4)) != len(match.group(2)):
        return None
    return Diagnostic(Severity.ERROR, current_file, int(match.group(3)), match.group(1))


def _extract_line_error(match: re.Match[str], current_file: str | None) -> Diagnostic | None:
    return Diagnostic(Severity.ERROR, current_file, int(match.group(2)), match.group(1).strip())


def _extract_critical_error(match: re.Match[str], current_file: str | None) -> Diagnostic | None:
    return Diagnostic(Severity.ERROR, current_file, 0, match.group(1))


def _extract_package_warning(match: re.Match[str], current_file: str | None) -> Diagnostic | None:
    name = re.escape(match.group(2))
    continuation = re.compile(rf"\({name}\)\s([^\n]+)\n")
    merged = continuation.sub(r" \1 ", match.group(0))
    description = _WHITESPACE_RUN_RE.sub(" ", merged).strip()
    return Diagnostic(Severity.WARNING, current_file, _input_line(match.group(0)), description)


def _extract_latex_warning(match: re.Match[str], current_file: str | None) -> Diagnostic | None:
    description = match.group(0).replace("\n", "").strip()
    return Diagnostic(Severity.WARNING, current_file, _input_line(description), description)


def _input_line(text: str) -> int:
    found = _INPUT_LINE_RE.search(text)
    return int(found.group(1)) if found else 0


_BAD_BOX_HEADER_RE = re.compile(r"(?:Under|Over)full \\[hv]box\s*\([^)]+\) in paragraph at lines (\d+)--\d+\n")


@dataclass(frozen=True, slots=True)
class BadBoxRule:
    """Under/overfull box notice followed by the offending material.

    The engine breaks the material at `wrap_width` bytes of output, so every
    line exactly that long continues on the next one. The final line is the
    first shorter one (or the last line of the transcript).
    """

    wrap_width: int
    kind: DiagnosticKind = DiagnosticKind.BAD_BOX

    def apply(self, text: str, pos: int, current_file: str | None) -> tuple[Diagnostic, int] | None:
        header = _BAD_BOX_HEADER_RE.match(text, pos)
        if header is None:
            return None

        wrapped: list[str] = []
        cursor = header.end()
        while (newline := text.find("\n", cursor)) != -1:
            line = text[cursor:newline]
            if byte_length(line) != self.wrap_width:
                break
            wrapped.append(line)
            cursor = newline + 1

        newline = text.find("\n", cursor)
        last = text[cursor:] if newline == -1 else text[cursor:newline]
        end = cursor + len(last)
        if not last:
            # A blank line right after the wrapped run: the last wrapped line is the final one.
            if not wrapped:
                return None
            last = wrapped.pop()
            end = cursor - 1

        description = header.group(0) + "".join(wrapped) + last.rstrip()
        return Diagnostic(Severity.BOX_OVERFLOW, current_file, int(header.group(1)), description), end


@lru_cache(maxsize=8)
def pattern_table(wrap_width: int) -> tuple[DiagnosticRule, ...]:
    """Return the ordered rule table for a given engine wrap width."""
    return (
        PatternRule(DiagnosticKind.CONTEXT_ERROR, _CONTEXT_ERROR_RE, _extract_context_error),
        PatternRule(DiagnosticKind.LINE_ERROR, _LINE_ERROR_RE, _extract_line_error),
        PatternRule(DiagnosticKind.CRITICAL_ERROR, _CRITICAL_ERROR_RE, _extract_critical_error),
        PatternRule(DiagnosticKind.PACKAGE_WARNING, _PACKAGE_WARNING_RE, _extract_package_warning),
        PatternRule(DiagnosticKind.LATEX_WARNING, _LATEX_WARNING_RE, _extract_latex_warning),
        BadBoxRule(wrap_width),
    )


def match_diagnostic(
    rules: tuple[DiagnosticRule, ...],
    text: str,
    pos: int,
    current_file: str | None,
) -> tuple[Diagnostic, int] | None:
    """Try each rule in order at `pos`; first produced diagnostic wins."""
    for rule in rules:
        matched = rule.apply(text, pos, current_file)
        if matched is not None:
            return matched
    return None
