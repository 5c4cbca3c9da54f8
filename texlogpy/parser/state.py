"""Mutable cursor state for one transcript parse."""

from __future__ import annotations

from dataclasses import dataclass, field
import re

_WHITESPACE_RE = re.compile(r"\s*")
_SKIP_RE = re.compile(r"[^\n\r()]+")


@dataclass(slots=True)
class ParseState:
    """File context and read position while walking a transcript.

    `stray_paren_depth` counts `(` that did not open a file inside the current
    file context, so that their closing `)` is not taken as the end of
    `current_file`.
    """

    text: str
    position: int = 0
    current_file: str | None = None
    file_stack: list[str | None] = field(default_factory=list)
    stray_paren_depth: int = 0

    @property
    def buffer(self) -> str:
        """Remaining unread text."""
        return self.text[self.position :]

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.text)

    @property
    def head(self) -> str:
        return self.text[self.position] if not self.at_end else ""

    def advance_to(self, position: int) -> None:
        if position < self.position:
            raise ValueError(f"Cannot move backwards from {self.position} to {position}")
        self.position = position

    def skip_whitespace(self) -> None:
        self.position = _WHITESPACE_RE.match(self.text, self.position).end()

    def skip_plain_text(self) -> None:
        """Move past ordinary text up to the next newline or parenthesis."""
        match = _SKIP_RE.match(self.text, self.position)
        if match is not None:
            self.position = match.end()

    def open_file(self, path: str, end: int) -> None:
        self.file_stack.append(self.current_file)
        self.current_file = path
        self.stray_paren_depth = 0
        self.advance_to(end)

    def open_stray_paren(self) -> None:
        self.stray_paren_depth += 1
        self.position += 1

    def close_paren(self) -> None:
        """Consume `)`, closing a stray group if one is open, else the current file."""
        if self.stray_paren_depth > 0:
            self.stray_paren_depth -= 1
        elif self.file_stack:
            self.current_file = self.file_stack.pop()
        self.position += 1
