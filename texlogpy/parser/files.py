"""File-inclusion markers: existence oracle contracts and the path resolver.

The engine announces every input file as `(<path>` and its end as `)`. Paths
are not delimited, are wrapped at a fixed byte width like any other output,
and share the transcript with ordinary parentheses. The resolver therefore
extends a candidate path one segment at a time, asking an existence oracle
about each prefix and using the line length to tell engine wrapping from a
genuine end of path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
import logging
from pathlib import Path
import re
from types import MappingProxyType
from typing import Mapping, Protocol

from texlogpy.parser.options import DEFAULT_WRAP_WIDTH

logger = logging.getLogger(__name__)


class FileExistence(StrEnum):
    """Tri-state answer of a file existence oracle."""

    EXISTS = "exists"
    DOES_NOT_EXIST = "does_not_exist"
    INDETERMINATE = "indeterminate"


class FileOracle(Protocol):
    """Host capability answering whether a path names an existing file."""

    def lookup(self, path: str) -> FileExistence: ...


@dataclass(frozen=True, slots=True)
class NullFileOracle:
    """Default oracle that never knows (no host filesystem configured)."""

    def lookup(self, path: str) -> FileExistence:
        return FileExistence.INDETERMINATE


@dataclass(frozen=True, slots=True)
class SetFileOracle:
    """In-memory oracle: listed paths exist, everything else does not."""

    known_paths: frozenset[str]

    def lookup(self, path: str) -> FileExistence:
        if path in self.known_paths:
            return FileExistence.EXISTS
        return FileExistence.DOES_NOT_EXIST


@dataclass(frozen=True, slots=True)
class MappingFileOracle:
    """In-memory oracle with explicit answers and a fallback for unlisted paths."""

    answers: Mapping[str, FileExistence] = field(default_factory=lambda: MappingProxyType({}))
    default: FileExistence = FileExistence.INDETERMINATE

    def lookup(self, path: str) -> FileExistence:
        return self.answers.get(path, self.default)


@dataclass(frozen=True, slots=True)
class FilesystemFileOracle:
    """Oracle backed by the local filesystem, resolving relative paths against `base_dir`."""

    base_dir: Path = field(default_factory=Path.cwd)

    def lookup(self, path: str) -> FileExistence:
        if not path:
            return FileExistence.INDETERMINATE
        target = self.base_dir / path
        try:
            if target.is_file():
                return FileExistence.EXISTS
            # A directory is a valid prefix of a longer path but never a complete one.
            if target.exists():
                return FileExistence.INDETERMINATE
            return FileExistence.DOES_NOT_EXIST
        except (OSError, ValueError):
            return FileExistence.INDETERMINATE


@dataclass(frozen=True, slots=True)
class FileReference:
    """A resolved file-inclusion marker: the path and the position just past it."""

    path: str
    end: int


@dataclass(frozen=True, slots=True)
class _Candidate:
    """Best indeterminate-but-plausible path seen so far, with where to resume."""

    path: str
    end: int


# Paths are recognised only with an explicit root:
#   ./abc   /abc   .\abc   C:\abc   \\server\abc
# optionally double-quoted (MiKTeX quotes paths containing spaces).
_PATH_PREFIX = r"(?:\./|/|\.\\|[a-zA-Z]:\\|\\\\)"
_FILE_REFERENCE_RE = re.compile(rf'\("({_PATH_PREFIX}[^"]+)"|\(({_PATH_PREFIX}[^ ()\n]+)')
_PATH_BREAK_RE = re.compile(r"[/\\ ()\n]")
_FILENAME_RE = re.compile(r"[^.]\.[a-zA-Z0-9]{1,4}\Z")


def base_directory(root_file: str | None) -> str:
    """Directory part of `root_file`, including its trailing separator."""
    if not root_file:
        return ""
    index = max(root_file.rfind("/"), root_file.rfind("\\"))
    return "" if index == -1 else root_file[: index + 1]


def byte_length(text: str) -> int:
    """Length as the engine counts it when wrapping: UTF-8 bytes, not characters."""
    return len(text.encode("utf-8", errors="surrogatepass"))


def looks_like_filename(path: str) -> bool:
    return _FILENAME_RE.search(path) is not None


def resolve_file_reference(
    text: str,
    pos: int,
    oracle: FileOracle,
    *,
    root_file: str | None = None,
    wrap_width: int = DEFAULT_WRAP_WIDTH,
) -> FileReference | None:
    """Resolve a file-inclusion marker at `text[pos] == "("`.

    Returns `None` when the parenthesis does not open a file.
    """
    match = _FILE_REFERENCE_RE.match(text, pos)
    if match is None:
        return None

    quoted = match.group(1)
    if quoted is not None:
        return FileReference(path=quoted.replace("\n", ""), end=match.end())

    path = match.group(2)
    cursor = match.end()
    base = base_directory(root_file) if path.startswith(".") else ""
    # Counted from the opening parenthesis only: a path that starts mid-line is
    # assumed never to wrap. Wrapped lines keep adding to the same count, so a
    # continuation is only possible when the total is a multiple of the width.
    scanned_bytes = byte_length(match.group(0))
    candidate: _Candidate | None = None

    while (brk := _PATH_BREAK_RE.search(text, cursor)) is not None:
        chunk = text[cursor : brk.start()]
        path += chunk
        scanned_bytes += byte_length(chunk)
        separator = brk.group()

        if separator in "()":
            cursor = brk.start()
            break
        cursor = brk.end()

        existence = _query(oracle, base + path)
        if separator in "/\\":
            if existence == FileExistence.DOES_NOT_EXIST:
                return None
        else:
            if existence == FileExistence.EXISTS:
                break
            if existence == FileExistence.INDETERMINATE and looks_like_filename(path):
                candidate = _Candidate(path=path, end=cursor)

        if separator != "\n":
            path += separator
            scanned_bytes += 1
        elif scanned_bytes % wrap_width:
            # The line stopped short of the wrap width, so the path really ends here.
            if existence == FileExistence.DOES_NOT_EXIST:
                return None
            if not looks_like_filename(path):
                if candidate is None:
                    return None
                path, cursor = candidate.path, candidate.end
            break

    return FileReference(path=path.rstrip(), end=cursor)


def _query(oracle: FileOracle, path: str) -> FileExistence:
    try:
        return oracle.lookup(path)
    except Exception:
        logger.warning("File existence lookup failed for %r; treating as indeterminate", path, exc_info=True)
        return FileExistence.INDETERMINATE
