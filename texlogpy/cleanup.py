"""Removal of auxiliary files left next to a root document."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

logger = logging.getLogger(__name__)

AUX_SUFFIXES: Final[tuple[str, ...]] = (
    ".aux",
    ".toc",
    ".lof",
    ".lot",
    ".out",
    ".bbl",
    ".blg",
    ".nav",
    ".snm",
    ".fls",
    ".fdb_latexmk",
)


def auxiliary_files(root_file: Path) -> list[Path]:
    """Existing auxiliary files that share the root document's stem."""
    return [path for suffix in AUX_SUFFIXES if (path := root_file.with_suffix(suffix)).is_file()]


def remove_auxiliary_files(root_file: Path) -> list[Path]:
    removed: list[Path] = []
    for path in auxiliary_files(root_file):
        path.unlink()
        logger.info("Removed %s", path)
        removed.append(path)
    return removed
