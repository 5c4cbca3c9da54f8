"""Build-tool rerun markers and the stale auxiliary file advisory."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import logging
import re
from typing import Final, TypeAlias

from texlogpy.diagnostics import Diagnostic

logger = logging.getLogger(__name__)

Confirm: TypeAlias = Callable[[str], bool]
RemoveAuxFiles: TypeAlias = Callable[[], None]

_LATEXMK_RULE_RE = re.compile(r"Latexmk: applying rule '(.*)'")

STALE_AUX_MARKER: Final[str] = "File ended while scanning use of"

STALE_AUX_MESSAGE: Final[str] = (
    "While typesetting, a corrupt .aux file from a previous run was detected. "
    "You should remove it and rerun the typesetting process. "
    "Do you want to remove the auxiliary files now?"
)


@dataclass(frozen=True, slots=True)
class StaleAuxAdvisory:
    """Emitted when the transcript suggests a truncated auxiliary file from an earlier run."""

    diagnostic: Diagnostic
    message: str = STALE_AUX_MESSAGE


def rerun_rule_at(text: str, pos: int) -> str | None:
    """Name of the latexmk rule starting a new engine pass at `pos`, if any."""
    match = _LATEXMK_RULE_RE.match(text, pos)
    return match.group(1) if match else None


def find_stale_aux_advisory(diagnostics: Sequence[Diagnostic]) -> StaleAuxAdvisory | None:
    """Scan from the most recent diagnostic backwards for a truncated-input error."""
    for diagnostic in reversed(diagnostics):
        if STALE_AUX_MARKER in diagnostic.description:
            return StaleAuxAdvisory(diagnostic=diagnostic)
    return None


def offer_aux_removal(
    advisory: StaleAuxAdvisory,
    confirm: Confirm,
    remove_aux_files: RemoveAuxFiles | None = None,
) -> bool:
    """Ask the host once; run `remove_aux_files` when accepted. Returns the answer."""
    logger.info("Stale auxiliary file suspected: %s", advisory.diagnostic.description)
    accepted = confirm(advisory.message)
    if accepted and remove_aux_files is not None:
        remove_aux_files()
    return accepted
