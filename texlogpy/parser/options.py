"""Parser configuration options."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import StrEnum
import os
from typing import Final

from texlogpy.diagnostics import Severity

DEFAULT_WRAP_WIDTH: Final[int] = 79
"""TeX's default `max_print_line`."""

WRAP_WIDTH_ENV_VAR: Final[str] = "max_print_line"


class SortBy(StrEnum):
    """Order in which diagnostics leave the pipeline."""

    SEVERITY = "severity"
    OCCURRENCE = "occurrence"


@dataclass(frozen=True, slots=True)
class LogParserOptions:
    """Filtering, ordering and line-wrap settings for one parse."""

    min_severity: Severity = Severity.BOX_OVERFLOW
    sort_by: SortBy = SortBy.SEVERITY
    wrap_width: int = DEFAULT_WRAP_WIDTH

    def __post_init__(self) -> None:
        if self.wrap_width <= 0:
            raise ValueError(f"wrap_width must be positive, got {self.wrap_width}")

    @staticmethod
    def from_environ(
        environ: Mapping[str, str] | None = None,
        **overrides: object,
    ) -> "LogParserOptions":
        """Build options whose wrap width follows the engine's `max_print_line` variable."""
        env = os.environ if environ is None else environ
        options = LogParserOptions()
        raw = env.get(WRAP_WIDTH_ENV_VAR)
        if raw is not None and raw.strip():
            try:
                wrap_width = int(raw)
            except ValueError:
                raise ValueError(f"{WRAP_WIDTH_ENV_VAR} must be an integer, got {raw!r}") from None
            options = replace(options, wrap_width=wrap_width)
        if overrides:
            options = replace(options, **overrides)
        return options
