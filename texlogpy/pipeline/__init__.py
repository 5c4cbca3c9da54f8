"""Parse-once entrypoints and result carriers."""

from texlogpy.pipeline.entrypoints import order_diagnostics, run_check
from texlogpy.pipeline.results import CheckRunResult

__all__ = [
    "CheckRunResult",
    "order_diagnostics",
    "run_check",
]
