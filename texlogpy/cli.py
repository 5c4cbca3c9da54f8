from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from texlogpy.cleanup import remove_auxiliary_files
from texlogpy.diagnostics import Severity
from texlogpy.parser import FilesystemFileOracle, LogParserOptions, NullFileOracle, SortBy
from texlogpy.pipeline import run_check
from texlogpy.report import render_html, render_text


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Extract errors, warnings and bad boxes from a TeX transcript.")
    parser.add_argument("log", help="Transcript or .log file to read ('-' for stdin).")
    parser.add_argument(
        "--root-file",
        type=Path,
        default=None,
        help="Root .tex document; relative paths in the transcript are resolved against its directory.",
    )
    parser.add_argument(
        "--min-severity",
        type=Severity.parse,
        default=Severity.BOX_OVERFLOW,
        help="Lowest severity to report: badbox, warning or error (defaults to badbox).",
    )
    parser.add_argument(
        "--sort-by",
        type=SortBy,
        choices=list(SortBy),
        default=SortBy.SEVERITY,
        help="Group by severity or keep transcript order.",
    )
    parser.add_argument("--format", choices=["text", "html"], default="text", help="Report format.")
    parser.add_argument(
        "--wrap-width",
        type=int,
        default=None,
        help="Engine line width (defaults to $max_print_line or 79).",
    )
    parser.add_argument(
        "--no-filesystem",
        action="store_true",
        help="Do not check the filesystem when deciding where file names end.",
    )
    parser.add_argument(
        "--ask-remove-aux",
        action="store_true",
        help="Offer to remove auxiliary files when a truncated .aux file is suspected.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log file-stack decisions to stderr.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, object] = {"min_severity": args.min_severity, "sort_by": args.sort_by}
    if args.wrap_width is not None:
        overrides["wrap_width"] = args.wrap_width
    try:
        options = LogParserOptions.from_environ(**overrides)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    try:
        text = sys.stdin.read() if args.log == "-" else Path(args.log).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        print(f"Failed to read log: {exc}", file=sys.stderr)
        return 2

    root_file: Path | None = args.root_file
    oracle = NullFileOracle() if args.no_filesystem else FilesystemFileOracle()
    confirm = _ask if args.ask_remove_aux and root_file is not None else None

    result = run_check(
        text,
        options,
        root_file=str(root_file) if root_file is not None else None,
        oracle=oracle,
        confirm=confirm,
        remove_aux_files=(lambda: _remove(root_file)) if root_file is not None else None,
    )

    if args.format == "html":
        print(render_html(result.diagnostics, sort_by=result.sort_by) or "")
    else:
        print(render_text(result.diagnostics))
    if result.advisory is not None and confirm is None:
        print(
            "note: a corrupt .aux file from a previous run was detected; "
            "remove it or rerun with --ask-remove-aux --root-file FILE",
            file=sys.stderr,
        )
    return 1 if result.has_errors else 0


def _ask(message: str) -> bool:
    answer = input(f"{message} [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


def _remove(root_file: Path) -> None:
    for path in remove_auxiliary_files(root_file):
        print(f"Removed {path}")


if __name__ == "__main__":
    raise SystemExit(main())
