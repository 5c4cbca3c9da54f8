import textwrap

import pytest

from texlogpy.diagnostics import Severity
from texlogpy.parser import LogParserOptions, NullFileOracle, SortBy, parse_log
from texlogpy.pipeline import run_check

SOURCE = textwrap.dedent(
    """
    Underfull \\hbox (badness 10000) in paragraph at lines 1--2
    []\\OT1/cmr/m/n/10 a
    LaTeX Warning: Reference `x' on page 1 undefined on input line 3.
    ! Emergency stop.
    LaTeX Warning: Later on input line 9.
    """
).lstrip()


def test_run_check_groups_by_severity() -> None:
    result = run_check(SOURCE)

    assert [d.severity for d in result.diagnostics] == [
        Severity.ERROR,
        Severity.WARNING,
        Severity.WARNING,
        Severity.BOX_OVERFLOW,
    ]
    assert [d.row for d in result.diagnostics if d.severity == Severity.WARNING] == [3, 9]
    assert result.has_errors is True
    assert result.counts == {Severity.ERROR: 1, Severity.WARNING: 2, Severity.BOX_OVERFLOW: 1}


def test_run_check_occurrence_order_matches_parse() -> None:
    options = LogParserOptions(sort_by=SortBy.OCCURRENCE)

    result = run_check(SOURCE, options)

    assert result.diagnostics == result.parse.diagnostics
    assert result.sort_by == SortBy.OCCURRENCE


def test_run_check_reuses_provided_parse() -> None:
    parsed = parse_log(SOURCE)

    result = run_check("ignored", parse=parsed)

    assert result.parse is parsed
    assert len(result.diagnostics) == 4


def test_run_check_rejects_parse_with_oracle() -> None:
    parsed = parse_log(SOURCE)

    with pytest.raises(ValueError, match="Pass either parse or root_file/oracle, not both"):
        run_check(SOURCE, parse=parsed, oracle=NullFileOracle())


def test_run_check_offers_aux_removal() -> None:
    removed: list[bool] = []

    result = run_check(
        "! File ended while scanning use of \\@newl@bel.\n",
        confirm=lambda message: True,
        remove_aux_files=lambda: removed.append(True),
    )

    assert result.advisory is not None
    assert result.aux_removal_accepted is True
    assert removed == [True]


def test_run_check_reports_advisory_without_prompt() -> None:
    result = run_check("! File ended while scanning use of \\@newl@bel.\n")

    assert result.advisory is not None
    assert result.aux_removal_accepted is None


def test_run_check_without_errors() -> None:
    result = run_check("LaTeX Warning: Only this on input line 1.\n")

    assert result.has_errors is False
    assert result.advisory is None
