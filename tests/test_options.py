import pytest

from texlogpy.diagnostics import Severity
from texlogpy.parser import DEFAULT_WRAP_WIDTH, LogParserOptions, SortBy


def test_defaults() -> None:
    options = LogParserOptions()

    assert options.min_severity == Severity.BOX_OVERFLOW
    assert options.sort_by == SortBy.SEVERITY
    assert options.wrap_width == DEFAULT_WRAP_WIDTH == 79


def test_wrap_width_must_be_positive() -> None:
    with pytest.raises(ValueError, match="wrap_width must be positive"):
        LogParserOptions(wrap_width=0)


def test_from_environ_reads_max_print_line() -> None:
    options = LogParserOptions.from_environ({"max_print_line": "1000"})

    assert options.wrap_width == 1000


def test_from_environ_ignores_missing_or_blank_value() -> None:
    assert LogParserOptions.from_environ({}).wrap_width == 79
    assert LogParserOptions.from_environ({"max_print_line": " "}).wrap_width == 79


def test_from_environ_rejects_non_integer() -> None:
    with pytest.raises(ValueError, match="max_print_line must be an integer"):
        LogParserOptions.from_environ({"max_print_line": "wide"})


def test_from_environ_applies_overrides_last() -> None:
    options = LogParserOptions.from_environ(
        {"max_print_line": "100"},
        wrap_width=120,
        sort_by=SortBy.OCCURRENCE,
    )

    assert options.wrap_width == 120
    assert options.sort_by == SortBy.OCCURRENCE


def test_severity_parse_accepts_cli_spellings() -> None:
    assert Severity.parse("error") == Severity.ERROR
    assert Severity.parse("Warning") == Severity.WARNING
    assert Severity.parse("badbox") == Severity.BOX_OVERFLOW
    assert Severity.parse("box-overflow") == Severity.BOX_OVERFLOW
    with pytest.raises(ValueError, match="Unknown severity"):
        Severity.parse("fatal")


def test_severity_ordering() -> None:
    assert Severity.BOX_OVERFLOW < Severity.WARNING < Severity.ERROR
