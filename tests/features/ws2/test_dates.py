"""Summary: Tests for partial-precision date parsing and comparison.
Why: Guard precision tagging, absent handling and malformed input errors."""

from __future__ import annotations

import datetime

import pytest

from mbws.features.ws2.domain.dates import DatePrecision, FlexibleDate
from mbws.features.ws2.domain.errors import ErrorKind, FieldDecodeError


@pytest.mark.parametrize(
    ("raw", "precision"),
    [
        ("2007", DatePrecision.YEAR),
        ("2007-09", DatePrecision.YEAR_MONTH),
        ("2007-09-21", DatePrecision.FULL),
    ],
)
def test_parse_tags_precision_by_hyphen_count(raw: str, precision: DatePrecision) -> None:
    value = FlexibleDate.parse(raw)

    assert value.precision is precision
    assert value.render() == raw


def test_parse_full_date_components() -> None:
    value = FlexibleDate.parse("2007-09-21")

    assert (value.year, value.month, value.day) == (2007, 9, 21)
    assert value.to_date() == datetime.date(2007, 9, 21)


def test_year_only_never_carries_month_or_day() -> None:
    value = FlexibleDate.parse("1988")

    assert value.month is None
    assert value.day is None
    assert value.to_date() == datetime.date(1988, 1, 1)


@pytest.mark.parametrize("raw", ["", "   ", None])
def test_empty_text_is_absent(raw: str | None) -> None:
    value = FlexibleDate.parse(raw)

    assert value.is_absent
    assert value is FlexibleDate.absent()
    assert value.to_date() is None
    assert value.render() == ""
    assert not value


def test_absent_never_equals_a_real_date() -> None:
    absent = FlexibleDate.absent()

    assert absent != FlexibleDate.parse("0001-01-01")
    assert absent != FlexibleDate.parse("1970-01-01")
    assert absent != FlexibleDate.parse("1970")


def test_surrounding_whitespace_is_ignored() -> None:
    assert FlexibleDate.parse("  1991-04-30\n") == FlexibleDate.parse("1991-04-30")


@pytest.mark.parametrize(
    "raw",
    [
        "2007-09-21-01",  # too many separators
        "07",  # short year
        "2007-9",  # single-digit month
        "2007-13",  # month out of range
        "2007-02-30",  # day out of range
        "abcd",
        "2007/09/21",
        "\u0662\u0660\u0660\u0667",  # Arabic-Indic digits
        "\uff12\uff10\uff10\uff17-\uff10\uff19",  # fullwidth digits
    ],
)
def test_malformed_dates_raise_field_decode_error(raw: str) -> None:
    with pytest.raises(FieldDecodeError) as excinfo:
        _ = FlexibleDate.parse(raw, field="begin")

    assert excinfo.value.field == "begin"
    assert excinfo.value.raw == raw
    assert excinfo.value.kind is ErrorKind.FIELD_DECODE


def test_equality_respects_precision() -> None:
    assert FlexibleDate.parse("2007") != FlexibleDate.parse("2007-01-01")
    assert FlexibleDate.parse("2007-01") != FlexibleDate.parse("2007-01-01")
    assert FlexibleDate.parse("2007-01") == FlexibleDate.parse("2007-01")


def test_ordering_puts_absent_first_and_coarser_values_before_finer() -> None:
    values = [
        FlexibleDate.parse("2007-01-01"),
        FlexibleDate.parse("2007"),
        FlexibleDate.absent(),
        FlexibleDate.parse("1991-04"),
        FlexibleDate.parse("2007-01"),
    ]

    assert [value.render() for value in sorted(values)] == [
        "",
        "1991-04",
        "2007",
        "2007-01",
        "2007-01-01",
    ]


def test_constructor_rejects_inconsistent_components() -> None:
    with pytest.raises(ValueError):
        _ = FlexibleDate(DatePrecision.YEAR, 2007, 5, None)
    with pytest.raises(ValueError):
        _ = FlexibleDate(DatePrecision.ABSENT, 2007, None, None)


def test_values_are_hashable() -> None:
    lookup = {FlexibleDate.parse("2007-09"): "sept"}

    assert lookup[FlexibleDate.parse("2007-09")] == "sept"
