"""Tests for the date recognizer."""

from datetime import date

import pytest

from roster_import.services.dates import DateContext, expand_year, recognize_date, recognize_strict_date


@pytest.mark.parametrize(
    "text,expected",
    [
        ("01/07/2025", "2025-07-01"),
        ("1/7/2025", "2025-07-01"),
        ("01-07-2025", "2025-07-01"),
        ("01 07 2025", "2025-07-01"),
        ("05-Jul-2025", "2025-07-05"),
        ("05-JULY-2025", "2025-07-05"),
        ("05-Sept-2025", "2025-09-05"),
        ("05/07/25", "2025-07-05"),
        ("05-07-25", "2025-07-05"),
        ("05 07 25", "2025-07-05"),
        ("05-jul-25", "2025-07-05"),
        ("2025-07-05", "2025-07-05"),
        ("  12/08/2025 ", "2025-08-12"),
    ],
)
def test_recognize_supported_formats(text, expected):
    assert recognize_date(text) == expected


@pytest.mark.parametrize("text", ["31/06/2025", "29/02/2025", "00/07/2025", "12/13/2025", "05-Foo-2025"])
def test_rejects_impossible_dates(text):
    """Out-of-range values are rejected instead of rolling over."""
    assert recognize_date(text) is None


def test_leap_day_accepted():
    assert recognize_date("29/02/2024") == "2024-02-29"


def test_two_digit_year_pivot():
    assert expand_year("75") == 1975
    assert expand_year("51") == 1951
    assert expand_year("50") == 2050
    assert expand_year("2025") == 2025
    assert recognize_date("05/07/75") == "1975-07-05"


@pytest.mark.parametrize("text", ["NARAYYA", "Evening Shift (4-10)", "", "4-10", "PDF Import"])
def test_non_dates(text):
    assert recognize_date(text) is None


def test_degraded_forms_need_context():
    """Bare "DD MM" and "DD" cells only resolve against a target month."""
    assert recognize_date("01 07") is None
    assert recognize_date("15") is None

    ctx = DateContext(year=2025, month=7)
    assert recognize_date("01 07", ctx) == "2025-07-01"
    assert recognize_date("15", ctx) == "2025-07-15"
    assert recognize_date("32", ctx) is None
    assert recognize_date("31 06", ctx) is None


def test_strict_recognizer_ignores_context_forms():
    assert recognize_strict_date("15") is None
    assert recognize_strict_date("15/07/2025") == "2025-07-15"


@pytest.mark.parametrize("text", ["01/07/2025", "5-Jul-25", "2025-12-31", "09 11 99"])
def test_round_trip_through_day_first_format(text):
    """ISO output reformatted as DD/MM/YYYY recognizes to the same ISO date."""
    iso = recognize_date(text)
    assert iso is not None
    reformatted = date.fromisoformat(iso).strftime("%d/%m/%Y")
    assert recognize_date(reformatted) == iso
