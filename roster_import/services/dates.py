"""Date recognition for roster cells written in assorted day-first formats."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Tuple

MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

TWO_DIGIT_YEAR_PIVOT = 50


@dataclass(frozen=True)
class DateContext:
    """Month being imported; lets bare "DD MM" or "DD" cells resolve."""

    year: int
    month: int


def expand_year(year: str) -> int:
    """Expand a two-digit year: above the pivot is 19YY, otherwise 20YY."""
    value = int(year)
    if len(year) == 4:
        return value
    return 1900 + value if value > TWO_DIGIT_YEAR_PIVOT else 2000 + value


def month_number(name: str) -> Optional[int]:
    return MONTHS.get(name.lower())


def build_date(year: int, month: int, day: int) -> Optional[str]:
    """Return ISO date if (year, month, day) names a real calendar day."""
    try:
        value = date(year, month, day)
    except ValueError:
        return None
    if (value.year, value.month, value.day) != (year, month, day):
        return None
    return value.isoformat()


def _numeric(match: re.Match) -> Tuple[int, int, int]:
    day, month, year = match.groups()
    return expand_year(year), int(month), int(day)


def _named_month(match: re.Match) -> Optional[Tuple[int, int, int]]:
    day, name, year = match.groups()
    month = month_number(name)
    if month is None:
        return None
    return expand_year(year), month, int(day)


def _iso(match: re.Match) -> Tuple[int, int, int]:
    year, month, day = match.groups()
    return int(year), int(month), int(day)


_Extractor = Callable[[re.Match], Optional[Tuple[int, int, int]]]

# Priority order matters: four-digit years first, then two-digit years.
STRICT_PATTERNS: List[Tuple[str, re.Pattern, _Extractor]] = [
    ("DD/MM/YYYY", re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$"), _numeric),
    ("DD-MM-YYYY", re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$"), _numeric),
    ("DD MM YYYY", re.compile(r"^(\d{1,2})\s+(\d{1,2})\s+(\d{4})$"), _numeric),
    ("DD-MMM-YYYY", re.compile(r"^(\d{1,2})-([A-Za-z]{3,9})-(\d{4})$"), _named_month),
    ("DD/MM/YY", re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2})$"), _numeric),
    ("DD-MM-YY", re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{2})$"), _numeric),
    ("DD MM YY", re.compile(r"^(\d{1,2})\s+(\d{1,2})\s+(\d{2})$"), _numeric),
    ("DD-MMM-YY", re.compile(r"^(\d{1,2})-([A-Za-z]{3,9})-(\d{2})$"), _named_month),
    ("YYYY-MM-DD", re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$"), _iso),
]

_DAY_MONTH = re.compile(r"^(\d{1,2})\s+(\d{1,2})$")
_DAY_ONLY = re.compile(r"^(\d{1,2})$")


def recognize_strict_date(text: str) -> Optional[str]:
    """Recognize a date that carries its own year; no context fallbacks."""
    clean = text.strip()
    for _name, pattern, extract in STRICT_PATTERNS:
        match = pattern.match(clean)
        if not match:
            continue
        parts = extract(match)
        if parts is None:
            continue
        iso = build_date(*parts)
        if iso is not None:
            return iso
    return None


def recognize_date(text: str, context: DateContext | None = None) -> Optional[str]:
    """
    Recognize a roster date and return it as ``YYYY-MM-DD``.

    Args:
        text: Raw fragment text
        context: Target month/year for degraded "DD MM" and "DD" cells.
            Without it those forms are not accepted.

    Returns:
        ISO date string, or None if no pattern yields a real calendar day
    """
    iso = recognize_strict_date(text)
    if iso is not None or context is None:
        return iso

    clean = text.strip()
    match = _DAY_MONTH.match(clean)
    if match:
        return build_date(context.year, int(match.group(2)), int(match.group(1)))

    match = _DAY_ONLY.match(clean)
    if match:
        return build_date(context.year, context.month, int(match.group(1)))
    return None
