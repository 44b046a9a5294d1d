"""Shift-type classification for roster cells."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from roster_import.domain.registry import StaffRegistry
from roster_import.domain.roster import ShiftType

from .dates import recognize_strict_date
from .staff import match_staff

# Tier 1: shift word together with its bracketed hours, and full phrases.
LABELLED_PATTERNS: List[Tuple[Tuple[str, ...], ShiftType]] = [
    (("evening", "(4-10)"), ShiftType.EVENING_SHIFT),
    (("morning", "(9-4)"), ShiftType.MORNING_SHIFT),
    (("saturday", "(12-10)"), ShiftType.SATURDAY_REGULAR),
    (("night duty",), ShiftType.NIGHT_DUTY),
    (("public holiday",), ShiftType.SUNDAY_HOLIDAY_SPECIAL),
]

# Tier 2: bare hour ranges, 12h and 24h spellings.
TIME_RANGES: List[Tuple[Tuple[str, ...], ShiftType]] = [
    (("12-10", "12-22"), ShiftType.SATURDAY_REGULAR),
    (("4-10", "16-22"), ShiftType.EVENING_SHIFT),
    (("9-4", "9-16"), ShiftType.MORNING_SHIFT),
    (("22-9",), ShiftType.NIGHT_DUTY),
]

# Tier 3: whole words.
SHIFT_WORDS: List[Tuple[re.Pattern, ShiftType]] = [
    (re.compile(r"\bnight\b"), ShiftType.NIGHT_DUTY),
    (re.compile(r"\bsaturday\b"), ShiftType.SATURDAY_REGULAR),
    (re.compile(r"\b(sunday|special|holiday)\b"), ShiftType.SUNDAY_HOLIDAY_SPECIAL),
    (re.compile(r"\bmorning\b"), ShiftType.MORNING_SHIFT),
    (re.compile(r"\bevening\b"), ShiftType.EVENING_SHIFT),
]

NIGHT_CODE = "N"


def classify_shift(text: str, registry: StaffRegistry) -> Optional[ShiftType]:
    """
    Classify a fragment as one of the five shift types.

    Staff names are rejected first, so a name starting with the night-duty
    letter is never read as a shift; full dates are rejected so a date such
    as 14-10-2025 is not read as the 4-10 range.

    Args:
        text: Raw fragment text
        registry: Known staff identities, used for the name guard

    Returns:
        ShiftType or None
    """
    if match_staff(text, registry) is not None:
        return None
    if recognize_strict_date(text) is not None:
        return None

    lower = text.lower()
    trimmed = text.strip()

    for needles, shift in LABELLED_PATTERNS:
        if all(needle in lower for needle in needles):
            return shift

    for ranges, shift in TIME_RANGES:
        if any(time_range in lower for time_range in ranges):
            return shift

    for pattern, shift in SHIFT_WORDS:
        if pattern.search(lower):
            return shift

    if trimmed.upper() == NIGHT_CODE:
        return ShiftType.NIGHT_DUTY
    return None
