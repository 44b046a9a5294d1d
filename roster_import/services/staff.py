"""Staff-name matching against the known staff registry."""

from __future__ import annotations

import re
from typing import Optional

from roster_import.domain.registry import StaffRegistry, normalize_name, split_reserve

MIN_NAME_LENGTH = 3

# Structural words that never appear inside a staff name cell.
EXCLUDED_SUBSTRINGS = (
    "SHIFT", "DUTY", "MORNING", "EVENING", "NIGHT", "SATURDAY", "SUNDAY",
    "HRS", "DATE", "TIME", "SYSTEM", "EDITED",
)
EXCLUDED_WORDS = re.compile(r"\b(AM|PM|BY|AT|LAST)\b")
_DIGITS = re.compile(r"^\d+$")
_SHORT_CODE = re.compile(r"^[A-Z]{1,2}$")


def is_excluded_token(token: str) -> bool:
    """True for normalized tokens that cannot be a staff name."""
    if len(token) < MIN_NAME_LENGTH:
        return True
    if _DIGITS.match(token) or _SHORT_CODE.match(token):
        return True
    if any(word in token for word in EXCLUDED_SUBSTRINGS):
        return True
    return EXCLUDED_WORDS.search(token) is not None


def match_staff(text: str, registry: StaffRegistry) -> Optional[str]:
    """
    Resolve a fragment to a canonical staff name.

    An exact registry hit wins. Otherwise the ``(R)`` marker is stripped from
    both sides and base names are compared; the registry form returned always
    carries the marker if and only if the token did.

    Args:
        text: Raw fragment text
        registry: Known staff identities

    Returns:
        Canonical registry name, or None
    """
    token = normalize_name(text)
    if is_excluded_token(token):
        return None

    exact = registry.lookup(token)
    if exact is not None:
        return exact

    base, reserve = split_reserve(token)
    if len(base) < MIN_NAME_LENGTH:
        return None
    return registry.lookup_base(base, reserve)
