"""Row clustering of page fragments, with multiline-remark merging."""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

from roster_import.config import REMARKS_MIN_COLUMNS, ROW_TOLERANCE
from roster_import.domain.roster import TextFragment

from .recognizers import FieldRecognizers

logger = logging.getLogger(__name__)

Row = List[TextFragment]

REMARK_KEYWORDS = re.compile(
    r"\b(public|holiday|cyclone|testing|working|fine|emergency|special|event|"
    r"celebration|festival|is|on|that|everything|and|the|for)\b"
)
NON_REMARK_WORDS = re.compile(
    r"\b(shift|duty|morning|evening|night|saturday|sunday|date|time|staff|edited|last)\b"
)
_DIGITS = re.compile(r"^\d+$")
_ABBREVIATION = re.compile(r"^[A-Z]{1,3}$")
_PROSE = re.compile(r"^[A-Za-z\s*]+$")
MIN_PROSE_LENGTH = 8


def cluster_rows(fragments: Sequence[TextFragment], tolerance: float = ROW_TOLERANCE) -> List[Row]:
    """
    Group fragments into visual rows.

    Fragments are taken from the top of the page down. A fragment joins the
    current row when it lies within ``tolerance`` of the last fragment placed
    there; otherwise it opens a new row. Each row is returned sorted left to
    right.
    """
    rows: List[Row] = []
    current: Row = []
    current_y = None

    for fragment in sorted(fragments, key=lambda f: f.y):
        if current_y is None or abs(fragment.y - current_y) <= tolerance:
            current.append(fragment)
        else:
            rows.append(sorted(current, key=lambda f: f.x))
            current = [fragment]
        current_y = fragment.y

    if current:
        rows.append(sorted(current, key=lambda f: f.x))
    return rows


def looks_like_remark(text: str) -> bool:
    """Heuristic test for free-text remark words."""
    stripped = text.strip()
    lower = stripped.lower()
    if len(lower) < 3:
        return False
    if _DIGITS.match(stripped) or _ABBREVIATION.match(stripped):
        return False
    if NON_REMARK_WORDS.search(lower):
        return False
    if "*" in stripped or REMARK_KEYWORDS.search(lower):
        return True
    return len(stripped) >= MIN_PROSE_LENGTH and _PROSE.match(stripped) is not None


def is_remarks_continuation(
    row: Row,
    candidate: Row,
    recognizers: FieldRecognizers,
    min_columns: int = REMARKS_MIN_COLUMNS,
) -> bool:
    """True when ``candidate`` only carries overflow of ``row``'s remarks."""
    if len(row) < min_columns or len(candidate) >= len(row):
        return False
    if any(recognizers.recognizes_any(f.text) for f in candidate):
        return False
    return any(looks_like_remark(f.text) for f in candidate)


def merge_multiline_remarks(
    rows: List[Row],
    recognizers: FieldRecognizers,
    min_columns: int = REMARKS_MIN_COLUMNS,
) -> List[Row]:
    """
    Fold remark overflow lines into the entry row above them.

    ``rows`` are in clustering order (top row first). A merged continuation
    row is removed from the result.
    """
    merged: List[Row] = []
    i = 0
    while i < len(rows):
        row = list(rows[i])
        if i + 1 < len(rows) and is_remarks_continuation(row, rows[i + 1], recognizers, min_columns):
            overflow = " ".join(f.text.strip() for f in rows[i + 1] if looks_like_remark(f.text))
            last = row[-1]
            row[-1] = TextFragment(text=f"{last.text} {overflow}", x=last.x, y=last.y)
            logger.debug("Merged remark continuation %r into row at y=%.1f", overflow, last.y)
            i += 1
        merged.append(row)
        i += 1
    return merged
