"""List interpreter - reads each visual row as one roster table line."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, TypeVar

from roster_import.config import LayoutConfig
from roster_import.domain.roster import Page, RosterDraft, TextFragment
from roster_import.services.recognizers import FieldRecognizers
from roster_import.services.rows import Row, cluster_rows, merge_multiline_remarks

from .base import BaseInterpreter

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Column order of the printed roster list.
DATE_COLUMN = 0
SHIFT_COLUMN = 2
STAFF_COLUMN = 3

HEADER_KEYWORDS = {
    "date", "day", "shift", "shift type", "staff", "assigned staff", "staff names",
    "last edited", "last edited by", "last edited at", "remarks",
    "morning", "evening", "saturday", "night duty",
}
MIN_HEADER_HITS = 2


def is_header_row(row: Row) -> bool:
    """A row with two or more cells that are column headings is a table header."""
    # Whole-cell comparison: a data row such as "Tuesday | Evening Shift" is not a header.
    hits = sum(1 for f in row if f.text.strip().rstrip(":").lower() in HEADER_KEYWORDS)
    return hits >= MIN_HEADER_HITS


def _at_column(row: Row, index: int, recognize: Callable[[str], Optional[T]]) -> Optional[T]:
    if index < len(row):
        return recognize(row[index].text)
    return None


def _scan(row: Row, recognize: Callable[[str], Optional[T]]) -> Optional[T]:
    for fragment in row:
        value = recognize(fragment.text)
        if value is not None:
            return value
    return None


class ListInterpreter(BaseInterpreter):
    """
    Interpret rows as ``[date, day, shift, staff, edited by, edited at, remarks...]``.

    Each field is first looked for in its expected column and, failing that,
    in every fragment of the row from left to right.
    """

    name = "list"

    def __init__(
        self,
        recognizers: FieldRecognizers,
        layout: LayoutConfig | None = None,
        merge_remarks: bool = True,
    ):
        super().__init__(recognizers, layout)
        self.merge_remarks = merge_remarks

    @property
    def remarks_column(self) -> int:
        return self.layout.remarks_min_columns - 1

    def rows(self, page: Page) -> List[Row]:
        rows = cluster_rows(page.fragments, self.layout.row_tolerance)
        if self.merge_remarks:
            rows = merge_multiline_remarks(rows, self.recognizers, self.layout.remarks_min_columns)
        return rows

    def parse(self, page: Page) -> List[RosterDraft]:
        drafts: List[RosterDraft] = []
        for sequence, row in enumerate(self.rows(page)):
            if is_header_row(row):
                logger.debug("Page %d row %d: header skipped", page.index, sequence)
                continue
            draft = self.interpret_row(row, page.index, sequence)
            if draft is not None:
                drafts.append(draft)
        logger.debug("Page %d: list interpreter produced %d drafts", page.index, len(drafts))
        return drafts

    def interpret_row(self, row: Row, page_index: int = 0, sequence: int = 0) -> Optional[RosterDraft]:
        """Build a draft from one row; None when nothing in it is recognized."""
        recognizers = self.recognizers

        date = _at_column(row, DATE_COLUMN, recognizers.date) or _scan(row, recognizers.date)
        shift = _at_column(row, SHIFT_COLUMN, recognizers.shift) or _scan(row, recognizers.shift)
        staff = _at_column(row, STAFF_COLUMN, recognizers.staff) or _scan(row, recognizers.staff)

        if date is None and shift is None and staff is None:
            return None

        return RosterDraft(
            date=date,
            shift_type=shift,
            staff_name=staff,
            remark=self.extract_remark(row),
            page_index=page_index,
            sequence=sequence,
            strategy=self.get_name(),
            source=" | ".join(f.text for f in row),
        )

    def extract_remark(self, row: List[TextFragment]) -> Optional[str]:
        texts = [
            f.text.strip()
            for f in row[self.remarks_column:]
            if f.text.strip() and f.text.strip().lower() != "remarks"
        ]
        return " ".join(texts) if texts else None
