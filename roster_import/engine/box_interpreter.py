"""Box interpreter - anchors on staff names and looks around them for date and shift."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from roster_import.domain.roster import Page, RosterDraft, ShiftType, TextFragment

from .base import BaseInterpreter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Anchor:
    staff_name: str
    x: float
    y: float
    text: str


class BoxInterpreter(BaseInterpreter):
    """
    Interpret a calendar-style page where each day is a box.

    Every fragment the staff matcher accepts is an anchor. The date is the
    nearest recognizable fragment above the anchor in the same column; the
    shift is the nearest recognizable fragment in the page's first column on
    roughly the same line. Anchors are handled independently, so misaligned
    columns are tolerated but an anchor without a date or shift in reach
    yields an incomplete draft.
    """

    name = "box"

    def parse(self, page: Page) -> List[RosterDraft]:
        fragments = page.fragments
        if not fragments:
            return []

        leftmost_x = min(f.x for f in fragments)
        drafts: List[RosterDraft] = []
        for sequence, anchor in enumerate(self.find_anchors(fragments)):
            drafts.append(
                RosterDraft(
                    date=self.find_date_above(fragments, anchor),
                    shift_type=self.find_shift_in_first_column(fragments, anchor, leftmost_x),
                    staff_name=anchor.staff_name,
                    page_index=page.index,
                    sequence=sequence,
                    strategy=self.get_name(),
                    source=anchor.text,
                )
            )
        logger.debug("Page %d: box interpreter produced %d drafts", page.index, len(drafts))
        return drafts

    def find_anchors(self, fragments: Sequence[TextFragment]) -> List[Anchor]:
        anchors = []
        for fragment in fragments:
            name = self.recognizers.staff(fragment.text)
            if name is not None:
                anchors.append(Anchor(staff_name=name, x=fragment.x, y=fragment.y, text=fragment.text))
        return anchors

    def find_date_above(self, fragments: Sequence[TextFragment], anchor: Anchor) -> Optional[str]:
        """Nearest date (Euclidean) strictly above the anchor within the column window."""
        window = self.layout.date_window_x
        above = [f for f in fragments if f.y < anchor.y and abs(f.x - anchor.x) < window]
        above.sort(key=lambda f: math.hypot(anchor.x - f.x, anchor.y - f.y))
        for fragment in above:
            date = self.recognizers.date(fragment.text)
            if date is not None:
                return date
        return None

    def find_shift_in_first_column(
        self,
        fragments: Sequence[TextFragment],
        anchor: Anchor,
        leftmost_x: float,
    ) -> Optional[ShiftType]:
        """Nearest shift label in the leftmost column band, by vertical distance."""
        column_end = leftmost_x + self.layout.first_column_width
        window = self.layout.shift_window_y
        band = [
            f for f in fragments
            if leftmost_x <= f.x <= column_end and abs(f.y - anchor.y) < window
        ]
        band.sort(key=lambda f: abs(anchor.y - f.y))
        for fragment in band:
            shift = self.recognizers.shift(fragment.text)
            if shift is not None:
                return shift
        return None
