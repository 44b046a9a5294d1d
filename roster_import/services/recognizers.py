"""Bundle of the three field recognizers bound to one import's context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from roster_import.domain.registry import StaffRegistry
from roster_import.domain.roster import ShiftType

from .dates import DateContext, recognize_date
from .shifts import classify_shift
from .staff import match_staff


@dataclass(frozen=True)
class FieldRecognizers:
    """Stateless recognizers; build one per import call."""

    registry: StaffRegistry
    date_context: Optional[DateContext] = None

    def date(self, text: str) -> Optional[str]:
        return recognize_date(text, self.date_context)

    def shift(self, text: str) -> Optional[ShiftType]:
        return classify_shift(text, self.registry)

    def staff(self, text: str) -> Optional[str]:
        return match_staff(text, self.registry)

    def recognizes_any(self, text: str) -> bool:
        return self.date(text) is not None or self.shift(text) is not None or self.staff(text) is not None
