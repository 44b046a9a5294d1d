"""In-memory roster types that flow through the import engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

IMPORT_DESCRIPTION = "Imported from PDF"
SPECIAL_DATE_PREFIX = "Special Date: "
SATURDAY_CONVERSION_NOTE = " (Saturday 4-10 converted to 12-10)"


class ShiftType(str, Enum):
    """The five duty shifts; values are the canonical display strings."""

    MORNING_SHIFT = "Morning Shift (9-4)"
    EVENING_SHIFT = "Evening Shift (4-10)"
    SATURDAY_REGULAR = "Saturday Regular (12-10)"
    NIGHT_DUTY = "Night Duty"
    SUNDAY_HOLIDAY_SPECIAL = "Sunday/Public Holiday/Special"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TextFragment:
    """One positioned run of text; y grows downward from the page top."""

    text: str
    x: float
    y: float


@dataclass
class Page:
    index: int
    fragments: List[TextFragment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.fragments)

    def __iter__(self):
        return iter(self.fragments)


@dataclass
class RosterDraft:
    """Candidate roster record produced by an interpreter.

    ``page_index`` and ``sequence`` (row or anchor position on the page) give
    every draft a total order, so "first occurrence wins" is deterministic.
    """

    date: Optional[str] = None
    shift_type: Optional[ShiftType] = None
    staff_name: Optional[str] = None
    remark: Optional[str] = None
    page_index: int = 0
    sequence: int = 0
    strategy: str = ""
    source: str = ""

    @property
    def is_complete(self) -> bool:
        return self.date is not None and self.shift_type is not None and self.staff_name is not None

    def missing_fields(self) -> Tuple[str, ...]:
        missing = []
        if self.date is None:
            missing.append("date")
        if self.shift_type is None:
            missing.append("shift_type")
        if self.staff_name is None:
            missing.append("staff_name")
        return tuple(missing)

    @property
    def order_key(self) -> Tuple[int, int]:
        return (self.page_index, self.sequence)


def describe_import(remark: Optional[str]) -> str:
    """Change description stored with an imported entry."""
    if remark:
        return f"{SPECIAL_DATE_PREFIX}{remark}; {IMPORT_DESCRIPTION}"
    return IMPORT_DESCRIPTION


@dataclass(frozen=True)
class AcceptedEntry:
    """Fully populated, de-duplicated roster record ready for persistence."""

    date: str
    shift_type: ShiftType
    assigned_name: str
    change_description: str = IMPORT_DESCRIPTION

    @property
    def key(self) -> Tuple[str, ShiftType, str]:
        return (self.date, self.shift_type, self.assigned_name)

    @classmethod
    def from_draft(cls, draft: RosterDraft) -> "AcceptedEntry":
        if not draft.is_complete:
            raise ValueError(f"Draft is missing {', '.join(draft.missing_fields())}")
        return cls(
            date=draft.date,
            shift_type=draft.shift_type,
            assigned_name=draft.staff_name,
            change_description=describe_import(draft.remark),
        )

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "shift_type": self.shift_type.value,
            "assigned_name": self.assigned_name,
            "change_description": self.change_description,
        }
