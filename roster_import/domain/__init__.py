"""Domain types, models and data access layer."""

from .models import Base, RosterEntry, StaffMember
from .registry import StaffRegistry
from .repositories import RosterEntryRepository, StaffRepository
from .roster import AcceptedEntry, Page, RosterDraft, ShiftType, TextFragment

__all__ = [
    "AcceptedEntry",
    "Base",
    "Page",
    "RosterDraft",
    "RosterEntry",
    "RosterEntryRepository",
    "ShiftType",
    "StaffMember",
    "StaffRegistry",
    "StaffRepository",
    "TextFragment",
]
