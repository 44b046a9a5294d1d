"""Repository classes for data access."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from .models import RosterEntry, StaffMember
from .roster import AcceptedEntry

EDITED_AT_FORMAT = "%d-%m-%Y %H:%M:%S"


class StaffRepository:
    """Repository for staff data access."""

    @staticmethod
    def get_all(session: Session) -> List[StaffMember]:
        """Get all staff members."""
        return session.query(StaffMember).order_by(StaffMember.name).all()

    @staticmethod
    def get_active_names(session: Session) -> List[str]:
        """Get canonical names of active staff members."""
        rows = (
            session.query(StaffMember.name)
            .filter(StaffMember.is_active.is_(True))
            .order_by(StaffMember.name)
            .all()
        )
        return [name for (name,) in rows]

    @staticmethod
    def get_by_name(session: Session, name: str) -> Optional[StaffMember]:
        """Get staff member by canonical name."""
        return session.query(StaffMember).filter(StaffMember.name == name.strip().upper()).first()

    @staticmethod
    def create(session: Session, member: StaffMember) -> StaffMember:
        """Create a new staff member."""
        session.add(member)
        session.commit()
        session.refresh(member)
        return member

    @staticmethod
    def bulk_create(session: Session, members: List[StaffMember]) -> None:
        """Create multiple staff members."""
        session.add_all(members)
        session.commit()


class RosterEntryRepository:
    """Repository for roster entry data access."""

    @staticmethod
    def get_all(session: Session) -> List[RosterEntry]:
        """Get all roster entries, newest date first."""
        return session.query(RosterEntry).order_by(RosterEntry.date.desc(), RosterEntry.id).all()

    @staticmethod
    def get_by_month(session: Session, year: int, month: int) -> List[RosterEntry]:
        """Get all roster entries for a calendar month."""
        start = date(year, month, 1)
        end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
        return (
            session.query(RosterEntry)
            .filter(RosterEntry.date >= start, RosterEntry.date < end)
            .order_by(RosterEntry.date, RosterEntry.id)
            .all()
        )

    @staticmethod
    def exists(session: Session, entry: AcceptedEntry) -> bool:
        """Check whether an identical (date, shift, name) entry is stored."""
        return (
            session.query(RosterEntry.id)
            .filter(
                RosterEntry.date == date.fromisoformat(entry.date),
                RosterEntry.shift_type == entry.shift_type.value,
                RosterEntry.assigned_name == entry.assigned_name,
            )
            .first()
            is not None
        )

    @staticmethod
    def import_entries(
        session: Session,
        entries: Iterable[AcceptedEntry],
        editor_name: str,
        edited_at: datetime | None = None,
    ) -> Tuple[int, int]:
        """
        Persist accepted entries, skipping ones already stored.

        Args:
            session: Database session
            entries: Accepted entries from an import run
            editor_name: Value for last_edited_by
            edited_at: Audit timestamp (default: now)

        Returns:
            (created, skipped) counts
        """
        stamp = (edited_at or datetime.now()).strftime(EDITED_AT_FORMAT)
        created = 0
        skipped = 0
        rows = []
        for entry in entries:
            if RosterEntryRepository.exists(session, entry):
                skipped += 1
                continue
            rows.append(
                RosterEntry(
                    date=date.fromisoformat(entry.date),
                    shift_type=entry.shift_type.value,
                    assigned_name=entry.assigned_name,
                    last_edited_by=editor_name,
                    last_edited_at=stamp,
                    change_description=entry.change_description,
                )
            )
            created += 1
        session.add_all(rows)
        session.commit()
        return created, skipped

    @staticmethod
    def delete_by_month(session: Session, year: int, month: int) -> int:
        """Delete all roster entries for a month. Returns number of deleted rows."""
        start = date(year, month, 1)
        end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
        count = (
            session.query(RosterEntry)
            .filter(RosterEntry.date >= start, RosterEntry.date < end)
            .delete(synchronize_session=False)
        )
        session.commit()
        return count
