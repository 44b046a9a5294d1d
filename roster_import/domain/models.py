"""SQLAlchemy models for staff and imported roster entries."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class StaffMember(Base):
    """A known staff identity; (R) designations are separate rows."""

    __tablename__ = "staff_members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(20), unique=True, nullable=False)
    name = Column(String(100), unique=True, nullable=False)  # Canonical, upper-case, may end in (R)
    title = Column(String(20), nullable=True, default="MIT")  # MIT, SMIT
    first_name = Column(String(100), nullable=True)
    surname = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<StaffMember(id={self.id}, name='{self.name}', active={self.is_active})>"


class RosterEntry(Base):
    """One persisted shift assignment."""

    __tablename__ = "roster_entries"
    __table_args__ = (
        UniqueConstraint("date", "shift_type", "assigned_name", name="uq_roster_entry"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False)
    shift_type = Column(String(50), nullable=False)  # ShiftType display string
    assigned_name = Column(String(100), nullable=False)
    last_edited_by = Column(String(100), nullable=False)
    last_edited_at = Column(String(20), nullable=False)  # DD-MM-YYYY HH:MM:SS
    change_description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<RosterEntry(id={self.id}, date={self.date}, shift='{self.shift_type}', name='{self.assigned_name}')>"
