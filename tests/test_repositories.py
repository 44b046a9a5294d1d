"""Tests for the staff registry and the repositories."""

from datetime import date, datetime

from roster_import.domain.models import RosterEntry, StaffMember
from roster_import.domain.registry import StaffRegistry
from roster_import.domain.repositories import RosterEntryRepository, StaffRepository
from roster_import.domain.roster import AcceptedEntry, ShiftType


def test_registry_normalizes_and_deduplicates():
    registry = StaffRegistry([" narayya ", "NARAYYA", "", "SHARMA(R)"])
    assert len(registry) == 2
    assert "Narayya" in registry
    assert registry.lookup("SHARMA(R)") == "SHARMA(R)"
    assert registry.lookup_base("SHARMA", True) == "SHARMA(R)"
    assert registry.lookup_base("SHARMA", False) is None


def test_with_reserve_variants():
    registry = StaffRegistry(["NARAYYA", "SHARMA", "SHARMA(R)"]).with_reserve_variants()
    assert sorted(registry.names) == ["NARAYYA", "NARAYYA(R)", "SHARMA", "SHARMA(R)"]


def test_registry_from_session(db_session):
    StaffRepository.bulk_create(
        db_session,
        [
            StaffMember(code="N01", name="NARAYYA"),
            StaffMember(code="S02", name="SHARMA", is_active=False),
        ],
    )
    registry = StaffRegistry.from_session(db_session)
    assert registry.names == ["NARAYYA"]

    registry = StaffRegistry.from_session(db_session, generate_reserve_variants=True)
    assert "NARAYYA(R)" in registry


def test_staff_repository(db_session):
    StaffRepository.create(db_session, StaffMember(code="N01", name="NARAYYA", surname="NARAYYA"))
    assert StaffRepository.get_by_name(db_session, " narayya ").code == "N01"
    assert StaffRepository.get_by_name(db_session, "SHARMA") is None


def entries():
    return [
        AcceptedEntry("2025-07-01", ShiftType.EVENING_SHIFT, "NARAYYA"),
        AcceptedEntry("2025-07-02", ShiftType.NIGHT_DUTY, "NARAYYA(R)", "Special Date: Cyclone; Imported from PDF"),
        AcceptedEntry("2025-08-01", ShiftType.MORNING_SHIFT, "SHARMA"),
    ]


def test_import_entries_sets_audit_fields(db_session):
    created, skipped = RosterEntryRepository.import_entries(
        db_session, entries(), "PDF Import", edited_at=datetime(2025, 7, 3, 14, 5, 9)
    )
    assert (created, skipped) == (3, 0)

    row = db_session.query(RosterEntry).filter_by(assigned_name="NARAYYA(R)").one()
    assert row.date == date(2025, 7, 2)
    assert row.shift_type == "Night Duty"
    assert row.last_edited_by == "PDF Import"
    assert row.last_edited_at == "03-07-2025 14:05:09"
    assert row.change_description == "Special Date: Cyclone; Imported from PDF"


def test_import_entries_skips_stored(db_session):
    RosterEntryRepository.import_entries(db_session, entries()[:1], "PDF Import")
    created, skipped = RosterEntryRepository.import_entries(db_session, entries(), "Admin")
    assert (created, skipped) == (2, 1)
    assert RosterEntryRepository.exists(db_session, entries()[0])


def test_month_queries(db_session):
    RosterEntryRepository.import_entries(db_session, entries(), "PDF Import")

    july = RosterEntryRepository.get_by_month(db_session, 2025, 7)
    assert [r.assigned_name for r in july] == ["NARAYYA", "NARAYYA(R)"]

    assert RosterEntryRepository.delete_by_month(db_session, 2025, 7) == 2
    assert [r.assigned_name for r in RosterEntryRepository.get_all(db_session)] == ["SHARMA"]
