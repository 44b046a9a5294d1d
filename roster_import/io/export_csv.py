"""CSV export utilities for import results and stored roster entries."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import pandas as pd
from sqlalchemy.orm import Session

from roster_import.domain.repositories import RosterEntryRepository
from roster_import.domain.roster import AcceptedEntry
from roster_import.engine.trace import ImportTrace

logger = logging.getLogger(__name__)

ENTRY_COLUMNS = ["date", "shift_type", "assigned_name", "change_description"]
DIAGNOSTIC_COLUMNS = ["page", "sequence", "strategy", "missing", "date", "shift_type", "staff_name", "source"]
STORED_COLUMNS = ["date", "shift_type", "assigned_name", "last_edited_by", "last_edited_at", "change_description"]


def export_entries_csv(entries: Iterable[AcceptedEntry], path: str | Path) -> int:
    """
    Export accepted entries to CSV in processing order.

    Returns:
        Number of rows written
    """
    df = pd.DataFrame([e.to_dict() for e in entries], columns=ENTRY_COLUMNS)
    df.to_csv(path, index=False)
    logger.info("Exported %d entries to %s", len(df), path)
    return len(df)


def export_diagnostics_csv(trace: ImportTrace, path: str | Path) -> int:
    """Export one row per dropped draft with the fields it was missing."""
    df = pd.DataFrame(trace.dropped_records(), columns=DIAGNOSTIC_COLUMNS)
    df.to_csv(path, index=False)
    logger.info("Exported %d dropped drafts to %s", len(df), path)
    return len(df)


def export_roster_entries_csv(
    session: Session,
    path: str | Path,
    year: int | None = None,
    month: int | None = None,
) -> int:
    """
    Export stored roster entries to CSV.

    Args:
        session: Database session
        path: Output CSV path
        year: Restrict to this year (requires month)
        month: Restrict to this month (requires year)

    Returns:
        Number of rows written
    """
    if year is not None and month is not None:
        rows = RosterEntryRepository.get_by_month(session, year, month)
    else:
        rows = RosterEntryRepository.get_all(session)

    data = [
        {
            "date": row.date.isoformat(),
            "shift_type": row.shift_type,
            "assigned_name": row.assigned_name,
            "last_edited_by": row.last_edited_by,
            "last_edited_at": row.last_edited_at,
            "change_description": row.change_description,
        }
        for row in rows
    ]
    df = pd.DataFrame(data, columns=STORED_COLUMNS)
    if not df.empty:
        df = df.sort_values(["date", "shift_type", "assigned_name"], kind="stable")
    df.to_csv(path, index=False)
    logger.info("Exported %d stored entries to %s", len(df), path)
    return len(df)
