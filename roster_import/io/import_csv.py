"""CSV import utilities for the staff registry."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
from sqlalchemy.orm import Session

from roster_import.domain.models import StaffMember
from roster_import.domain.registry import RESERVE_MARKER, StaffRegistry, split_reserve
from roster_import.domain.repositories import StaffRepository

logger = logging.getLogger(__name__)


def read_staff_csv(csv_path: str | Path) -> pd.DataFrame:
    """Read a staff CSV; requires a ``name`` column, ``code``/``title``/``first_name``/``surname`` optional."""
    df = pd.read_csv(csv_path, dtype=str)

    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    if "name" not in df.columns:
        raise ValueError(f"Staff CSV {csv_path} has no 'name' column")

    df = df[df["name"].notna()].copy()
    df["name"] = df["name"].str.strip().str.upper()
    df = df[df["name"] != ""]
    return df.drop_duplicates(subset=["name"], keep="first")


def load_registry_csv(csv_path: str | Path, generate_reserve_variants: bool = False) -> StaffRegistry:
    """Build a StaffRegistry straight from a CSV, without a database."""
    registry = StaffRegistry(read_staff_csv(csv_path)["name"].tolist())
    return registry.with_reserve_variants() if generate_reserve_variants else registry


def import_staff_csv(
    session: Session,
    csv_path: str | Path,
    generate_reserve_variants: bool = True,
) -> int:
    """
    Import staff members from CSV into database.

    Names already stored are skipped. With ``generate_reserve_variants`` every
    base name also gets a NAME(R) row (code suffixed with R) unless the CSV or
    the database already holds one.

    Args:
        session: Database session
        csv_path: Path to staff CSV
        generate_reserve_variants: Create (R) designations for base names

    Returns:
        Number of staff members imported
    """
    df = read_staff_csv(csv_path)

    def _opt(row, column):
        value = row.get(column)
        return str(value).strip() if pd.notna(value) else None

    known = {m.name for m in StaffRepository.get_all(session)}
    members = []
    for _, row in df.iterrows():
        name = row["name"]
        code = _opt(row, "code") or name
        candidates = [(name, code)]
        base, reserve = split_reserve(name)
        if generate_reserve_variants and not reserve:
            candidates.append((f"{base}{RESERVE_MARKER}", f"{code}R"))

        for candidate_name, candidate_code in candidates:
            if candidate_name in known or (candidate_name != name and candidate_name in set(df["name"])):
                continue
            members.append(
                StaffMember(
                    code=candidate_code,
                    name=candidate_name,
                    title=_opt(row, "title") or "MIT",
                    first_name=_opt(row, "first_name"),
                    surname=_opt(row, "surname") or base,
                )
            )
            known.add(candidate_name)

    StaffRepository.bulk_create(session, members)
    logger.info("Imported %d staff members from %s", len(members), csv_path)
    return len(members)
