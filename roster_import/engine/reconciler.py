"""Reconciler - merges drafts from all pages into accepted roster entries."""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import replace
from typing import Dict, Iterable, List, Set, Tuple

import pandas as pd

from roster_import.domain.roster import (
    SATURDAY_CONVERSION_NOTE,
    AcceptedEntry,
    RosterDraft,
    ShiftType,
)

from .trace import DroppedDraft, ImportTrace

logger = logging.getLogger(__name__)


def is_saturday(date_str: str) -> bool:
    return pd.Timestamp(date_str).day_name() == "Saturday"


def apply_saturday_rule(entries: List[AcceptedEntry], trace: ImportTrace | None = None) -> List[AcceptedEntry]:
    """
    Reclassify ordinary-Saturday evening shifts.

    On a Saturday with no Morning Shift entry, every Evening Shift (4-10)
    entry becomes Saturday Regular (12-10). A Morning Shift entry marks the
    Saturday as exceptional and its evening entries are kept.

    Args:
        entries: De-duplicated entries in processing order
        trace: Optional trace receiving the converted entries

    Returns:
        Entries in the same order, rewritten where the rule applies
    """
    by_date: Dict[str, List[AcceptedEntry]] = OrderedDict()
    for entry in entries:
        by_date.setdefault(entry.date, []).append(entry)

    normal_saturdays: Set[str] = {
        date_str
        for date_str, day_entries in by_date.items()
        if is_saturday(date_str)
        and not any(e.shift_type == ShiftType.MORNING_SHIFT for e in day_entries)
    }

    corrected: List[AcceptedEntry] = []
    for entry in entries:
        if entry.date in normal_saturdays and entry.shift_type == ShiftType.EVENING_SHIFT:
            converted = replace(
                entry,
                shift_type=ShiftType.SATURDAY_REGULAR,
                change_description=entry.change_description + SATURDAY_CONVERSION_NOTE,
            )
            if trace is not None:
                trace.saturday_conversions.append(converted)
            corrected.append(converted)
        else:
            corrected.append(entry)
    return corrected


class Reconciler:
    """
    Owns the running set of drafts for one import run.

    Pages may be added in any order; ``finalize`` restores page/sequence order
    before applying first-occurrence de-duplication.
    """

    def __init__(self, trace: ImportTrace | None = None):
        self.trace = trace if trace is not None else ImportTrace()
        self._drafts: List[RosterDraft] = []

    def add(self, drafts: Iterable[RosterDraft]) -> None:
        self._drafts.extend(drafts)

    def finalize(self) -> List[AcceptedEntry]:
        ordered = sorted(self._drafts, key=lambda d: d.order_key)

        complete: List[RosterDraft] = []
        for draft in ordered:
            if draft.is_complete:
                complete.append(draft)
            else:
                missing = draft.missing_fields()
                self.trace.dropped.append(DroppedDraft(draft=draft, missing=missing))
                logger.debug(
                    "Dropped draft page %d seq %d (%s): missing %s",
                    draft.page_index, draft.sequence, draft.strategy, ", ".join(missing),
                )

        entries: List[AcceptedEntry] = []
        seen: Set[Tuple[str, ShiftType, str]] = set()
        for draft in complete:
            entry = AcceptedEntry.from_draft(draft)
            if entry.key in seen:
                self.trace.duplicates.append(draft)
                logger.debug("Duplicate removed: %s | %s | %s", entry.assigned_name, entry.shift_type, entry.date)
                continue
            seen.add(entry.key)
            entries.append(entry)

        entries = apply_saturday_rule(entries, self.trace)

        # The Saturday rewrite can land on a key that already exists.
        unique: List[AcceptedEntry] = []
        seen = set()
        for entry in entries:
            if entry.key in seen:
                self.trace.saturday_collisions.append(entry)
                continue
            seen.add(entry.key)
            unique.append(entry)

        logger.info(
            "Reconciled %d drafts into %d entries (%d dropped, %d duplicates)",
            len(ordered), len(unique), len(self.trace.dropped),
            len(self.trace.duplicates) + len(self.trace.saturday_collisions),
        )
        return unique


def reconcile(drafts: Iterable[RosterDraft], trace: ImportTrace | None = None) -> List[AcceptedEntry]:
    """Convenience wrapper: drop incomplete drafts, de-duplicate, apply the Saturday rule."""
    reconciler = Reconciler(trace)
    reconciler.add(drafts)
    return reconciler.finalize()
