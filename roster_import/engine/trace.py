"""Structured diagnostics returned alongside an import result."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from roster_import.domain.roster import AcceptedEntry, RosterDraft


@dataclass
class PageDecision:
    """Which strategy a page was read with, and how every strategy scored."""

    page_index: int
    chosen: str
    valid_counts: Dict[str, int] = field(default_factory=dict)
    fragment_count: int = 0


@dataclass
class DroppedDraft:
    draft: RosterDraft
    missing: Tuple[str, ...]


@dataclass
class ImportTrace:
    pages: List[PageDecision] = field(default_factory=list)
    dropped: List[DroppedDraft] = field(default_factory=list)
    duplicates: List[RosterDraft] = field(default_factory=list)
    saturday_conversions: List[AcceptedEntry] = field(default_factory=list)
    saturday_collisions: List[AcceptedEntry] = field(default_factory=list)

    def strategy_usage(self) -> Dict[str, int]:
        usage: Dict[str, int] = {}
        for decision in self.pages:
            usage[decision.chosen] = usage.get(decision.chosen, 0) + 1
        return usage

    def missing_field_counts(self) -> Dict[str, int]:
        counts = {"date": 0, "shift_type": 0, "staff_name": 0}
        for dropped in self.dropped:
            for name in dropped.missing:
                counts[name] += 1
        return counts

    def dropped_records(self) -> List[dict]:
        """Flat rows describing every dropped draft, for export."""
        return [
            {
                "page": item.draft.page_index + 1,
                "sequence": item.draft.sequence,
                "strategy": item.draft.strategy,
                "missing": ",".join(item.missing),
                "date": item.draft.date,
                "shift_type": item.draft.shift_type.value if item.draft.shift_type else None,
                "staff_name": item.draft.staff_name,
                "source": item.draft.source,
            }
            for item in self.dropped
        ]

    def summary(self) -> str:
        lines = ["Pages:"]
        for decision in self.pages:
            scores = ", ".join(f"{name}={count}" for name, count in decision.valid_counts.items())
            lines.append(f"  page {decision.page_index + 1}: {decision.chosen} ({scores})")
        missing = self.missing_field_counts()
        lines.append(
            f"Dropped drafts: {len(self.dropped)} "
            f"(no date: {missing['date']}, no shift: {missing['shift_type']}, no staff: {missing['staff_name']})"
        )
        lines.append(f"Duplicates removed: {len(self.duplicates) + len(self.saturday_collisions)}")
        lines.append(f"Saturday evening shifts converted: {len(self.saturday_conversions)}")
        return "\n".join(lines)
