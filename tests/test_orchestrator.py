"""Tests for strategy selection and the end-to-end import flow."""

import pytest

from roster_import.config import ImportConfig
from roster_import.domain.models import RosterEntry
from roster_import.domain.roster import Page, ShiftType, TextFragment
from roster_import.engine.orchestrator import ImportOrchestrator, as_pages, import_roster
from roster_import.exceptions import ConfigError, NoEntriesFoundError


def list_fragments():
    return [
        TextFragment("01/07/2025", 20, 100),
        TextFragment("Evening Shift (4-10)", 180, 100),
        TextFragment("NARAYYA", 320, 100),
    ]


def box_fragments():
    return [
        TextFragment("01/07/2025", 150, 100),
        TextFragment("02/07/2025", 300, 100),
        TextFragment("Evening Shift (4-10)", 20, 200),
        TextFragment("NARAYYA", 150, 200),
        TextFragment("SHARMA", 300, 205),
    ]


def test_single_row_end_to_end(registry):
    result = import_roster([list_fragments()], registry)

    assert len(result.entries) == 1
    entry = result.entries[0]
    assert entry.date == "2025-07-01"
    assert entry.shift_type == ShiftType.EVENING_SHIFT
    assert entry.shift_type.value == "Evening Shift (4-10)"
    assert entry.assigned_name == "NARAYYA"
    assert entry.change_description == "Imported from PDF"
    assert result.trace.pages[0].chosen == "list"


def test_selector_prefers_higher_yield(registry):
    result = import_roster([box_fragments()], registry)

    decision = result.trace.pages[0]
    assert decision.chosen == "box"
    assert decision.valid_counts == {"list": 0, "box": 2}
    assert [(e.date, e.assigned_name) for e in result.entries] == [
        ("2025-07-01", "NARAYYA"),
        ("2025-07-02", "SHARMA"),
    ]


def test_tie_keeps_first_strategy(registry):
    result = import_roster([[TextFragment("Cyclone", 20, 100)]], registry)
    assert result.trace.pages[0].chosen == "list"

    cfg = ImportConfig(strategy_order=["box", "list"])
    result = import_roster([[TextFragment("Cyclone", 20, 100)]], registry, cfg)
    assert result.trace.pages[0].chosen == "box"


def test_each_page_picks_its_own_strategy(registry):
    result = import_roster([list_fragments(), box_fragments()], registry)

    assert result.trace.strategy_usage() == {"list": 1, "box": 1}
    # NARAYYA / 2025-07-01 / Evening appears on both pages; the first page wins.
    assert len(result.entries) == 2
    assert len(result.trace.duplicates) == 1
    assert result.trace.duplicates[0].strategy == "box"


def test_empty_document(registry):
    result = import_roster([[]], registry)

    assert result.is_empty
    assert "No roster entries found" in result.warnings
    assert "Page 1 has no text" in result.warnings
    with pytest.raises(NoEntriesFoundError):
        result.raise_if_empty()


def test_dropped_rows_are_reported(registry, row):
    page = row(100, "01/07/2025", "Tuesday", "Evening Shift (4-10)", "UNKNOWN")
    result = import_roster([page], registry)

    assert result.is_empty
    assert result.trace.dropped[0].missing == ("staff_name",)
    assert "1 incomplete rows were skipped" in result.warnings


def test_target_month_resolves_bare_dates(registry):
    fragments = [
        TextFragment("01 07", 20, 100),
        TextFragment("Night Duty", 180, 100),
        TextFragment("SHARMA", 320, 100),
    ]
    assert import_roster([fragments], registry).is_empty

    cfg = ImportConfig(target_year=2025, target_month=7)
    result = import_roster([fragments], registry, cfg)
    assert result.entries[0].date == "2025-07-01"


def test_unknown_strategies(registry):
    with pytest.raises(ConfigError):
        ImportOrchestrator(registry, ImportConfig(strategy_order=["grid"])).build_interpreters()

    interpreters = ImportOrchestrator(registry, ImportConfig(strategy_order=["grid", "box"])).build_interpreters()
    assert [i.get_name() for i in interpreters] == ["box"]


def test_as_pages_indexes_fragment_lists():
    pages = as_pages([[], Page(index=4)])
    assert [p.index for p in pages] == [0, 4]


@pytest.mark.integration
def test_persist_entries(db_session, registry):
    result = import_roster([list_fragments()], registry, session=db_session, persist=True)

    stored = db_session.query(RosterEntry).all()
    assert len(stored) == 1
    assert stored[0].assigned_name == "NARAYYA"
    assert stored[0].shift_type == "Evening Shift (4-10)"
    assert stored[0].last_edited_by == "PDF Import"
    assert stored[0].change_description == "Imported from PDF"
    assert result.warnings == []

    again = import_roster([list_fragments()], registry, session=db_session, persist=True)
    assert db_session.query(RosterEntry).count() == 1
    assert "1 entries were already stored and were skipped" in again.warnings


def test_persist_requires_session(registry):
    with pytest.raises(ValueError):
        import_roster([list_fragments()], registry, persist=True)
