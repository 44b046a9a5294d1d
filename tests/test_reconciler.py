"""Tests for reconciliation: dropping, de-duplication and the Saturday rule."""

from roster_import.domain.roster import RosterDraft, ShiftType
from roster_import.engine.reconciler import Reconciler, apply_saturday_rule, is_saturday, reconcile
from roster_import.engine.trace import ImportTrace

# 2025-07-05 is a Saturday, 2025-07-01 a Tuesday.
SATURDAY = "2025-07-05"
TUESDAY = "2025-07-01"


def draft(date, shift, name, sequence=0, page=0, remark=None):
    return RosterDraft(
        date=date, shift_type=shift, staff_name=name, remark=remark,
        page_index=page, sequence=sequence, strategy="list",
    )


def test_is_saturday():
    assert is_saturday(SATURDAY)
    assert not is_saturday(TUESDAY)


def test_duplicates_collapse_to_first():
    trace = ImportTrace()
    entries = reconcile(
        [
            draft(TUESDAY, ShiftType.EVENING_SHIFT, "NARAYYA", sequence=0, remark="Cyclone"),
            draft(TUESDAY, ShiftType.EVENING_SHIFT, "NARAYYA", sequence=1),
        ],
        trace,
    )
    assert len(entries) == 1
    assert entries[0].change_description == "Special Date: Cyclone; Imported from PDF"
    assert len(trace.duplicates) == 1
    assert trace.duplicates[0].sequence == 1


def test_base_and_reserve_are_not_duplicates():
    entries = reconcile(
        [
            draft(TUESDAY, ShiftType.NIGHT_DUTY, "NARAYYA"),
            draft(TUESDAY, ShiftType.NIGHT_DUTY, "NARAYYA(R)", sequence=1),
        ]
    )
    assert [e.assigned_name for e in entries] == ["NARAYYA", "NARAYYA(R)"]


def test_incomplete_drafts_are_recorded():
    trace = ImportTrace()
    entries = reconcile(
        [
            draft(None, ShiftType.NIGHT_DUTY, "NARAYYA"),
            draft(TUESDAY, None, None, sequence=1),
            draft(TUESDAY, ShiftType.NIGHT_DUTY, "SHARMA", sequence=2),
        ],
        trace,
    )
    assert len(entries) == 1
    assert [d.missing for d in trace.dropped] == [("date",), ("shift_type", "staff_name")]
    assert trace.missing_field_counts() == {"date": 1, "shift_type": 1, "staff_name": 1}
    records = trace.dropped_records()
    assert records[0]["page"] == 1
    assert records[0]["missing"] == "date"


def test_processing_order_is_page_then_sequence():
    reconciler = Reconciler()
    reconciler.add([draft(TUESDAY, ShiftType.NIGHT_DUTY, "SHARMA", page=1, sequence=0)])
    reconciler.add([
        draft(TUESDAY, ShiftType.NIGHT_DUTY, "NARAYYA", page=0, sequence=3, remark="late"),
        draft(TUESDAY, ShiftType.NIGHT_DUTY, "NARAYYA", page=0, sequence=1),
    ])
    entries = reconciler.finalize()
    assert [e.assigned_name for e in entries] == ["NARAYYA", "SHARMA"]
    # sequence 1 came first, so the remark-less draft wins.
    assert entries[0].change_description == "Imported from PDF"


def test_ordinary_saturday_evening_becomes_saturday_regular():
    trace = ImportTrace()
    entries = reconcile([draft(SATURDAY, ShiftType.EVENING_SHIFT, "NARAYYA")], trace)

    assert entries[0].shift_type == ShiftType.SATURDAY_REGULAR
    assert entries[0].change_description == "Imported from PDF (Saturday 4-10 converted to 12-10)"
    assert len(trace.saturday_conversions) == 1


def test_exceptional_saturday_keeps_evening():
    entries = reconcile(
        [
            draft(SATURDAY, ShiftType.MORNING_SHIFT, "SHARMA"),
            draft(SATURDAY, ShiftType.EVENING_SHIFT, "NARAYYA", sequence=1),
        ]
    )
    assert [e.shift_type for e in entries] == [ShiftType.MORNING_SHIFT, ShiftType.EVENING_SHIFT]


def test_weekday_evening_untouched():
    entries = reconcile([draft(TUESDAY, ShiftType.EVENING_SHIFT, "NARAYYA")])
    assert entries[0].shift_type == ShiftType.EVENING_SHIFT
    assert entries[0].change_description == "Imported from PDF"


def test_saturday_rewrite_collision_is_removed():
    trace = ImportTrace()
    entries = reconcile(
        [
            draft(SATURDAY, ShiftType.EVENING_SHIFT, "NARAYYA"),
            draft(SATURDAY, ShiftType.SATURDAY_REGULAR, "NARAYYA", sequence=1),
        ],
        trace,
    )
    assert len(entries) == 1
    assert entries[0].shift_type == ShiftType.SATURDAY_REGULAR
    assert len(trace.saturday_collisions) == 1
    assert len({e.key for e in entries}) == len(entries)


def test_apply_saturday_rule_preserves_order():
    entries = reconcile(
        [
            draft(SATURDAY, ShiftType.NIGHT_DUTY, "SHARMA"),
            draft(TUESDAY, ShiftType.EVENING_SHIFT, "SHARMA", sequence=1),
        ]
    )
    assert apply_saturday_rule(entries) == entries
