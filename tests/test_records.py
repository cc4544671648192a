"""Tests for pure record transformations."""

from datetime import date, datetime, timezone

import pytest

from weekplan.domain.errors import (
    EmptySlot,
    InvalidStatusTransition,
    MalformedRecord,
    MissingActor,
)
from weekplan.domain.models import DayKey, ScheduleStatus, TimeSlot
from weekplan.domain.policies import ApprovalStatusPolicy
from weekplan.domain.records import (
    add_slot,
    compute_dates_for_days,
    empty_record,
    remove_slot,
    replace_slot,
    set_day_note,
    set_day_slots,
    set_general_notes,
    stamp,
    transition_status,
)


@pytest.fixture
def record():
    """Draft record for employee E1, week 10 of 2025, with a Monday slot."""
    return add_slot(empty_record("E1", 2025, 10), DayKey.MONDAY, "09:00-12:00")


class TestSlotEditing:
    """Tests for slot editing functions."""

    def test_empty_record_has_nothing(self):
        """A new record has no slots and no notes."""
        new = empty_record("E1", 2025, 10)

        assert not new.has_slots
        assert all(note == "" for note in new.notes_by_day.values())
        assert new.status == ScheduleStatus.DRAFT

    def test_add_slot_returns_new_record(self, record):
        """Editing never modifies the original record."""
        updated = add_slot(record, "monday", ("14:00", "18:00"))

        assert record.slots(DayKey.MONDAY) == (TimeSlot("09:00", "12:00"),)
        assert updated.slots(DayKey.MONDAY) == (
            TimeSlot("09:00", "12:00"),
            TimeSlot("14:00", "18:00"),
        )
        assert updated.total_weekly_minutes == 420

    def test_total_follows_slots(self, record):
        """Adding a Tuesday slot brings the total to 600 minutes."""
        updated = add_slot(record, DayKey.MONDAY, "14:00-18:00")
        updated = add_slot(updated, DayKey.TUESDAY, "09:00-12:00")

        assert updated.total_weekly_minutes == 600

    def test_add_slot_without_end_time(self, record):
        """A slot missing its end is an EmptySlot naming its position."""
        with pytest.raises(EmptySlot, match="Slot 2 of monday"):
            add_slot(record, DayKey.MONDAY, {"start": "14:00", "end": ""})

    def test_add_invalid_slot(self, record):
        """Invalid times are reported as an unusable slot."""
        with pytest.raises(EmptySlot, match="invalid"):
            add_slot(record, DayKey.MONDAY, "18:00-14:00")

    def test_remove_slot(self, record):
        updated = remove_slot(record, DayKey.MONDAY, 0)

        assert updated.slots(DayKey.MONDAY) == ()
        assert not updated.has_slots

    def test_remove_missing_slot(self, record):
        with pytest.raises(IndexError):
            remove_slot(record, DayKey.TUESDAY, 0)

    def test_replace_slot(self, record):
        updated = replace_slot(record, DayKey.MONDAY, 0, "08:00-12:00")

        assert updated.slots(DayKey.MONDAY) == (TimeSlot("08:00", "12:00"),)
        assert updated.total_weekly_minutes == 240

    def test_set_day_slots_with_french_day(self, record):
        updated = set_day_slots(record, "vendredi", ["10:00-11:00"])

        assert updated.slots(DayKey.FRIDAY) == (TimeSlot("10:00", "11:00"),)

    def test_unknown_day(self, record):
        with pytest.raises(MalformedRecord):
            add_slot(record, "someday", "10:00-11:00")


class TestNotes:
    """Tests for note editing."""

    def test_set_day_note_trims(self, record):
        updated = set_day_note(record, DayKey.MONDAY, "  Inventaire ")

        assert updated.note(DayKey.MONDAY) == "Inventaire"

    def test_clearing_a_note_stores_empty_string(self, record):
        """Cleared notes are "", never missing."""
        noted = set_day_note(record, DayKey.MONDAY, "Inventaire")

        assert set_day_note(noted, DayKey.MONDAY, "").note(DayKey.MONDAY) == ""
        assert set_day_note(noted, DayKey.MONDAY, None).note(DayKey.MONDAY) == ""
        assert DayKey.MONDAY in set_day_note(noted, "monday", "").notes_by_day

    def test_set_general_notes(self, record):
        assert set_general_notes(record, " Semaine chargée ").general_notes == "Semaine chargée"
        assert set_general_notes(record, None).general_notes == ""


class TestDatesAndStamping:
    """Tests for compute_dates_for_days and stamp."""

    def test_dates_only_for_days_with_slots(self, record):
        """Only scheduled days get a date."""
        updated = add_slot(record, DayKey.SUNDAY, "10:00-12:00")

        assert compute_dates_for_days(updated) == {
            DayKey.MONDAY: date(2025, 3, 3),
            DayKey.SUNDAY: date(2025, 3, 9),
        }

    def test_dates_across_year_boundary(self):
        """Week 1 of 2025 has its Monday in 2024."""
        record = add_slot(empty_record("E1", 2025, 1), DayKey.MONDAY, "09:00-10:00")

        assert compute_dates_for_days(record) == {DayKey.MONDAY: date(2024, 12, 30)}

    def test_stamp(self, record):
        at = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
        stamped = stamp(record, "U1", at)

        assert stamped.last_updated_by == "U1"
        assert stamped.last_updated_at == at

    def test_stamp_defaults_to_now(self, record):
        stamped = stamp(record, "U1")

        assert stamped.last_updated_at is not None
        assert stamped.last_updated_at.tzinfo is not None

    def test_stamp_requires_actor(self, record):
        with pytest.raises(MissingActor):
            stamp(record, "")


class TestTransitionStatus:
    """Tests for transition_status."""

    def test_draft_to_approved(self, record):
        assert transition_status(record, "approved").status == ScheduleStatus.APPROVED

    def test_approved_cannot_go_back_to_draft(self, record):
        approved = transition_status(record, ScheduleStatus.APPROVED)

        with pytest.raises(InvalidStatusTransition):
            transition_status(approved, ScheduleStatus.DRAFT)

    def test_approved_stays_approved(self, record):
        """Approved schedules are corrected in place."""
        approved = transition_status(record, ScheduleStatus.APPROVED)

        assert transition_status(approved, ScheduleStatus.APPROVED).status == ScheduleStatus.APPROVED

    def test_pending_requires_approval_workflow(self, record):
        with pytest.raises(InvalidStatusTransition):
            transition_status(record, ScheduleStatus.PENDING)

    def test_approval_workflow(self, record):
        """draft -> pending -> rejected -> draft with the approval policy."""
        policy = ApprovalStatusPolicy()

        pending = transition_status(record, "pending", policy)
        rejected = transition_status(pending, "rejected", policy)
        draft = transition_status(rejected, "draft", policy)

        assert pending.status == ScheduleStatus.PENDING
        assert rejected.status == ScheduleStatus.REJECTED
        assert draft.status == ScheduleStatus.DRAFT
