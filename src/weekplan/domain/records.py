"""Pure transformations of weekly schedule records.

Every function returns a new ``WeeklyScheduleRecord``; the input is never
modified. Editing code keeps a reference to the current record and replaces
it with the returned one on each edit.
"""

from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Iterable, Optional, Union

from weekplan.domain.errors import (
    EmptySlot,
    InvalidStatusTransition,
    MissingActor,
    ScheduleError,
)
from weekplan.domain.models import (
    DayKey,
    ScheduleStatus,
    SlotLike,
    WeeklyScheduleRecord,
    coerce_slot,
)
from weekplan.domain.policies import StatusPolicy, status_policy_for


def empty_record(
    employee_id: Optional[str],
    year: int,
    week_number: int,
    status: ScheduleStatus = ScheduleStatus.DRAFT,
    **kwargs,
) -> WeeklyScheduleRecord:
    """Create a record with no slots and no notes for every day."""
    return WeeklyScheduleRecord(
        employee_id=employee_id,
        year=year,
        week_number=week_number,
        status=status,
        **kwargs,
    )


def set_day_slots(
    record: WeeklyScheduleRecord,
    day: Union[DayKey, str],
    slots: Iterable[SlotLike],
) -> WeeklyScheduleRecord:
    """Replace the slot list of one day.

    The weekly total is derived from the slots, so it follows automatically.

    Raises:
        EmptySlot: If any of the slots is missing a time or is invalid.
    """
    day = DayKey.parse(day)
    parsed = []
    for position, slot in enumerate(slots, start=1):
        try:
            parsed.append(coerce_slot(slot))
        except EmptySlot as exc:
            raise EmptySlot(f"Slot {position} of {day.value}: {exc.message}") from exc
        except ScheduleError as exc:
            raise EmptySlot(
                f"Slot {position} of {day.value} is invalid: {exc.message}"
            ) from exc

    slots_by_day = dict(record.slots_by_day)
    slots_by_day[day] = tuple(parsed)
    return replace(record, slots_by_day=slots_by_day)


def add_slot(
    record: WeeklyScheduleRecord,
    day: Union[DayKey, str],
    slot: SlotLike,
) -> WeeklyScheduleRecord:
    """Append a slot at the end of a day."""
    return set_day_slots(record, day, [*record.slots(day), slot])


def remove_slot(
    record: WeeklyScheduleRecord,
    day: Union[DayKey, str],
    index: int,
) -> WeeklyScheduleRecord:
    """Remove the slot at ``index`` (zero-based) from a day.

    Raises:
        IndexError: If the day has no slot at that index.
    """
    slots = list(record.slots(day))
    del slots[index]
    return set_day_slots(record, day, slots)


def replace_slot(
    record: WeeklyScheduleRecord,
    day: Union[DayKey, str],
    index: int,
    slot: SlotLike,
) -> WeeklyScheduleRecord:
    slots = list(record.slots(day))
    slots[index] = slot
    return set_day_slots(record, day, slots)


def set_day_note(
    record: WeeklyScheduleRecord,
    day: Union[DayKey, str],
    text: Optional[str],
) -> WeeklyScheduleRecord:
    """Set the note of one day.

    The text is trimmed; ``None`` and blank text are stored as "" so that a
    cleared note is always sent as an explicit empty string.
    """
    notes_by_day = dict(record.notes_by_day)
    notes_by_day[DayKey.parse(day)] = (text or "").strip()
    return replace(record, notes_by_day=notes_by_day)


def set_general_notes(
    record: WeeklyScheduleRecord,
    text: Optional[str],
) -> WeeklyScheduleRecord:
    return replace(record, general_notes=(text or "").strip())


def compute_dates_for_days(record: WeeklyScheduleRecord) -> dict[DayKey, date]:
    """Calendar date of each day that has at least one slot.

    Days without slots get no entry: the record does not assert a date for
    a day with nothing scheduled.
    """
    week_dates = record.week_dates
    return {day: week_dates[day] for day in record.days_with_slots}


def stamp(
    record: WeeklyScheduleRecord,
    actor_id: Optional[str],
    at: Optional[datetime] = None,
) -> WeeklyScheduleRecord:
    """Record who changed the schedule and when.

    Raises:
        MissingActor: If no actor is given.
    """
    if not actor_id:
        raise MissingActor("The acting user is required to update a schedule")
    return replace(
        record,
        last_updated_by=actor_id,
        last_updated_at=at or datetime.now(timezone.utc),
    )


def transition_status(
    record: WeeklyScheduleRecord,
    status: Union[ScheduleStatus, str],
    policy: Optional[StatusPolicy] = None,
) -> WeeklyScheduleRecord:
    """Move a record to a new status.

    Without a policy, the workflow configured in the settings applies.

    Raises:
        InvalidStatusTransition: If the policy forbids the change.
    """
    policy = policy or status_policy_for()
    target = ScheduleStatus.parse(status)
    if not policy.can_transition(record.status, target):
        raise InvalidStatusTransition(
            f"Cannot move schedule from {record.status.value} to {target.value}"
        )
    return replace(record, status=target)
