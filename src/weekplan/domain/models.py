"""Domain models for the weekly scheduling engine.

This module contains the core value types: day keys, schedule statuses,
time slots and the weekly schedule record aggregating them.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from types import MappingProxyType
from typing import Optional, Union

from weekplan.domain.calendar_math import (
    check_week_number,
    first_day_of_iso_week,
)
from weekplan.domain.errors import EmptySlot, MalformedRecord, MalformedSlot

SLOT_STEP_MINUTES = 15
MINUTES_PER_DAY = 24 * 60
SLOT_SEPARATOR = "-"

_TIME_PATTERN = re.compile(r"(\d{2}):(\d{2})", re.ASCII)


class DayKey(Enum):
    """Day of an ISO week. Definition order is Monday first."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def index(self) -> int:
        """Zero-based position in the week (Monday = 0)."""
        return DAY_KEYS.index(self)

    @classmethod
    def parse(cls, value: Union["DayKey", str]) -> "DayKey":
        """Resolve an English or French day name, case-insensitively."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        try:
            return cls(key)
        except ValueError:
            pass
        if key in FRENCH_DAY_NAMES:
            return FRENCH_DAY_NAMES[key]
        raise MalformedRecord(f"Unknown day: {value!r}")


DAY_KEYS: list[DayKey] = list(DayKey)

FRENCH_DAY_NAMES = {
    "lundi": DayKey.MONDAY,
    "mardi": DayKey.TUESDAY,
    "mercredi": DayKey.WEDNESDAY,
    "jeudi": DayKey.THURSDAY,
    "vendredi": DayKey.FRIDAY,
    "samedi": DayKey.SATURDAY,
    "dimanche": DayKey.SUNDAY,
}


class ScheduleStatus(Enum):
    """Lifecycle status of a weekly schedule.

    ``DRAFT`` and ``APPROVED`` are always available; ``PENDING`` and
    ``REJECTED`` belong to the manager-approval workflow.
    """

    DRAFT = "draft"
    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value: Union["ScheduleStatus", str]) -> "ScheduleStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise MalformedRecord(f"Unknown schedule status: {value!r}") from None


def to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes from midnight.

    Accepts 00:00 through 24:00. Grid alignment is not checked here.

    Raises:
        MalformedSlot: If the string is not a valid 24-hour time.
    """
    match = _TIME_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise MalformedSlot(f"Invalid time {value!r}, expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes >= 60 or hours > 24 or (hours == 24 and minutes != 0):
        raise MalformedSlot(f"Invalid time {value!r}, expected HH:MM")
    return hours * 60 + minutes


def from_minutes(minutes: int) -> str:
    """Convert minutes from midnight to "HH:MM"."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def time_options(step_minutes: int = SLOT_STEP_MINUTES) -> list[str]:
    """Every selectable time of the day, "00:00" through "24:00"."""
    return [from_minutes(m) for m in range(0, MINUTES_PER_DAY + 1, step_minutes)]


@dataclass(frozen=True)
class TimeSlot:
    """A single work interval within one day.

    Times are on the 15-minute grid, between 00:00 and 24:00, and ``end`` is
    strictly after ``start`` (a slot cannot cross midnight).

    Attributes:
        start: Start time, "HH:MM".
        end: End time, "HH:MM".
    """

    start: str
    end: str

    def __post_init__(self):
        start_minutes = to_minutes(self.start)
        end_minutes = to_minutes(self.end)
        for label, minutes in (("start", start_minutes), ("end", end_minutes)):
            if minutes % SLOT_STEP_MINUTES:
                raise MalformedSlot(
                    f"Slot {label} {from_minutes(minutes)} is not on the "
                    f"{SLOT_STEP_MINUTES}-minute grid"
                )
        if end_minutes <= start_minutes:
            raise MalformedSlot(
                f"Slot end {self.end} must be after start {self.start}"
            )

    @classmethod
    def parse(cls, serialized: str) -> "TimeSlot":
        """Parse "HH:MM-HH:MM"."""
        if not isinstance(serialized, str) or serialized.count(SLOT_SEPARATOR) != 1:
            raise MalformedSlot(
                f"Invalid slot {serialized!r}, expected HH:MM{SLOT_SEPARATOR}HH:MM"
            )
        start, end = serialized.split(SLOT_SEPARATOR)
        return cls(start.strip(), end.strip())

    @property
    def start_minutes(self) -> int:
        """Minutes from midnight when this slot starts."""
        return to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        """Minutes from midnight when this slot ends."""
        return to_minutes(self.end)

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    def overlaps(self, other: "TimeSlot") -> bool:
        """Check if the half-open intervals [start, end) intersect."""
        return (
            self.start_minutes < other.end_minutes
            and other.start_minutes < self.end_minutes
        )

    def serialize(self) -> str:
        return f"{self.start}{SLOT_SEPARATOR}{self.end}"

    def __str__(self) -> str:
        return self.serialize()


SlotLike = Union[TimeSlot, str, Sequence, Mapping]


def parse_slot(serialized: str) -> TimeSlot:
    return TimeSlot.parse(serialized)


def serialize_slot(slot: TimeSlot) -> str:
    return slot.serialize()


def duration(slot: TimeSlot) -> int:
    """Duration of a slot in minutes (always >= 1)."""
    return slot.duration_minutes


def overlaps(a: TimeSlot, b: TimeSlot) -> bool:
    return a.overlaps(b)


def coerce_slot(value: SlotLike) -> TimeSlot:
    """Build a slot from any of the shapes editing code holds.

    Accepts a ``TimeSlot``, a "HH:MM-HH:MM" string, a ``(start, end)`` pair or
    a ``{"start": ..., "end": ...}`` mapping.

    Raises:
        EmptySlot: If the value carries no start or end time.
        MalformedSlot: If the times are present but invalid.
    """
    if isinstance(value, TimeSlot):
        return value
    if isinstance(value, str):
        if not value.strip():
            raise EmptySlot("Slot is empty")
        return TimeSlot.parse(value)
    if isinstance(value, Mapping):
        start, end = value.get("start"), value.get("end")
    elif isinstance(value, Sequence) and len(value) == 2:
        start, end = value
    else:
        raise MalformedSlot(f"Invalid slot {value!r}")
    if not start or not end:
        raise EmptySlot("Slot is missing its start or end time")
    return TimeSlot(start, end)


def format_duration(minutes: int) -> str:
    """Format minutes as "8h", "45min" or "5h 30min"."""
    if minutes <= 0:
        return "0min"
    hours, remaining = divmod(minutes, 60)
    if hours == 0:
        return f"{remaining}min"
    if remaining == 0:
        return f"{hours}h"
    return f"{hours}h {remaining}min"


def _empty_slots() -> dict[DayKey, tuple[TimeSlot, ...]]:
    return {day: () for day in DAY_KEYS}


def _empty_notes() -> dict[DayKey, str]:
    return {day: "" for day in DAY_KEYS}


@dataclass(frozen=True)
class WeeklyScheduleRecord:
    """One employee's schedule for one ISO week.

    Records are immutable and hashable; the functions in
    ``weekplan.domain.records`` return updated copies. ``slots_by_day`` and
    ``notes_by_day`` are read-only mappings that always hold all seven days,
    an empty tuple or empty string meaning "nothing".

    Attributes:
        employee_id: Identifier owned by the employee directory.
        year: ISO week-year.
        week_number: ISO week number (1-53).
        slots_by_day: Ordered slots for each day.
        notes_by_day: Note for each day ("" when there is none).
        general_notes: Free text for the whole week.
        status: Lifecycle status.
        last_updated_by: Actor of the last create/update.
        last_updated_at: Timestamp of the last create/update.
        record_id: Identifier assigned by the persistence collaborator.
        employee_name: Display name, when provided by the collaborator.
        team_id: Team of the employee, used for team views.
    """

    employee_id: Optional[str]
    year: int
    week_number: int
    slots_by_day: Mapping[DayKey, tuple[TimeSlot, ...]] = field(
        default_factory=_empty_slots
    )
    notes_by_day: Mapping[DayKey, str] = field(default_factory=_empty_notes)
    general_notes: str = ""
    status: ScheduleStatus = ScheduleStatus.DRAFT
    last_updated_by: Optional[str] = None
    last_updated_at: Optional[datetime] = None
    record_id: Optional[str] = None
    employee_name: Optional[str] = None
    team_id: Optional[str] = None

    def __post_init__(self):
        check_week_number(self.year, self.week_number)

        slots = _empty_slots()
        for day, day_slots in self.slots_by_day.items():
            slots[DayKey.parse(day)] = tuple(coerce_slot(s) for s in day_slots)
        notes = _empty_notes()
        for day, note in self.notes_by_day.items():
            notes[DayKey.parse(day)] = (note or "").strip()

        object.__setattr__(self, "slots_by_day", MappingProxyType(slots))
        object.__setattr__(self, "notes_by_day", MappingProxyType(notes))
        object.__setattr__(self, "general_notes", (self.general_notes or "").strip())
        object.__setattr__(self, "status", ScheduleStatus.parse(self.status))

    def __hash__(self) -> int:
        return hash((
            self.natural_key,
            tuple(self.slots_by_day.items()),
            tuple(self.notes_by_day.items()),
            self.general_notes,
            self.status,
            self.last_updated_by,
            self.last_updated_at,
            self.record_id,
            self.employee_name,
            self.team_id,
        ))

    @property
    def natural_key(self) -> tuple[Optional[str], int, int]:
        """(employee_id, year, week_number): unique among live records."""
        return self.employee_id, self.year, self.week_number

    @property
    def total_weekly_minutes(self) -> int:
        """Sum of all slot durations across the week."""
        return sum(self.day_minutes(day) for day in DAY_KEYS)

    def day_minutes(self, day: Union[DayKey, str]) -> int:
        return sum(slot.duration_minutes for slot in self.slots(day))

    def slots(self, day: Union[DayKey, str]) -> tuple[TimeSlot, ...]:
        return self.slots_by_day[DayKey.parse(day)]

    def note(self, day: Union[DayKey, str]) -> str:
        return self.notes_by_day[DayKey.parse(day)]

    @property
    def days_with_slots(self) -> list[DayKey]:
        """Days carrying at least one slot, Monday first."""
        return [day for day in DAY_KEYS if self.slots_by_day[day]]

    @property
    def has_slots(self) -> bool:
        return bool(self.days_with_slots)

    @property
    def week_dates(self) -> dict[DayKey, date]:
        """Calendar date of every day of the record's week."""
        monday = first_day_of_iso_week(self.year, self.week_number)
        return {day: monday + timedelta(days=day.index) for day in DAY_KEYS}
