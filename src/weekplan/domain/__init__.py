"""Domain models, calendar arithmetic and business rules for weekly schedules."""

from weekplan.domain.calendar_math import (
    dates_of_iso_week,
    first_day_of_iso_week,
    format_week_range_label,
    iso_week_of,
    shift_iso_week,
    weeks_in_iso_year,
)
from weekplan.domain.errors import (
    DuplicateSchedule,
    EmptySlot,
    ErrorKind,
    IncompletePayload,
    InvalidStatusTransition,
    MalformedRecord,
    MalformedSlot,
    MissingActor,
    OutOfRange,
    RecordNotFound,
    RemoteFailure,
    ScheduleError,
    error_from_remote,
)
from weekplan.domain.models import (
    DAY_KEYS,
    DayKey,
    ScheduleStatus,
    TimeSlot,
    WeeklyScheduleRecord,
    duration,
    format_duration,
    overlaps,
    parse_slot,
    serialize_slot,
    time_options,
)
from weekplan.domain.month_grid import MonthGridCell, build_month_grid
from weekplan.domain.policies import (
    ApprovalStatusPolicy,
    DefaultStatusPolicy,
    DefaultWeekRangePolicy,
    StatusPolicy,
    WeekRangePolicy,
)
from weekplan.domain.statistics import WeeklyHoursMetrics

__all__ = [
    # Calendar arithmetic
    "dates_of_iso_week",
    "first_day_of_iso_week",
    "format_week_range_label",
    "iso_week_of",
    "shift_iso_week",
    "weeks_in_iso_year",
    "MonthGridCell",
    "build_month_grid",
    # Models
    "DAY_KEYS",
    "DayKey",
    "ScheduleStatus",
    "TimeSlot",
    "WeeklyScheduleRecord",
    "duration",
    "format_duration",
    "overlaps",
    "parse_slot",
    "serialize_slot",
    "time_options",
    # Errors
    "DuplicateSchedule",
    "EmptySlot",
    "ErrorKind",
    "IncompletePayload",
    "InvalidStatusTransition",
    "MalformedRecord",
    "MalformedSlot",
    "MissingActor",
    "OutOfRange",
    "RecordNotFound",
    "RemoteFailure",
    "ScheduleError",
    "error_from_remote",
    # Policies
    "ApprovalStatusPolicy",
    "DefaultStatusPolicy",
    "DefaultWeekRangePolicy",
    "StatusPolicy",
    "WeekRangePolicy",
    # Statistics
    "WeeklyHoursMetrics",
]
