"""Working sets of schedules and week navigation."""

from weekplan.scheduling.collection import ScheduleCollection
from weekplan.scheduling.week_cursor import WeekCursor

__all__ = [
    "ScheduleCollection",
    "WeekCursor",
]
