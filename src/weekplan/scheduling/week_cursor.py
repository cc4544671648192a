"""Week navigation for weekly schedule views."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from weekplan.domain.calendar_math import (
    check_week_number,
    dates_of_iso_week,
    first_day_of_iso_week,
    format_week_range_label,
    iso_week_of,
    shift_iso_week,
)


@dataclass(frozen=True)
class WeekCursor:
    """The ISO week a view is positioned on.

    Attributes:
        year: ISO week-year.
        week_number: ISO week number.
    """

    year: int
    week_number: int

    def __post_init__(self):
        check_week_number(self.year, self.week_number)

    @classmethod
    def from_date(cls, d: date) -> "WeekCursor":
        return cls(*iso_week_of(d))

    @classmethod
    def current(cls, today: Optional[date] = None) -> "WeekCursor":
        return cls.from_date(today or date.today())

    def previous(self) -> "WeekCursor":
        return WeekCursor(*shift_iso_week(self.year, self.week_number, -1))

    def next(self) -> "WeekCursor":
        return WeekCursor(*shift_iso_week(self.year, self.week_number, 1))

    @property
    def dates(self) -> list[date]:
        """The seven dates of the week, Monday first."""
        return dates_of_iso_week(self.year, self.week_number)

    @property
    def first_day(self) -> date:
        return first_day_of_iso_week(self.year, self.week_number)

    @property
    def last_day(self) -> date:
        return self.dates[-1]

    def contains(self, d: date) -> bool:
        return iso_week_of(d) == (self.year, self.week_number)

    def label(self, locale: str = "fr") -> str:
        return format_week_range_label(self.year, self.week_number, locale)

    def __str__(self) -> str:
        return f"{self.year}-W{self.week_number:02d}"
