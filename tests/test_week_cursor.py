"""Tests for WeekCursor navigation."""

from datetime import date

import pytest

from weekplan.domain.errors import OutOfRange
from weekplan.scheduling.week_cursor import WeekCursor


class TestWeekCursor:
    """Tests for WeekCursor."""

    def test_from_date(self):
        """The cursor lands on the ISO week of the date."""
        cursor = WeekCursor.from_date(date(2024, 12, 31))

        assert cursor == WeekCursor(2025, 1)
        assert str(cursor) == "2025-W01"

    def test_current(self):
        assert WeekCursor.current(date(2024, 4, 25)) == WeekCursor(2024, 17)

    def test_navigation_across_years(self):
        """Next and previous follow the ISO week count of each year."""
        assert WeekCursor(2020, 53).next() == WeekCursor(2021, 1)
        assert WeekCursor(2025, 1).previous() == WeekCursor(2024, 52)
        assert WeekCursor(2024, 17).next().previous() == WeekCursor(2024, 17)

    def test_dates(self):
        cursor = WeekCursor(2024, 17)

        assert cursor.first_day == date(2024, 4, 22)
        assert cursor.last_day == date(2024, 4, 28)
        assert len(cursor.dates) == 7
        assert cursor.contains(date(2024, 4, 28))
        assert not cursor.contains(date(2024, 4, 29))

    def test_label(self):
        assert WeekCursor(2024, 17).label() == "22 avr. → 28 avr. 2024"
        assert WeekCursor(2024, 17).label("en") == "22 Apr → 28 Apr 2024"

    def test_missing_week(self):
        with pytest.raises(OutOfRange):
            WeekCursor(2024, 53)
