"""Tests for the month grid builder."""

from datetime import date

import pytest

from weekplan.domain.errors import OutOfRange
from weekplan.domain.month_grid import (
    GRID_CELLS,
    build_month_grid,
    first_cell_index,
    grid_rows,
    shift_month,
)


class TestBuildMonthGrid:
    """Tests for build_month_grid."""

    @pytest.mark.parametrize(
        "year,month",
        [(2024, 1), (2024, 2), (2024, 9), (2021, 2), (2025, 6), (2026, 3)],
    )
    def test_grid_always_has_42_cells(self, year, month):
        """Every month is laid out on 6 full weeks."""
        cells = build_month_grid(year, month)

        assert len(cells) == GRID_CELLS == 42
        index = first_cell_index(year, month)
        assert cells[index].date == date(year, month, 1)
        assert cells[index].in_target_month
        assert not any(cell.in_target_month for cell in cells[:index])

    def test_month_starting_on_sunday(self):
        """September 2024 starts on a Sunday, the last column."""
        cells = build_month_grid(2024, 9)

        assert cells[0].date == date(2024, 8, 26)
        assert cells[6].date == date(2024, 9, 1)
        assert sum(cell.in_target_month for cell in cells) == 30

    def test_month_starting_on_monday(self):
        """February 2021 starts on a Monday and is padded with March."""
        cells = build_month_grid(2021, 2)

        assert cells[0].date == date(2021, 2, 1)
        assert cells[27].date == date(2021, 2, 28)
        assert cells[28].date == date(2021, 3, 1)
        assert not any(cell.in_target_month for cell in cells[28:])

    def test_rows_start_on_monday(self):
        """The grid splits into 6 rows, each starting on a Monday."""
        rows = grid_rows(build_month_grid(2024, 9))

        assert len(rows) == 6
        assert all(len(row) == 7 for row in rows)
        assert all(row[0].date.weekday() == 0 for row in rows)

    def test_cell_iso_week(self):
        """Cells expose the ISO week of their date."""
        cells = build_month_grid(2024, 12)
        last_day = next(c for c in cells if c.date == date(2024, 12, 31))

        assert last_day.iso_week == (2025, 1)

    @pytest.mark.parametrize("month", [0, 13])
    def test_invalid_month(self, month):
        """Months outside 1-12 are rejected."""
        with pytest.raises(OutOfRange):
            build_month_grid(2024, month)


class TestShiftMonth:
    """Tests for shift_month."""

    def test_forward_across_year(self):
        assert shift_month(2024, 12, 1) == (2025, 1)

    def test_backward_across_year(self):
        assert shift_month(2024, 1, -1) == (2023, 12)

    def test_several_months(self):
        assert shift_month(2024, 5, 14) == (2025, 7)
