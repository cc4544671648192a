"""Month grid builder for calendar navigation.

The grid always holds 6 full weeks (42 cells), Monday first, so calendar
views keep the same number of rows whatever the month.
"""

from dataclasses import dataclass
from datetime import date, timedelta

from weekplan.domain.calendar_math import DAYS_PER_WEEK, iso_week_of
from weekplan.domain.errors import OutOfRange

GRID_WEEKS = 6
GRID_CELLS = GRID_WEEKS * DAYS_PER_WEEK


@dataclass(frozen=True)
class MonthGridCell:
    """A single day in a month grid.

    Attributes:
        date: The calendar date shown in the cell.
        in_target_month: True only for dates of the month being displayed.
    """

    date: date
    in_target_month: bool

    @property
    def iso_week(self) -> tuple[int, int]:
        """ISO (year, week) the cell's date belongs to."""
        return iso_week_of(self.date)


def build_month_grid(year: int, month: int) -> list[MonthGridCell]:
    """Build the 42-cell display grid for a month.

    The first of the month is placed at its Monday-based weekday index
    (Monday = 0 .. Sunday = 6). Cells before it are back-filled from the
    previous month and cells after the last day come from the following month.

    Raises:
        OutOfRange: If ``month`` is not 1-12.
    """
    if not 1 <= month <= 12:
        raise OutOfRange(f"Month {month} is outside 1-12")

    first_of_month = date(year, month, 1)
    leading_days = first_of_month.weekday()
    grid_start = first_of_month - timedelta(days=leading_days)

    cells = []
    for offset in range(GRID_CELLS):
        d = grid_start + timedelta(days=offset)
        cells.append(
            MonthGridCell(
                date=d,
                in_target_month=(d.year == year and d.month == month),
            )
        )
    return cells


def grid_rows(cells: list[MonthGridCell]) -> list[list[MonthGridCell]]:
    """Split a grid into its weeks (rows of 7 cells)."""
    return [
        cells[i:i + DAYS_PER_WEEK] for i in range(0, len(cells), DAYS_PER_WEEK)
    ]


def first_cell_index(year: int, month: int) -> int:
    """Index of the first of the month within its grid."""
    return date(year, month, 1).weekday()


def shift_month(year: int, month: int, increment: int) -> tuple[int, int]:
    """Move a (year, month) pair by ``increment`` months."""
    index = year * 12 + (month - 1) + increment
    return index // 12, index % 12 + 1
