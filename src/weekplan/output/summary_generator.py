"""Plain-text summary of a week's schedules.

This module creates a text report showing:
- Per-employee slots for each day of the week and the weekly total
- Notes attached to the week
- Hours and contract compliance statistics
"""

from pathlib import Path
from typing import Iterable, Optional, Union

from weekplan.domain.calendar_math import format_week_range_label, normalize_locale
from weekplan.domain.models import (
    DAY_KEYS,
    TimeSlot,
    WeeklyScheduleRecord,
    format_duration,
)
from weekplan.domain.statistics import WeeklyHoursMetrics

EMPTY_CELL = "—"

DAY_LABELS = {
    "fr": ["Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi", "Dimanche"],
    "en": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
}


def format_schedule_times(slots: Iterable[TimeSlot]) -> str:
    """Join slots as "09:00-12:00, 14:00-18:00", or "—" when there are none."""
    serialized = [slot.serialize() for slot in slots]
    return ", ".join(serialized) if serialized else EMPTY_CELL


class SummaryGenerator:
    """Generates the text summary of one ISO week.

    Records of other weeks are ignored, so a whole collection can be passed.
    An unsupported locale is rejected with ``ValueError`` on construction.
    """

    def __init__(self, locale: str = "fr"):
        self.locale = normalize_locale(locale)

    def generate(
        self,
        records: Iterable[WeeklyScheduleRecord],
        year: int,
        week_number: int,
        output_path: Union[str, Path],
        contract_hours: Optional[dict[str, float]] = None,
    ) -> str:
        """Generate the summary and save it to a file.

        Returns:
            The generated text content.
        """
        content = self._generate_content(records, year, week_number, contract_hours)
        Path(output_path).write_text(content, encoding="utf-8")
        return content

    def generate_to_string(
        self,
        records: Iterable[WeeklyScheduleRecord],
        year: int,
        week_number: int,
        contract_hours: Optional[dict[str, float]] = None,
    ) -> str:
        return self._generate_content(records, year, week_number, contract_hours)

    def _generate_content(
        self,
        records: Iterable[WeeklyScheduleRecord],
        year: int,
        week_number: int,
        contract_hours: Optional[dict[str, float]],
    ) -> str:
        week_records = sorted(
            (r for r in records if r.year == year and r.week_number == week_number),
            key=self._display_name,
        )
        day_labels = DAY_LABELS[self.locale]
        lines = []

        # Header
        lines.append("=" * 80)
        lines.append(
            f"WEEK {week_number} / {year} - "
            f"{format_week_range_label(year, week_number, self.locale)}"
        )
        lines.append("=" * 80)
        lines.append(f"Schedules: {len(week_records)}")
        lines.append("")

        # Per-employee table
        for record in week_records:
            lines.append("-" * 80)
            lines.append(
                f"{self._display_name(record)} [{record.status.value}] "
                f"total {format_duration(record.total_weekly_minutes)}"
            )
            for day, label in zip(DAY_KEYS, day_labels):
                line = f"  {label:<10} {format_schedule_times(record.slots(day))}"
                if record.note(day):
                    line += f"  ({record.note(day)})"
                lines.append(line)
            if record.general_notes:
                lines.append(f"  Notes: {record.general_notes}")
        lines.append("")

        # Statistics
        metrics = WeeklyHoursMetrics.calculate(week_records, contract_hours)
        lines.append("-" * 80)
        lines.append("STATISTICS")
        lines.append("-" * 80)
        lines.append(f"Total planned: {metrics.total_hours:.1f}h")
        lines.append(
            f"Hours per employee: avg={metrics.avg_hours:.1f}, "
            f"min={metrics.min_hours:.1f}, max={metrics.max_hours:.1f}"
        )
        if contract_hours:
            lines.append(
                f"Coverage: {metrics.employees_with_schedule}/"
                f"{metrics.employees_considered} employees "
                f"({metrics.coverage_rate:.1f}%)"
            )
            lines.append(f"Contract compliance: {metrics.compliance_rate:.1f}%")

        lines.append("")
        lines.append("=" * 80)
        return "\n".join(lines)

    @staticmethod
    def _display_name(record: WeeklyScheduleRecord) -> str:
        return record.employee_name or record.employee_id or "?"
