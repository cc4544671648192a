"""Tests for weekly hours statistics."""

import pytest

from weekplan.domain.models import DayKey, WeeklyScheduleRecord
from weekplan.domain.statistics import WeeklyHoursMetrics


class TestWeeklyHoursMetrics:
    """Tests for WeeklyHoursMetrics.calculate."""

    @pytest.fixture
    def records(self):
        """E1 works 10h over two days, E2 works 8h on one day."""
        return [
            WeeklyScheduleRecord(
                "E1", 2025, 10,
                slots_by_day={
                    DayKey.MONDAY: ["09:00-12:00", "14:00-18:00"],
                    DayKey.TUESDAY: ["09:00-12:00"],
                },
            ),
            WeeklyScheduleRecord(
                "E2", 2025, 10,
                slots_by_day={DayKey.WEDNESDAY: ["08:00-16:00"]},
            ),
        ]

    def test_hours(self, records):
        metrics = WeeklyHoursMetrics.calculate(records)

        assert metrics.hours_per_employee == {"E1": 10.0, "E2": 8.0}
        assert metrics.days_per_employee == {"E1": 2, "E2": 1}
        assert metrics.total_hours == 18.0
        assert metrics.avg_hours == 9.0
        assert metrics.min_hours == 8.0
        assert metrics.max_hours == 10.0

    def test_contract_compliance(self, records):
        """E3 has a contract but no schedule, which lowers both rates."""
        metrics = WeeklyHoursMetrics.calculate(
            records, contract_hours={"E1": 10, "E2": 16, "E3": 35}
        )

        assert metrics.compliance_per_employee == {"E1": 1.0, "E2": 0.5, "E3": 0.0}
        assert metrics.compliance_rate == pytest.approx(50.0)
        assert metrics.employees_considered == 3
        assert metrics.employees_with_schedule == 2
        assert metrics.coverage_rate == pytest.approx(200 / 3)
        assert metrics.total_contract_hours == 61

    def test_explicit_employee_list(self, records):
        metrics = WeeklyHoursMetrics.calculate(records, employee_ids=["E1", "E4"])

        assert metrics.employees_considered == 2
        assert metrics.coverage_rate == pytest.approx(50.0)

    def test_no_records(self):
        metrics = WeeklyHoursMetrics.calculate([])

        assert metrics.total_hours == 0.0
        assert metrics.coverage_rate == 0.0
        assert metrics.compliance_rate == 0.0
