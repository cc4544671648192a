"""Weekly hours statistics and contract compliance.

Planned hours are computed from the actual slot durations of each record.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from weekplan.domain.models import WeeklyScheduleRecord


@dataclass
class WeeklyHoursMetrics:
    """Hours and coverage metrics for a set of weekly schedules.

    Attributes:
        hours_per_employee: Planned hours for each employee with a record.
        days_per_employee: Days with at least one slot, per employee.
        compliance_per_employee: Planned / contract hours, per employee with
            a contract. 0.0 for employees without a record.
        total_hours: Planned hours across all records.
        avg_hours: Average planned hours per employee with a record.
        min_hours: Fewest planned hours.
        max_hours: Most planned hours.
        employees_considered: Number of employees the report covers.
        employees_with_schedule: Number of those with a record.
        coverage_rate: Percentage of employees with a record (0-100).
        total_contract_hours: Sum of contract hours of considered employees.
        compliance_rate: Average compliance ratio as a percentage (0-100).
    """

    hours_per_employee: dict[str, float] = field(default_factory=dict)
    days_per_employee: dict[str, int] = field(default_factory=dict)
    compliance_per_employee: dict[str, float] = field(default_factory=dict)
    total_hours: float = 0.0
    avg_hours: float = 0.0
    min_hours: float = 0.0
    max_hours: float = 0.0
    employees_considered: int = 0
    employees_with_schedule: int = 0
    coverage_rate: float = 0.0
    total_contract_hours: float = 0.0
    compliance_rate: float = 0.0

    @classmethod
    def calculate(
        cls,
        records: Iterable[WeeklyScheduleRecord],
        contract_hours: Optional[dict[str, float]] = None,
        employee_ids: Optional[Iterable[str]] = None,
    ) -> "WeeklyHoursMetrics":
        """Calculate metrics from the records of one week.

        Args:
            records: Weekly schedule records, at most one per employee.
            contract_hours: Weekly contract hours per employee ID.
            employee_ids: Employees the report covers. Defaults to the union
                of employees with a record and employees with a contract.
        """
        contract_hours = contract_hours or {}
        minutes: dict[str, int] = {}
        days: dict[str, int] = {}
        for record in records:
            if not record.employee_id:
                continue
            minutes[record.employee_id] = (
                minutes.get(record.employee_id, 0) + record.total_weekly_minutes
            )
            days[record.employee_id] = (
                days.get(record.employee_id, 0) + len(record.days_with_slots)
            )

        if employee_ids is None:
            considered = set(minutes) | set(contract_hours)
        else:
            considered = set(employee_ids)

        hours = {eid: mins / 60.0 for eid, mins in minutes.items()}
        values = list(hours.values())

        compliance = {}
        for eid in considered:
            contract = contract_hours.get(eid)
            if contract:
                compliance[eid] = hours.get(eid, 0.0) / contract

        with_schedule = len(considered & set(hours))
        coverage = with_schedule / len(considered) * 100.0 if considered else 0.0
        compliance_rate = (
            sum(compliance.values()) / len(compliance) * 100.0 if compliance else 0.0
        )

        return cls(
            hours_per_employee=hours,
            days_per_employee=days,
            compliance_per_employee=compliance,
            total_hours=sum(values),
            avg_hours=sum(values) / len(values) if values else 0.0,
            min_hours=min(values) if values else 0.0,
            max_hours=max(values) if values else 0.0,
            employees_considered=len(considered),
            employees_with_schedule=with_schedule,
            coverage_rate=coverage,
            total_contract_hours=sum(contract_hours.get(eid, 0.0) for eid in considered),
            compliance_rate=compliance_rate,
        )
