"""Policy definitions for caller-side scheduling rules.

Policies hold the rules that vary between deployments and screens (which
years may be browsed, which statuses and status transitions exist). They are
kept separate from the calendar arithmetic and the record model so that the
core stays free of deployment choices.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from weekplan.config import get_settings
from weekplan.domain.calendar_math import check_week_number
from weekplan.domain.errors import OutOfRange
from weekplan.domain.models import ScheduleStatus


class WeekRangePolicy(ABC):
    """Abstract base class for the range of weeks a caller accepts."""

    @abstractmethod
    def min_year(self) -> int:
        pass

    @abstractmethod
    def max_year(self) -> int:
        pass

    def is_supported(self, year: int, week_number: int) -> bool:
        """Check a (year, week) pair without raising."""
        try:
            self.check(year, week_number)
        except OutOfRange:
            return False
        return True

    def check(self, year: int, week_number: int) -> None:
        """Raise ``OutOfRange`` if the pair is outside the policy.

        The week must also exist in the ISO year.
        """
        if not self.min_year() <= year <= self.max_year():
            raise OutOfRange(
                f"Year {year} is outside {self.min_year()}-{self.max_year()}"
            )
        check_week_number(year, week_number)


@dataclass
class DefaultWeekRangePolicy(WeekRangePolicy):
    """Year bounds used by the schedule screens: 2020 to 2050 inclusive."""

    first_year: int = 2020
    last_year: int = 2050

    def min_year(self) -> int:
        return self.first_year

    def max_year(self) -> int:
        return self.last_year

    @classmethod
    def from_settings(cls, settings=None) -> "DefaultWeekRangePolicy":
        """Build the policy from application settings."""
        if settings is None:
            settings = get_settings()
        return cls(first_year=settings.min_year, last_year=settings.max_year)


class StatusPolicy(ABC):
    """Abstract base class for schedule status workflows."""

    @abstractmethod
    def allowed_statuses(self) -> frozenset[ScheduleStatus]:
        """Statuses a record may hold under this workflow."""
        pass

    @abstractmethod
    def transitions(self) -> dict[ScheduleStatus, frozenset[ScheduleStatus]]:
        """Map of each status to the statuses it may move to."""
        pass

    def can_transition(self, current: ScheduleStatus, target: ScheduleStatus) -> bool:
        """Check a status change.

        Keeping the current status is always allowed, since approved
        schedules are corrected in place.
        """
        if target not in self.allowed_statuses():
            return False
        if current == target:
            return True
        return target in self.transitions().get(current, frozenset())


class DefaultStatusPolicy(StatusPolicy):
    """Core workflow: a draft is validated by a manager into approved."""

    def allowed_statuses(self) -> frozenset[ScheduleStatus]:
        return frozenset({ScheduleStatus.DRAFT, ScheduleStatus.APPROVED})

    def transitions(self) -> dict[ScheduleStatus, frozenset[ScheduleStatus]]:
        return {ScheduleStatus.DRAFT: frozenset({ScheduleStatus.APPROVED})}


class ApprovalStatusPolicy(StatusPolicy):
    """Manager-approval workflow with pending and rejected states.

    - draft -> pending (submitted for approval) or approved (direct validation)
    - pending -> approved | rejected
    - rejected -> draft (sent back for correction)

    Nothing leaves approved.
    """

    def allowed_statuses(self) -> frozenset[ScheduleStatus]:
        return frozenset(ScheduleStatus)

    def transitions(self) -> dict[ScheduleStatus, frozenset[ScheduleStatus]]:
        return {
            ScheduleStatus.DRAFT: frozenset(
                {ScheduleStatus.PENDING, ScheduleStatus.APPROVED}
            ),
            ScheduleStatus.PENDING: frozenset(
                {ScheduleStatus.APPROVED, ScheduleStatus.REJECTED}
            ),
            ScheduleStatus.REJECTED: frozenset({ScheduleStatus.DRAFT}),
        }


def status_policy_for(workflow: Optional[str] = None) -> StatusPolicy:
    """Return the status policy for a workflow name ("core" or "approval").

    Without a name, the workflow configured in the settings is used.
    """
    if workflow is None:
        workflow = get_settings().status_workflow
    if workflow == "approval":
        return ApprovalStatusPolicy()
    if workflow == "core":
        return DefaultStatusPolicy()
    raise ValueError(f"Unknown status workflow: {workflow}")
