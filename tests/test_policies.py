"""Tests for week range and status policies, and their settings."""

import pytest

from weekplan.config import Settings
from weekplan.domain.errors import OutOfRange
from weekplan.domain.models import ScheduleStatus
from weekplan.domain.policies import (
    ApprovalStatusPolicy,
    DefaultStatusPolicy,
    DefaultWeekRangePolicy,
    status_policy_for,
)


class TestDefaultWeekRangePolicy:
    """Tests for DefaultWeekRangePolicy."""

    @pytest.fixture
    def policy(self):
        """Create the default 2020-2050 policy."""
        return DefaultWeekRangePolicy()

    def test_bounds_are_inclusive(self, policy):
        """2020 and 2050 are both browsable."""
        policy.check(2020, 1)
        policy.check(2050, 52)

    @pytest.mark.parametrize("year", [2019, 2051])
    def test_years_outside_bounds(self, policy, year):
        with pytest.raises(OutOfRange):
            policy.check(year, 10)

    def test_week_must_exist_in_year(self, policy):
        """The policy also checks the ISO week count."""
        assert policy.is_supported(2020, 53)
        assert not policy.is_supported(2021, 53)

    def test_from_settings(self):
        policy = DefaultWeekRangePolicy.from_settings(Settings(min_year=2022, max_year=2030))

        assert policy.min_year() == 2022
        assert policy.max_year() == 2030
        assert not policy.is_supported(2021, 10)


class TestStatusPolicies:
    """Tests for the status workflows."""

    def test_core_workflow(self):
        """Only draft -> approved exists in the core workflow."""
        policy = DefaultStatusPolicy()

        assert policy.can_transition(ScheduleStatus.DRAFT, ScheduleStatus.APPROVED)
        assert not policy.can_transition(ScheduleStatus.APPROVED, ScheduleStatus.DRAFT)
        assert not policy.can_transition(ScheduleStatus.DRAFT, ScheduleStatus.PENDING)
        assert policy.allowed_statuses() == {ScheduleStatus.DRAFT, ScheduleStatus.APPROVED}

    def test_approval_workflow(self):
        policy = ApprovalStatusPolicy()

        assert policy.can_transition(ScheduleStatus.DRAFT, ScheduleStatus.PENDING)
        assert policy.can_transition(ScheduleStatus.PENDING, ScheduleStatus.APPROVED)
        assert policy.can_transition(ScheduleStatus.PENDING, ScheduleStatus.REJECTED)
        assert policy.can_transition(ScheduleStatus.REJECTED, ScheduleStatus.DRAFT)
        assert not policy.can_transition(ScheduleStatus.APPROVED, ScheduleStatus.PENDING)

    def test_keeping_status_is_allowed(self):
        """An approved schedule can be saved again as approved."""
        assert DefaultStatusPolicy().can_transition(
            ScheduleStatus.APPROVED, ScheduleStatus.APPROVED
        )

    def test_status_policy_for(self):
        assert isinstance(status_policy_for("core"), DefaultStatusPolicy)
        assert isinstance(status_policy_for("approval"), ApprovalStatusPolicy)

        with pytest.raises(ValueError):
            status_policy_for("other")


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        for name in ("MIN_YEAR", "MAX_YEAR", "LOCALE", "STATUS_WORKFLOW", "LOG_LEVEL"):
            monkeypatch.delenv(f"WEEKPLAN_{name}", raising=False)

        settings = Settings(_env_file=None)

        assert settings.min_year == 2020
        assert settings.max_year == 2050
        assert settings.locale == "fr"
        assert settings.status_workflow == "core"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("WEEKPLAN_MIN_YEAR", "2023")
        monkeypatch.setenv("WEEKPLAN_STATUS_WORKFLOW", "approval")

        settings = Settings(_env_file=None)

        assert settings.min_year == 2023
        assert settings.status_workflow == "approval"
