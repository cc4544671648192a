"""Validation of weekly schedules before they are submitted.

This module is the single place where submission rules are checked. Hard
failures are collected as errors and block the external write; overlapping
or repeated slots within a day are only reported as warnings.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional

from weekplan.domain.errors import (
    ErrorKind,
    IncompletePayload,
    OutOfRange,
    ScheduleError,
)
from weekplan.domain.models import (
    DAY_KEYS,
    DayKey,
    TimeSlot,
    WeeklyScheduleRecord,
    coerce_slot,
)
from weekplan.domain.policies import (
    StatusPolicy,
    WeekRangePolicy,
    status_policy_for,
)


@dataclass
class ValidationIssue:
    """A single validation failure."""

    error_type: ErrorKind
    message: str
    day: Optional[DayKey] = None
    slot_position: Optional[int] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.day is not None:
            parts.append(f"{self.day.value}:")
        parts.append(self.message)
        if self.slot_position is not None:
            parts.append(f"(slot {self.slot_position})")
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validating a schedule."""

    is_valid: bool = True
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: ValidationIssue) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)

    @property
    def kinds(self) -> set[ErrorKind]:
        return {error.error_type for error in self.errors}

    def raise_if_invalid(self) -> None:
        """Raise ``IncompletePayload`` aggregating every error."""
        if not self.is_valid:
            raise IncompletePayload(self.errors)


def find_overlaps(slots: Sequence[TimeSlot]) -> list[tuple[int, int]]:
    """Index pairs (i < j) of slots whose intervals intersect."""
    pairs = []
    for i, slot in enumerate(slots):
        for j in range(i + 1, len(slots)):
            if slot.overlaps(slots[j]):
                pairs.append((i, j))
    return pairs


class ScheduleValidator:
    """Validates weekly schedules against the submission rules.

    Without an explicit status policy, the workflow configured in the
    settings applies.

    Example:
        >>> validator = ScheduleValidator()
        >>> result = validator.validate(record, actor_id="U1")
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(
        self,
        week_policy: Optional[WeekRangePolicy] = None,
        status_policy: Optional[StatusPolicy] = None,
    ):
        self.week_policy = week_policy
        self.status_policy = status_policy or status_policy_for()

    def validate(
        self,
        record: WeeklyScheduleRecord,
        actor_id: Optional[str] = None,
    ) -> ValidationResult:
        """Validate a record before it is submitted.

        Args:
            record: The record to validate.
            actor_id: The acting user. Defaults to ``record.last_updated_by``.

        Returns:
            ValidationResult with is_valid flag, errors and warnings.
        """
        result = ValidationResult()

        if not record.employee_id:
            result.add_error(
                ValidationIssue(
                    error_type=ErrorKind.MISSING_EMPLOYEE,
                    message="An employee is required",
                )
            )

        if not (actor_id or record.last_updated_by):
            result.add_error(
                ValidationIssue(
                    error_type=ErrorKind.MISSING_ACTOR,
                    message="The acting user is required",
                )
            )

        if self.week_policy is not None:
            try:
                self.week_policy.check(record.year, record.week_number)
            except OutOfRange as exc:
                result.add_error(
                    ValidationIssue(
                        error_type=ErrorKind.OUT_OF_RANGE,
                        message=exc.message,
                        details={"year": record.year, "week_number": record.week_number},
                    )
                )

        if record.status not in self.status_policy.allowed_statuses():
            result.add_error(
                ValidationIssue(
                    error_type=ErrorKind.INVALID_STATUS_TRANSITION,
                    message=f"Status {record.status.value} is not used by this workflow",
                )
            )

        if not record.has_slots:
            result.add_error(
                ValidationIssue(
                    error_type=ErrorKind.EMPTY_SCHEDULE,
                    message="The schedule must contain at least one time slot",
                )
            )

        for day in record.days_with_slots:
            self._check_day_overlaps(day, record.slots(day), result)

        return result

    def _check_day_overlaps(
        self,
        day: DayKey,
        slots: Sequence[TimeSlot],
        result: ValidationResult,
    ) -> None:
        for i, j in find_overlaps(slots):
            if slots[i] == slots[j]:
                result.add_warning(
                    f"{day.value}: slot {j + 1} repeats slot {i + 1} ({slots[i]})"
                )
            else:
                result.add_warning(
                    f"{day.value}: slot {i + 1} ({slots[i]}) overlaps "
                    f"slot {j + 1} ({slots[j]})"
                )

    def validate_schedule_data(self, schedule_data: Mapping) -> ValidationResult:
        """Validate raw draft slots, as held by an editing form.

        Each day maps to a list of slots given as "HH:MM-HH:MM" strings,
        ``[start, end]`` pairs or ``{"start", "end"}`` mappings. Every bad slot
        is reported with its day and 1-based position.
        """
        result = ValidationResult()
        valid_slots = 0
        parsed: dict[DayKey, list[TimeSlot]] = {}

        for raw_day, day_slots in schedule_data.items():
            try:
                day = DayKey.parse(raw_day)
            except ScheduleError as exc:
                result.add_error(
                    ValidationIssue(error_type=exc.kind, message=exc.message)
                )
                continue

            if isinstance(day_slots, (str, bytes)) or not isinstance(day_slots, Sequence):
                result.add_error(
                    ValidationIssue(
                        error_type=ErrorKind.MALFORMED_RECORD,
                        message="Slots must be given as a list",
                        day=day,
                    )
                )
                continue

            for position, raw_slot in enumerate(day_slots, start=1):
                try:
                    slot = coerce_slot(raw_slot)
                except ScheduleError as exc:
                    result.add_error(
                        ValidationIssue(
                            error_type=exc.kind,
                            message=exc.message,
                            day=day,
                            slot_position=position,
                            details={"slot": raw_slot},
                        )
                    )
                    continue
                parsed.setdefault(day, []).append(slot)
                valid_slots += 1

        if valid_slots == 0:
            result.add_error(
                ValidationIssue(
                    error_type=ErrorKind.EMPTY_SCHEDULE,
                    message="The schedule must contain at least one valid time slot",
                )
            )

        for day in DAY_KEYS:
            if day in parsed:
                self._check_day_overlaps(day, parsed[day], result)

        return result
