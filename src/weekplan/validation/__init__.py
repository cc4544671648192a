"""Validation module for verifying schedules before submission."""

from weekplan.validation.validator import (
    ScheduleValidator,
    ValidationIssue,
    ValidationResult,
    find_overlaps,
)

__all__ = [
    "ScheduleValidator",
    "ValidationIssue",
    "ValidationResult",
    "find_overlaps",
]
