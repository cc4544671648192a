"""Error taxonomy for the scheduling engine.

Every failure raised by the engine is a ``ScheduleError`` carrying a stable
``ErrorKind``, so calling layers can classify it (and render a localized
message) without matching on exception text.

The submission checks (``empty_schedule``, ``missing_employee``, ...) have no
exception class of their own: they are reported as issue kinds aggregated in
``IncompletePayload``.
"""

from enum import Enum
from typing import Iterable, Optional


class ErrorKind(Enum):
    """Stable classification of engine failures."""

    OUT_OF_RANGE = "out_of_range"
    MALFORMED_SLOT = "malformed_slot"
    EMPTY_SLOT = "empty_slot"
    EMPTY_SCHEDULE = "empty_schedule"
    MISSING_EMPLOYEE = "missing_employee"
    MISSING_ACTOR = "missing_actor"
    DUPLICATE_SCHEDULE = "duplicate_schedule"
    INCOMPLETE_PAYLOAD = "incomplete_payload"
    MALFORMED_RECORD = "malformed_record"
    INVALID_STATUS_TRANSITION = "invalid_status_transition"
    RECORD_NOT_FOUND = "record_not_found"
    REMOTE_FAILURE = "remote_failure"


class ScheduleError(Exception):
    """Base class for all engine errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class OutOfRange(ScheduleError, ValueError):
    """A year, month or week number outside the supported bounds."""

    kind = ErrorKind.OUT_OF_RANGE


class MalformedSlot(ScheduleError, ValueError):
    """A time string that fails to parse or breaks the slot rules."""

    kind = ErrorKind.MALFORMED_SLOT


class EmptySlot(ScheduleError, ValueError):
    """A slot list entry with no usable content."""

    kind = ErrorKind.EMPTY_SLOT


class MissingActor(ScheduleError):
    kind = ErrorKind.MISSING_ACTOR


class MalformedRecord(ScheduleError, ValueError):
    """Inbound wire data that does not have the expected shape."""

    kind = ErrorKind.MALFORMED_RECORD


class InvalidStatusTransition(ScheduleError):
    kind = ErrorKind.INVALID_STATUS_TRANSITION


class RecordNotFound(ScheduleError, LookupError):
    kind = ErrorKind.RECORD_NOT_FOUND


class RemoteFailure(ScheduleError):
    """A persistence collaborator failure with no more specific kind."""

    kind = ErrorKind.REMOTE_FAILURE


class DuplicateSchedule(ScheduleError):
    """A record already exists for the (employee, year, week) natural key.

    Raised locally by ``ScheduleCollection.assert_no_conflict`` and mapped from
    the persistence collaborator's conflict response by ``error_from_remote``.
    """

    kind = ErrorKind.DUPLICATE_SCHEDULE

    def __init__(
        self,
        employee_id: Optional[str],
        year: Optional[int],
        week_number: Optional[int],
        message: Optional[str] = None,
    ):
        self.employee_id = employee_id
        self.year = year
        self.week_number = week_number
        super().__init__(
            message
            or f"A schedule already exists for employee {employee_id} "
            f"in week {week_number} of {year}"
        )


class IncompletePayload(ScheduleError):
    """Aggregated validation failure raised before any external call.

    Attributes:
        issues: The validation issues that blocked the payload.
    """

    kind = ErrorKind.INCOMPLETE_PAYLOAD

    def __init__(self, issues: Iterable = (), message: Optional[str] = None):
        self.issues = list(issues)
        if message is None:
            if self.issues:
                message = "; ".join(issue.message for issue in self.issues)
            else:
                message = "Schedule payload is incomplete"
        super().__init__(message)

    @property
    def kinds(self) -> set[ErrorKind]:
        """Kinds of every aggregated issue."""
        return {issue.error_type for issue in self.issues}

    def has(self, kind: ErrorKind) -> bool:
        return kind in self.kinds


def error_from_remote(
    status_code: int,
    message: str = "",
    key: Optional[tuple[str, int, int]] = None,
) -> ScheduleError:
    """Map a persistence collaborator's failure response to an engine error.

    A conflict (HTTP 409) becomes the same ``DuplicateSchedule`` the local
    conflict check raises, so callers handle one error kind whichever side
    detected the collision.

    Args:
        status_code: HTTP status returned by the collaborator.
        message: Error detail returned by the collaborator.
        key: The (employee_id, year, week_number) that was being written.
    """
    if status_code == 409:
        employee_id, year, week_number = key if key else (None, None, None)
        return DuplicateSchedule(employee_id, year, week_number, message or None)
    if status_code in (400, 422):
        return IncompletePayload(message=message or "Payload rejected by server")
    if status_code == 404:
        return RecordNotFound(message or "Schedule not found")
    return RemoteFailure(message or f"Unexpected server response ({status_code})")
