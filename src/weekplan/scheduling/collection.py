"""In-memory working set of weekly schedule records.

A collection backs one view (a week, a team, an employee) and keeps it in
step with the persistence collaborator without reloading: records returned by
a successful create/update go through ``replace`` and deletions through
``remove``.

The collection is not thread-safe; each logical flow owns its own instance.
Its conflict check only sees the local snapshot, so the persistence
collaborator remains the authority on the one-record-per-employee-per-week
rule (see ``weekplan.domain.errors.error_from_remote``).
"""

import logging
from typing import Iterable, Iterator, Optional, Union

from weekplan.domain.errors import DuplicateSchedule, RecordNotFound
from weekplan.domain.models import ScheduleStatus, WeeklyScheduleRecord

logger = logging.getLogger(__name__)

NaturalKey = tuple[Optional[str], int, int]


class ScheduleCollection:
    """Index of records by natural key (employee_id, year, week_number).

    Example:
        >>> collection = ScheduleCollection(records)
        >>> collection.assert_no_conflict("E1", 2025, 10)
        >>> collection.replace(created_record)
    """

    def __init__(self, records: Iterable[WeeklyScheduleRecord] = ()):
        self._records: dict[NaturalKey, WeeklyScheduleRecord] = {}
        for record in records:
            self.replace(record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[WeeklyScheduleRecord]:
        return iter(self.records)

    def __contains__(self, record: WeeklyScheduleRecord) -> bool:
        return self._records.get(record.natural_key) == record

    @property
    def records(self) -> list[WeeklyScheduleRecord]:
        """All records, ordered by week then employee."""
        return sorted(
            self._records.values(),
            key=lambda r: (r.year, r.week_number, r.employee_id or ""),
        )

    def find_by_employee_and_week(
        self,
        employee_id: str,
        year: int,
        week_number: int,
    ) -> Optional[WeeklyScheduleRecord]:
        return self._records.get((employee_id, year, week_number))

    def get(self, record_id: str) -> WeeklyScheduleRecord:
        """Look up a record by its persistence identifier.

        Raises:
            RecordNotFound: If no record has that identifier.
        """
        for record in self._records.values():
            if record.record_id == record_id:
                return record
        raise RecordNotFound(f"No schedule with id {record_id}")

    def assert_no_conflict(
        self,
        employee_id: str,
        year: int,
        week_number: int,
    ) -> None:
        """Fail fast before creating a record whose key is already taken.

        Called before every create, never before updating the same record.

        Raises:
            DuplicateSchedule: If a record exists for the key.
        """
        if (employee_id, year, week_number) in self._records:
            logger.warning(
                "Schedule already exists for employee %s, week %s/%s",
                employee_id, week_number, year,
            )
            raise DuplicateSchedule(employee_id, year, week_number)

    def replace(self, record: WeeklyScheduleRecord) -> None:
        """Insert or update a record by natural key.

        When the record carries an identifier already held under another key
        (its employee or week was edited), the stale entry is dropped.
        """
        if record.record_id is not None:
            stale = [
                key for key, existing in self._records.items()
                if existing.record_id == record.record_id and key != record.natural_key
            ]
            for key in stale:
                del self._records[key]

        action = "Updated" if record.natural_key in self._records else "Added"
        self._records[record.natural_key] = record
        logger.debug(
            "%s schedule for employee %s, week %s/%s",
            action, record.employee_id, record.week_number, record.year,
        )

    def remove(self, record_id: str) -> WeeklyScheduleRecord:
        """Remove a record by its persistence identifier.

        Returns:
            The removed record.

        Raises:
            RecordNotFound: If no record has that identifier.
        """
        record = self.get(record_id)
        del self._records[record.natural_key]
        logger.debug("Removed schedule %s", record_id)
        return record

    def for_employee(self, employee_id: str) -> list[WeeklyScheduleRecord]:
        return [r for r in self.records if r.employee_id == employee_id]

    def for_team(self, team_id: str) -> list[WeeklyScheduleRecord]:
        return [r for r in self.records if r.team_id == team_id]

    def for_week(
        self,
        year: int,
        week_number: int,
        status: Optional[Union[ScheduleStatus, str]] = None,
    ) -> list[WeeklyScheduleRecord]:
        """Records of one ISO week, optionally restricted to a status."""
        wanted = ScheduleStatus.parse(status) if status is not None else None
        return [
            r for r in self.records
            if r.year == year
            and r.week_number == week_number
            and (wanted is None or r.status == wanted)
        ]
