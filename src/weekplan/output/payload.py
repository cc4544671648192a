"""Conversion between weekly schedule records and their wire form.

``to_wire_payload`` is the last step before a record is handed to the
persistence service: it validates the record and refuses to build a payload
for anything invalid, so no partially valid schedule is ever sent.
``from_wire_payload`` is its inverse, used when loading a stored schedule
back into an editable record.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from weekplan.domain.calendar_math import check_week_number
from weekplan.domain.errors import IncompletePayload, MalformedRecord
from weekplan.domain.models import (
    DAY_KEYS,
    DayKey,
    WeeklyScheduleRecord,
    parse_slot,
)
from weekplan.domain.policies import WeekRangePolicy
from weekplan.domain.records import compute_dates_for_days
from weekplan.output.schemas import (
    ScheduleQuery,
    WireSchedulePayload,
    WireScheduleRecord,
)
from weekplan.validation.validator import ScheduleValidator

logger = logging.getLogger(__name__)


class PayloadAssembler:
    """Builds and reads the wire representation of weekly schedules.

    Example:
        >>> assembler = PayloadAssembler()
        >>> payload = assembler.to_wire_payload(record, actor_id="U1")
        >>> record = assembler.from_wire_payload(response["data"])
    """

    def __init__(self, validator: Optional[ScheduleValidator] = None):
        self.validator = validator or ScheduleValidator()

    def to_wire_payload(
        self,
        record: WeeklyScheduleRecord,
        actor_id: Optional[str] = None,
    ) -> dict[str, Any]:
        """Build the create/update payload for a record.

        Args:
            record: The record to send.
            actor_id: The acting user, sent as ``updatedBy``. Defaults to
                ``record.last_updated_by``.

        Returns:
            JSON-ready dict with camelCase keys.

        Raises:
            IncompletePayload: If the record fails validation.
        """
        actor_id = actor_id or record.last_updated_by
        result = self.validator.validate(record, actor_id)
        if not result.is_valid:
            logger.info(
                "Rejected schedule payload for employee %s, week %s/%s: %s",
                record.employee_id, record.week_number, record.year,
                ", ".join(sorted(kind.value for kind in result.kinds)),
            )
            raise IncompletePayload(result.errors)
        for warning in result.warnings:
            logger.debug("Schedule warning: %s", warning)

        daily_dates = compute_dates_for_days(record)
        payload = WireSchedulePayload(
            employee_id=record.employee_id,
            updated_by=actor_id,
            year=record.year,
            week_number=record.week_number,
            status=record.status.value,
            notes=record.general_notes,
            schedule_data={
                day.value: [slot.serialize() for slot in record.slots(day)]
                for day in record.days_with_slots
            },
            daily_notes={day.value: record.note(day) for day in DAY_KEYS},
            daily_dates={day.value: d for day, d in daily_dates.items()},
            total_weekly_minutes=record.total_weekly_minutes,
        )
        logger.debug(
            "Assembled schedule payload for employee %s, week %s/%s (%s min)",
            record.employee_id, record.week_number, record.year,
            record.total_weekly_minutes,
        )
        return payload.model_dump(by_alias=True, mode="json")

    def from_wire_payload(self, data: Mapping[str, Any]) -> WeeklyScheduleRecord:
        """Rebuild an editable record from a stored schedule.

        Raises:
            MalformedRecord: If the data does not have the wire shape.
            MalformedSlot: If a slot string cannot be parsed.
            OutOfRange: If the week does not exist.
        """
        try:
            wire = WireScheduleRecord.model_validate(data)
        except PydanticValidationError as exc:
            raise MalformedRecord(f"Invalid schedule record: {exc}") from exc

        slots_by_day = {
            DayKey.parse(day): [parse_slot(slot) for slot in slots]
            for day, slots in wire.schedule_data.items()
        }
        notes_by_day = {
            DayKey.parse(day): note or ""
            for day, note in (wire.daily_notes or {}).items()
        }

        record = WeeklyScheduleRecord(
            employee_id=wire.employee_id,
            year=wire.year,
            week_number=wire.week_number,
            slots_by_day=slots_by_day,
            notes_by_day=notes_by_day,
            general_notes=wire.notes or "",
            status=wire.status,
            last_updated_by=wire.updated_by,
            last_updated_at=wire.updated_at,
            record_id=wire.id,
            employee_name=wire.employee_name,
            team_id=wire.team_id,
        )

        if (
            wire.total_weekly_minutes is not None
            and wire.total_weekly_minutes != record.total_weekly_minutes
        ):
            logger.debug(
                "Stored total %s min differs from slot total %s min for schedule %s",
                wire.total_weekly_minutes, record.total_weekly_minutes, wire.id,
            )
        return record

    def from_wire_records(
        self,
        items: Iterable[Mapping[str, Any]],
    ) -> list[WeeklyScheduleRecord]:
        return [self.from_wire_payload(item) for item in items]


def to_wire_payload(
    record: WeeklyScheduleRecord,
    actor_id: Optional[str] = None,
) -> dict[str, Any]:
    """Build the create/update payload with the configured policies."""
    return PayloadAssembler().to_wire_payload(record, actor_id)


def from_wire_payload(data: Mapping[str, Any]) -> WeeklyScheduleRecord:
    return PayloadAssembler().from_wire_payload(data)


def build_query_params(
    year: int,
    week_number: int,
    team_id: Optional[str] = None,
    employee_id: Optional[str] = None,
    policy: Optional[WeekRangePolicy] = None,
) -> dict[str, Any]:
    """Build the filters for listing the schedules of a week.

    Raises:
        OutOfRange: If the week does not exist or the policy rejects it.
    """
    if policy is not None:
        policy.check(year, week_number)
    else:
        check_week_number(year, week_number)
    query = ScheduleQuery(
        year=year,
        week_number=week_number,
        team_id=team_id,
        employee_id=employee_id,
    )
    return query.model_dump(by_alias=True, exclude_none=True)
