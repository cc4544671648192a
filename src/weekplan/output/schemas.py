"""Wire shapes exchanged with the schedule persistence service.

Field names on the wire are camelCase; Python attributes are snake_case and
either form is accepted on input.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WireScheduleRecord(BaseModel):
    """A weekly schedule as returned by the persistence service."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(default=None, alias="_id")
    employee_id: Optional[str] = Field(default=None, alias="employeeId")
    employee_name: Optional[str] = Field(default=None, alias="employeeName")
    team_id: Optional[str] = Field(default=None, alias="teamId")
    year: int
    week_number: int = Field(alias="weekNumber")
    status: str = "draft"
    schedule_data: dict[str, list[str]] = Field(default_factory=dict, alias="scheduleData")
    daily_notes: Optional[dict[str, Optional[str]]] = Field(default=None, alias="dailyNotes")
    daily_dates: dict[str, date] = Field(default_factory=dict, alias="dailyDates")
    total_weekly_minutes: Optional[int] = Field(default=None, alias="totalWeeklyMinutes")
    notes: Optional[str] = None
    updated_by: Optional[str] = Field(default=None, alias="updatedBy")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_validator("id", "employee_id", "team_id", "updated_by", mode="before")
    @classmethod
    def _identifier_to_str(cls, value: Any) -> Any:
        # Populated references arrive as {"_id": ..., "firstName": ...}
        if isinstance(value, dict):
            value = value.get("_id", value.get("id"))
        if value is None or value == "":
            return None
        return str(value)

    @field_validator("daily_dates", mode="before")
    @classmethod
    def _truncate_timestamps(cls, value: Any) -> Any:
        # Some clients send full ISO timestamps; only the date part matters
        if isinstance(value, dict):
            return {
                day: d[:10] if isinstance(d, str) else d
                for day, d in value.items()
            }
        return value


class WireSchedulePayload(BaseModel):
    """A weekly schedule as sent to the persistence service on create/update.

    ``daily_notes`` always carries all seven days so that a cleared note is
    transmitted as "" rather than omitted.
    """

    model_config = ConfigDict(populate_by_name=True)

    employee_id: str = Field(alias="employeeId")
    updated_by: str = Field(alias="updatedBy")
    year: int
    week_number: int = Field(alias="weekNumber")
    status: str
    notes: str = ""
    schedule_data: dict[str, list[str]] = Field(alias="scheduleData")
    daily_notes: dict[str, str] = Field(alias="dailyNotes")
    daily_dates: dict[str, date] = Field(alias="dailyDates")
    total_weekly_minutes: int = Field(alias="totalWeeklyMinutes")


class ScheduleQuery(BaseModel):
    """Filters for listing schedules."""

    model_config = ConfigDict(populate_by_name=True)

    year: int
    week_number: int = Field(alias="weekNumber")
    team_id: Optional[str] = Field(default=None, alias="teamId")
    employee_id: Optional[str] = Field(default=None, alias="employeeId")
