"""Wire payloads and text summaries for weekly schedules."""

from weekplan.output.payload import (
    PayloadAssembler,
    build_query_params,
    from_wire_payload,
    to_wire_payload,
)
from weekplan.output.schemas import (
    ScheduleQuery,
    WireSchedulePayload,
    WireScheduleRecord,
)
from weekplan.output.summary_generator import SummaryGenerator, format_schedule_times

__all__ = [
    "PayloadAssembler",
    "build_query_params",
    "from_wire_payload",
    "to_wire_payload",
    "ScheduleQuery",
    "WireSchedulePayload",
    "WireScheduleRecord",
    "SummaryGenerator",
    "format_schedule_times",
]
