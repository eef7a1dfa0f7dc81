"""Task performance report assembly."""

from __future__ import annotations

import logging

from task_performance.indexes import EventIndexes
from task_performance.phases import PhaseResolver
from task_performance.schema import ReportRecord
from task_performance.timeutils import elapsed_minutes, format_instant, parse_instant

logger = logging.getLogger(__name__)

REPORT_COLUMNS = [
    "task",
    "userName",
    "userEmail",
    "productiveTime",
    "waitingTime",
    "mode",
    "createdTime",
    "assignedTime",
    "makerCompleteTime",
    "openTime",
]


def _draft_record(resolver: PhaseResolver, task_id: str) -> ReportRecord:
    user = resolver.user(task_id)
    return ReportRecord(
        task=task_id,
        user_name=user.name,
        user_email=user.email,
        mode=resolver.mode(task_id),
        created_time=format_instant(resolver.created_time(task_id)),
        assigned_time=format_instant(resolver.assigned_time(task_id)),
        maker_complete_time=format_instant(resolver.maker_complete_time(task_id)),
        open_time=format_instant(resolver.open_time(task_id)),
    )


def productive_time(record: ReportRecord) -> int | None:
    """Minutes from assignment to maker completion, read back from the row text.

    Uses the emitted column values rather than the resolved instants so the
    figure always matches the assignedTime/makerCompleteTime columns.
    """

    return elapsed_minutes(parse_instant(record.assigned_time), parse_instant(record.maker_complete_time))


def waiting_time(resolver: PhaseResolver, task_id: str) -> int | None:
    """Minutes from creation to assignment, recomputed from the indexes."""

    return elapsed_minutes(resolver.created_time(task_id), resolver.assigned_time(task_id))


def build_report(indexes: EventIndexes) -> list[ReportRecord]:
    """Build one report row per task id seen in actions, history or auto assignments."""

    resolver = PhaseResolver(indexes)
    records = [_draft_record(resolver, task_id) for task_id in indexes.report_task_ids()]

    # Derived metrics only after every draft row exists.
    for record in records:
        record.productive_time = productive_time(record)
        record.waiting_time = waiting_time(resolver, record.task)

    logger.info("Built %d report records", len(records))
    return records
