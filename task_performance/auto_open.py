"""Time-to-open analysis for auto-assigned tasks."""

from __future__ import annotations

import logging

from task_performance.indexes import EventIndexes
from task_performance.schema import AutoOpenRecord
from task_performance.timeutils import elapsed_minutes, format_instant

logger = logging.getLogger(__name__)

AUTO_OPEN_COLUMNS = [
    "taskId",
    "userName",
    "userEmail",
    "assignedTime",
    "firstScreenOpenTime",
    "timeToOpenMinutes",
    "screenOpenCount",
    "assignmentDate",
]


def build_auto_open_analysis(indexes: EventIndexes) -> list[AutoOpenRecord]:
    """One row per auto-assigned task against its user's earliest screen open.

    Users with several auto-assigned tasks share the same earliest-open
    reference point on every row.
    """

    records = []
    for task_id, assignment in indexes.auto_assignments.items():
        user = indexes.resolve_user(assignment.email)
        first_open = indexes.first_screen_open_time(assignment.email)

        time_to_open = None
        if first_open is not None and first_open > assignment.timestamp:
            time_to_open = elapsed_minutes(assignment.timestamp, first_open)

        assigned_text = format_instant(assignment.timestamp)
        records.append(
            AutoOpenRecord(
                task_id=task_id,
                user_name=user.name,
                user_email=user.email,
                assigned_time=assigned_text,
                first_screen_open_time=format_instant(first_open),
                time_to_open_minutes=time_to_open,
                screen_open_count=len(indexes.screen_open_times(assignment.email)),
                assignment_date=assigned_text.split("T", maxsplit=1)[0],
            )
        )

    logger.info("Analyzed %d auto-assigned tasks", len(records))
    return records
