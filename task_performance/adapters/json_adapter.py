"""JSON adapter for auto-assignment log exports."""

from __future__ import annotations

import json
import logging
import re

from task_performance.schema import AutoAssignment
from task_performance.timeutils import extract_embedded_timestamp, parse_instant

logger = logging.getLogger(__name__)

_TASK_ID = re.compile(r"TASK-\d+")
_EMAIL = re.compile(r"email=([^,]+)")


def extract_auto_assignment(item: dict) -> AutoAssignment | None:
    """Build an auto assignment from one log item, or None if it lacks a task id or time."""

    text_payload = item.get("textPayload") if isinstance(item, dict) else None
    if not text_payload:
        return None

    task_match = _TASK_ID.search(text_payload)
    if not task_match:
        return None

    email_match = _EMAIL.search(text_payload)
    email = email_match.group(1).strip() if email_match else None

    if item.get("timestamp"):
        timestamp = parse_instant(str(item["timestamp"]))
    else:
        timestamp = extract_embedded_timestamp(text_payload)
    if timestamp is None:
        return None

    return AutoAssignment(task_id=task_match.group(0), email=email or None, timestamp=timestamp)


def parse_auto_assignments(file_path: str) -> list[AutoAssignment]:
    """Parse a gcp.json log export into auto assignments."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of log entries")

    assignments = []
    for item in payload:
        assignment = extract_auto_assignment(item)
        if assignment is not None:
            assignments.append(assignment)

    logger.info("Extracted %d auto assignments from %d log entries in %s", len(assignments), len(payload), file_path)
    return assignments
