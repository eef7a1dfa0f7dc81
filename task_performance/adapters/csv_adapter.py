"""CSV adapters for the task lifecycle sources."""

from __future__ import annotations

import csv
import json
import logging
import re

from task_performance.schema import (
    OpenTimeEvent,
    ScreenOpenEvent,
    TaskAction,
    TaskHistoryEntry,
    User,
)
from task_performance.timeutils import parse_instant
from task_performance.writer import write_rows

logger = logging.getLogger(__name__)

_TASKNUM = re.compile(r'tasknum"*\s*[:=]\s*"*([^",}\s]+)')
_SCREEN_OPEN_COLUMNS = ["timestamp", "Email", "Name"]


def _read_rows(file_path: str, required: set[str]) -> list[dict]:
    with open(file_path, newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            logger.warning("%s has no header row", file_path)
            return []
        reader.fieldnames = [name.strip() for name in reader.fieldnames]

        missing = sorted(required - set(reader.fieldnames))
        if missing:
            raise ValueError(f"{file_path}: missing required columns {missing}")
        rows = list(reader)

    logger.info("Parsed %d rows from %s", len(rows), file_path)
    return rows


def _text(row: dict, column: str) -> str | None:
    value = row.get(column)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_minutes(raw: str | None, row_number: int) -> int | None:
    if not raw:
        return None
    try:
        return int(float(raw))
    except (ValueError, OverflowError):
        logger.warning("Row %d: invalid Productive Time %r", row_number, raw)
        return None


def parse_task_actions(file_path: str) -> list[TaskAction]:
    """Parse useravailability.csv into task actions."""

    rows = _read_rows(file_path, {"TaskID", "Login Email"})
    return [
        TaskAction(
            created_on=parse_instant(row.get("Created On")),
            action=_text(row, "Action") or "",
            productive_time=_parse_minutes(_text(row, "Productive Time"), row_number),
            task_id=_text(row, "TaskID"),
            login_email=_text(row, "Login Email"),
            task_open_time=parse_instant(row.get("Task Open Time")),
        )
        for row_number, row in enumerate(rows, start=2)
    ]


def parse_task_history(file_path: str) -> list[TaskHistoryEntry]:
    """Parse taskhistories.csv into history entries."""

    rows = _read_rows(file_path, {"C&L-Task", "MC Status", "Action", "Action TimeStamp"})
    return [
        TaskHistoryEntry(
            task_id=_text(row, "C&L-Task"),
            work_status=_text(row, "Work Status"),
            mc_status=_text(row, "MC Status"),
            action=_text(row, "Action"),
            action_timestamp=parse_instant(row.get("Action TimeStamp")),
            last_modified_by_user=_text(row, "Last Modified By User"),
            task_h=_text(row, "TaskH"),
        )
        for row in rows
    ]


def parse_users(file_path: str) -> list[User]:
    rows = _read_rows(file_path, {"userPrincipalName", "displayName"})
    return [
        User(
            user_principal_name=_text(row, "userPrincipalName"),
            display_name=_text(row, "displayName"),
            id=_text(row, "id"),
        )
        for row in rows
    ]


def parse_custom_dimensions(raw: str | None) -> dict:
    """Decode an exported ``customDimensions`` cell.

    Accepts plain JSON, JSON with CSV-doubled quotes, or anything carrying a
    ``tasknum`` key/value pair. Returns ``{}`` when nothing can be read.
    """

    text = (raw or "").strip()
    if not text:
        return {}

    for candidate in (text, text.replace('""', '"').strip('"')):
        try:
            payload = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(payload, dict):
            return payload

    match = _TASKNUM.search(text)
    if match:
        return {"tasknum": match.group(1)}

    logger.debug("Could not decode customDimensions: %s", text)
    return {}


def parse_open_times(file_path: str) -> list[OpenTimeEvent]:
    """Parse assigntome.csv into task-open events."""

    rows = _read_rows(file_path, {"timestamp [UTC]", "customDimensions"})
    events = []
    for row in rows:
        tasknum = parse_custom_dimensions(row.get("customDimensions")).get("tasknum")
        events.append(
            OpenTimeEvent(
                task_id=str(tasknum).strip() if tasknum else None,
                timestamp=parse_instant(row.get("timestamp [UTC]")),
                message=_text(row, "message"),
                severity_level=_text(row, "severityLevel"),
                item_type=_text(row, "itemType"),
            )
        )
    return events


def parse_screen_opens(file_path: str) -> list[ScreenOpenEvent]:
    """Parse openCambridgeTime.csv into screen-open events."""

    rows = _read_rows(file_path, {"timestamp", "Email"})
    return [
        ScreenOpenEvent(
            email=_text(row, "Email"),
            timestamp=parse_instant(row.get("timestamp")),
            name=_text(row, "Name"),
        )
        for row in rows
    ]


def _unquote(value: str | None) -> str:
    return (value or "").replace('"', "").strip()


def regenerate_screen_opens(users_path: str, query_path: str, output_path: str) -> int:
    """Rebuild openCambridgeTime.csv from a page-view query export.

    Each ``user_Id`` in the query export is looked up in the users table by
    ``id``; rows for unknown or blank ids are skipped. Returns the number of
    rows written.
    """

    users = {}
    for row in _read_rows(users_path, {"id", "userPrincipalName", "displayName"}):
        user_id = _unquote(row.get("id"))
        if not user_id:
            logger.warning("Skipping user row without id: %s", row)
            continue
        users[user_id] = (_unquote(row.get("userPrincipalName")), _unquote(row.get("displayName")))

    results = []
    for row_number, row in enumerate(_read_rows(query_path, {"timestamp", "user_Id"}), start=2):
        user_id = _unquote(row.get("user_Id"))
        if not user_id:
            logger.warning("Row %d: no user_Id", row_number)
            continue
        if user_id not in users:
            logger.warning("Row %d: user %r not found in %s", row_number, user_id, users_path)
            continue
        email, name = users[user_id]
        results.append({"timestamp": row.get("timestamp") or "", "Email": email, "Name": name})

    write_rows(output_path, _SCREEN_OPEN_COLUMNS, results)
    logger.info("Wrote %d screen-open rows to %s", len(results), output_path)
    return len(results)
