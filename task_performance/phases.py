"""Phase timestamp and assignment-mode resolution per task."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from task_performance.indexes import EventIndexes
from task_performance.schema import (
    MODE_AUTO,
    MODE_MANUAL,
    MODE_UNKNOWN,
    TaskHistoryEntry,
    UserIdentity,
)

CREATED = ("PMA", "IN")
ASSIGNED = ("PME", "AS")
MAKER_COMPLETE = ("PCA", "SC")


def first_history_match(entries: Iterable[TaskHistoryEntry], status: str, action: str) -> Optional[TaskHistoryEntry]:
    """First entry with the given MC status and action code.

    Entries are scanned in source ingestion order; a later row with an
    earlier timestamp never wins.
    """

    for entry in entries:
        if entry.mc_status == status and entry.action == action:
            return entry
    return None


class PhaseResolver:
    """Resolve mode, phase timestamps and user for a task id.

    Every call reads straight from the indexes; nothing is cached, so
    repeated calls for one task always agree with the indexes.
    """

    def __init__(self, indexes: EventIndexes):
        self.indexes = indexes

    def mode(self, task_id: str) -> str:
        if task_id in self.indexes.auto_assignments:
            return MODE_AUTO
        if task_id in self.indexes.task_actions:
            return MODE_MANUAL
        return MODE_UNKNOWN

    def _history_time(self, task_id: str, phase: tuple[str, str]) -> Optional[datetime]:
        entries = self.indexes.task_history.get(task_id, ())
        match = first_history_match(entries, *phase)
        return match.action_timestamp if match else None

    def created_time(self, task_id: str) -> Optional[datetime]:
        return self._history_time(task_id, CREATED)

    def assigned_time(self, task_id: str) -> Optional[datetime]:
        if self.mode(task_id) == MODE_AUTO:
            return self.indexes.auto_assignments[task_id].timestamp
        return self._history_time(task_id, ASSIGNED)

    def maker_complete_time(self, task_id: str) -> Optional[datetime]:
        return self._history_time(task_id, MAKER_COMPLETE)

    def open_time(self, task_id: str) -> Optional[datetime]:
        return self.indexes.open_times.get(task_id)

    def user(self, task_id: str) -> UserIdentity:
        """User from the first manual action, else from the auto assignment."""

        actions = self.indexes.task_actions.get(task_id, ())
        email = actions[0].login_email if actions else None
        if not email:
            assignment = self.indexes.auto_assignments.get(task_id)
            email = assignment.email if assignment else None
        return self.indexes.resolve_user(email)
