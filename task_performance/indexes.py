"""In-memory lookup indexes over the typed source records."""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from task_performance.schema import (
    UNKNOWN_USER,
    AutoAssignment,
    OpenTimeEvent,
    ScreenOpenEvent,
    TaskAction,
    TaskHistoryEntry,
    User,
    UserIdentity,
)
from task_performance.timeutils import to_utc

logger = logging.getLogger(__name__)


def _group(records: Iterable, key: str, dropped: Counter, name: str) -> dict:
    grouped: dict = defaultdict(list)
    for record in records:
        value = getattr(record, key)
        if not value:
            dropped[name] += 1
            continue
        grouped[value].append(record)
    return {k: tuple(v) for k, v in grouped.items()}


def index_task_actions(actions: Iterable[TaskAction], dropped: Counter) -> dict[str, tuple[TaskAction, ...]]:
    return _group(actions, "task_id", dropped, "task_actions")


def index_task_history(entries: Iterable[TaskHistoryEntry], dropped: Counter) -> dict[str, tuple[TaskHistoryEntry, ...]]:
    return _group(entries, "task_id", dropped, "task_history")


def index_users(users: Iterable[User], dropped: Counter) -> dict[str, Optional[str]]:
    index: dict[str, Optional[str]] = {}
    for user in users:
        if not user.user_principal_name:
            dropped["users"] += 1
            continue
        index[user.user_principal_name] = user.display_name
    return index


def index_auto_assignments(assignments: Iterable[AutoAssignment], dropped: Counter) -> dict[str, AutoAssignment]:
    index: dict[str, AutoAssignment] = {}
    for assignment in assignments:
        if not assignment.task_id:
            dropped["auto_assignments"] += 1
            continue
        index[assignment.task_id] = replace(assignment, timestamp=to_utc(assignment.timestamp))
    return index


def index_open_times(events: Iterable[OpenTimeEvent], dropped: Counter) -> dict[str, Optional[datetime]]:
    index: dict[str, Optional[datetime]] = {}
    for event in events:
        if not event.task_id:
            dropped["open_times"] += 1
            continue
        index[event.task_id] = to_utc(event.timestamp) if event.timestamp else None
    return index


def index_screen_opens(events: Iterable[ScreenOpenEvent], dropped: Counter) -> dict[str, tuple[Optional[datetime], ...]]:
    grouped: dict[str, list] = defaultdict(list)
    for event in events:
        if not event.email:
            dropped["screen_opens"] += 1
            continue
        grouped[event.email].append(to_utc(event.timestamp) if event.timestamp else None)
    return {email: tuple(times) for email, times in grouped.items()}


@dataclass(frozen=True)
class EventIndexes:
    """The six source indexes, read-only once built.

    Build with :meth:`build`; every collection is indexed in a single pass and
    wrapped so later lookups cannot change it. Auto-assignment, open-time and
    screen-open timestamps are stored as aware UTC datetimes.
    """

    task_actions: Mapping[str, tuple[TaskAction, ...]] = field(default_factory=dict)
    task_history: Mapping[str, tuple[TaskHistoryEntry, ...]] = field(default_factory=dict)
    users: Mapping[str, Optional[str]] = field(default_factory=dict)
    auto_assignments: Mapping[str, AutoAssignment] = field(default_factory=dict)
    open_times: Mapping[str, Optional[datetime]] = field(default_factory=dict)
    screen_opens: Mapping[str, tuple[Optional[datetime], ...]] = field(default_factory=dict)
    dropped: Mapping[str, int] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        task_actions: Iterable[TaskAction] = (),
        task_history: Iterable[TaskHistoryEntry] = (),
        users: Iterable[User] = (),
        auto_assignments: Iterable[AutoAssignment] = (),
        open_times: Iterable[OpenTimeEvent] = (),
        screen_opens: Iterable[ScreenOpenEvent] = (),
    ) -> "EventIndexes":
        dropped: Counter = Counter()
        indexes = cls(
            task_actions=MappingProxyType(index_task_actions(task_actions, dropped)),
            task_history=MappingProxyType(index_task_history(task_history, dropped)),
            users=MappingProxyType(index_users(users, dropped)),
            auto_assignments=MappingProxyType(index_auto_assignments(auto_assignments, dropped)),
            open_times=MappingProxyType(index_open_times(open_times, dropped)),
            screen_opens=MappingProxyType(index_screen_opens(screen_opens, dropped)),
            dropped=MappingProxyType(dict(dropped)),
        )
        logger.info(
            "Indexed %d action tasks, %d history tasks, %d users, %d auto assignments, %d open times, %d screen-open users",
            len(indexes.task_actions),
            len(indexes.task_history),
            len(indexes.users),
            len(indexes.auto_assignments),
            len(indexes.open_times),
            len(indexes.screen_opens),
        )
        for name, count in sorted(dropped.items()):
            logger.info("Dropped %d %s rows without a join key", count, name)
        return indexes

    def report_task_ids(self) -> list[str]:
        """Task ids in order of first appearance across the reported sources."""

        ordered: dict[str, None] = {}
        for source in (self.task_actions, self.task_history, self.auto_assignments):
            ordered.update(dict.fromkeys(source))
        return list(ordered)

    def screen_open_times(self, email: Optional[str]) -> tuple[Optional[datetime], ...]:
        if not email:
            return ()
        return self.screen_opens.get(email, ())

    def first_screen_open_time(self, email: Optional[str]) -> Optional[datetime]:
        """Earliest screen-open for a user, independent of insertion order."""

        times = [t for t in self.screen_open_times(email) if t is not None]
        return min(times, default=None)

    def display_name(self, email: Optional[str]) -> Optional[str]:
        if not email:
            return None
        return self.users.get(email)

    def resolve_user(self, email: Optional[str]) -> UserIdentity:
        """Name and email for a user; unmatched emails stand in for the name."""

        if not email:
            return UserIdentity(name=UNKNOWN_USER, email=UNKNOWN_USER)
        name = self.display_name(email)
        return UserIdentity(name=name or email, email=email)
