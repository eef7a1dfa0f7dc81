"""Core data schema for task lifecycle records."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

MODE_AUTO = "Auto"
MODE_MANUAL = "Manual"
MODE_UNKNOWN = "Unknown"

UNKNOWN_USER = "Unknown"


@dataclass(frozen=True)
class TaskAction:
    """Manual user action on a task (useravailability)."""

    created_on: Optional[datetime]
    action: str
    productive_time: Optional[int]
    task_id: Optional[str]
    login_email: Optional[str]
    task_open_time: Optional[datetime] = None


@dataclass(frozen=True)
class TaskHistoryEntry:
    """Status-history transition of a task (taskhistories)."""

    task_id: Optional[str]
    work_status: Optional[str]
    mc_status: Optional[str]
    action: Optional[str]
    action_timestamp: Optional[datetime]
    last_modified_by_user: Optional[str] = None
    task_h: Optional[str] = None


@dataclass(frozen=True)
class AutoAssignment:
    """Machine auto-assignment extracted from a log line."""

    task_id: str
    email: Optional[str]
    timestamp: datetime


@dataclass(frozen=True)
class User:
    user_principal_name: Optional[str]
    display_name: Optional[str]
    id: Optional[str] = None


@dataclass(frozen=True)
class OpenTimeEvent:
    """Task-open telemetry keyed by the ``tasknum`` custom dimension."""

    task_id: Optional[str]
    timestamp: Optional[datetime]
    message: Optional[str] = None
    severity_level: Optional[str] = None
    item_type: Optional[str] = None


@dataclass(frozen=True)
class ScreenOpenEvent:
    email: Optional[str]
    timestamp: Optional[datetime]
    name: Optional[str] = None


@dataclass(frozen=True)
class UserIdentity:
    """Resolved user, carried as separate name and email fields."""

    name: str
    email: str


@dataclass
class ReportRecord:
    """One row of the task performance report.

    Phase timestamps are held as their canonical text form; an empty string
    means the phase was never observed.
    """

    task: str
    user_name: str
    user_email: str
    mode: str
    created_time: str
    assigned_time: str
    maker_complete_time: str
    open_time: str
    productive_time: Optional[int] = None
    waiting_time: Optional[int] = None

    def as_row(self) -> dict:
        return {
            "task": self.task,
            "userName": self.user_name,
            "userEmail": self.user_email,
            "productiveTime": self.productive_time,
            "waitingTime": self.waiting_time,
            "mode": self.mode,
            "createdTime": self.created_time,
            "assignedTime": self.assigned_time,
            "makerCompleteTime": self.maker_complete_time,
            "openTime": self.open_time,
        }


@dataclass
class AutoOpenRecord:
    """One row of the auto-assigned task open analysis."""

    task_id: str
    user_name: str
    user_email: str
    assigned_time: str
    first_screen_open_time: str
    time_to_open_minutes: Optional[int]
    screen_open_count: int
    assignment_date: str

    def as_row(self) -> dict:
        return {
            "taskId": self.task_id,
            "userName": self.user_name,
            "userEmail": self.user_email,
            "assignedTime": self.assigned_time,
            "firstScreenOpenTime": self.first_screen_open_time,
            "timeToOpenMinutes": self.time_to_open_minutes,
            "screenOpenCount": self.screen_open_count,
            "assignmentDate": self.assignment_date,
        }
