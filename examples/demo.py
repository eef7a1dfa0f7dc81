"""Demo script for task-performance using in-memory sample records."""

import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from task_performance.auto_open import build_auto_open_analysis
from task_performance.indexes import EventIndexes
from task_performance.report import build_report
from task_performance.schema import AutoAssignment, ScreenOpenEvent, TaskAction, TaskHistoryEntry, User
from task_performance.summary import summarize_report


def _utc(text: str) -> datetime:
    return datetime.fromisoformat(text).replace(tzinfo=timezone.utc)


def main() -> None:
    indexes = EventIndexes.build(
        task_actions=[
            TaskAction(_utc("2025-08-25T08:51:00"), "Task Opened", None, "TASK-913902", "b@hsbc.com"),
            TaskAction(_utc("2025-08-25T08:52:00"), "Maker Completed", 774, "TASK-931132", "c@hsbc.com"),
        ],
        task_history=[
            TaskHistoryEntry("TASK-913902", "RR", "PMA", "IN", _utc("2025-08-25T08:00:00"), "User A"),
            TaskHistoryEntry("TASK-913902", "RR", "PME", "AS", _utc("2025-08-25T08:45:00"), "User A"),
            TaskHistoryEntry("TASK-913902", "RR", "PCA", "SC", _utc("2025-08-25T13:20:00"), "User B"),
        ],
        users=[
            User("a@hsbc.com", "User A", "1"),
            User("b@hsbc.com", "User B", "2"),
            User("c@hsbc.com", "User C", "3"),
        ],
        auto_assignments=[
            AutoAssignment("TASK-16515", "abc1.goo@onextrememail.hsbc.com", _utc("2025-08-25T13:20:00")),
        ],
        screen_opens=[
            ScreenOpenEvent("abc1.goo@onextrememail.hsbc.com", _utc("2025-08-25T13:47:00")),
        ],
    )

    report = build_report(indexes)
    for record in report:
        print(record.as_row())
    print("Summary:", summarize_report(report))
    for record in build_auto_open_analysis(indexes):
        print(record.as_row())


if __name__ == "__main__":
    main()
