from datetime import datetime, timezone

from task_performance.indexes import EventIndexes
from task_performance.phases import PhaseResolver
from task_performance.report import REPORT_COLUMNS, build_report
from task_performance.schema import AutoAssignment, OpenTimeEvent, ScreenOpenEvent, TaskAction, TaskHistoryEntry, User
from task_performance.timeutils import elapsed_minutes


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


T1 = utc(2025, 8, 25, 8, 0)
T2 = utc(2025, 8, 25, 8, 45)
T3 = utc(2025, 8, 25, 13, 20)


def history(task_id, status, action, ts):
    return TaskHistoryEntry(task_id, "RR", status, action, ts)


def by_task(records):
    return {record.task: record for record in records}


def test_manual_task_full_lifecycle():
    indexes = EventIndexes.build(
        task_actions=[TaskAction(None, "Task Opened", None, "TASK-3", "b@x.com")],
        task_history=[
            history("TASK-3", "PMA", "IN", T1),
            history("TASK-3", "PME", "AS", T2),
            history("TASK-3", "PCA", "SC", T3),
        ],
        users=[User("b@x.com", "User B")],
    )
    record = by_task(build_report(indexes))["TASK-3"]
    assert record.mode == "Manual"
    assert record.created_time == "2025-08-25T08:00:00.000Z"
    assert record.assigned_time == "2025-08-25T08:45:00.000Z"
    assert record.maker_complete_time == "2025-08-25T13:20:00.000Z"
    assert record.open_time == ""
    assert record.waiting_time == 45
    assert record.productive_time == 275
    assert (record.user_name, record.user_email) == ("User B", "b@x.com")


def test_auto_task_without_history():
    indexes = EventIndexes.build(auto_assignments=[AutoAssignment("TASK-2", "svc@x.com", T2)])
    record = by_task(build_report(indexes))["TASK-2"]
    assert record.mode == "Auto"
    assert record.assigned_time == "2025-08-25T08:45:00.000Z"
    assert (record.user_name, record.user_email) == ("svc@x.com", "svc@x.com")
    assert record.created_time == ""
    assert record.waiting_time is None
    assert record.productive_time is None


def test_missing_created_time_means_no_waiting_time():
    indexes = EventIndexes.build(
        task_actions=[TaskAction(None, "Task Opened", None, "TASK-1", "b@x.com")],
        task_history=[history("TASK-1", "PME", "AS", T2), history("TASK-1", "PCA", "SC", T3)],
    )
    record = by_task(build_report(indexes))["TASK-1"]
    assert record.created_time == ""
    assert record.waiting_time is None
    assert record.productive_time == 275


def test_unknown_mode_task_from_history_only():
    indexes = EventIndexes.build(task_history=[history("TASK-5", "PMA", "IN", T1)])
    record = by_task(build_report(indexes))["TASK-5"]
    assert record.mode == "Unknown"
    assert (record.user_name, record.user_email) == ("Unknown", "Unknown")


def test_open_time_and_screen_only_tasks_are_not_reported():
    indexes = EventIndexes.build(
        task_actions=[TaskAction(None, "Task Opened", None, "TASK-1", "b@x.com")],
        open_times=[OpenTimeEvent("TASK-1", T3), OpenTimeEvent("TASK-99", T3)],
        screen_opens=[ScreenOpenEvent("b@x.com", T3)],
    )
    records = by_task(build_report(indexes))
    assert list(records) == ["TASK-1"]
    assert records["TASK-1"].open_time == "2025-08-25T13:20:00.000Z"


def test_report_order_follows_first_appearance():
    indexes = EventIndexes.build(
        task_actions=[TaskAction(None, "x", None, "TASK-B", "b@x.com")],
        task_history=[history("TASK-A", "PMA", "IN", T1)],
        auto_assignments=[AutoAssignment("TASK-C", None, T1), AutoAssignment("TASK-B", None, T1)],
    )
    assert [r.task for r in build_report(indexes)] == ["TASK-B", "TASK-A", "TASK-C"]


def test_productive_time_reads_back_emitted_text():
    # Sub-millisecond parts are cut from the emitted columns; productive time
    # follows the columns while waiting time follows the resolved instants.
    created = utc(2025, 8, 25, 9, 55, 0, 900)
    assigned = utc(2025, 8, 25, 10, 0, 0, 500)
    completed = utc(2025, 8, 25, 10, 5, 0, 100)
    indexes = EventIndexes.build(
        task_actions=[TaskAction(None, "x", None, "TASK-7", "b@x.com")],
        task_history=[
            history("TASK-7", "PMA", "IN", created),
            history("TASK-7", "PME", "AS", assigned),
            history("TASK-7", "PCA", "SC", completed),
        ],
    )
    record = by_task(build_report(indexes))["TASK-7"]

    assert elapsed_minutes(assigned, completed) == 4
    assert record.productive_time == 5
    assert record.waiting_time == 4
    resolver = PhaseResolver(indexes)
    assert record.waiting_time == elapsed_minutes(resolver.created_time("TASK-7"), resolver.assigned_time("TASK-7"))


def test_as_row_uses_report_columns():
    indexes = EventIndexes.build(auto_assignments=[AutoAssignment("TASK-2", "svc@x.com", T2)])
    row = build_report(indexes)[0].as_row()
    assert list(row) == REPORT_COLUMNS
