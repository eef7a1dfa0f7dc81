from task_performance.schema import AutoOpenRecord, ReportRecord
from task_performance.summary import summarize_auto_open, summarize_report


def record(task, mode, productive, waiting):
    return ReportRecord(task, "n", "e", mode, "", "", "", "", productive_time=productive, waiting_time=waiting)


def test_summarize_report():
    summary = summarize_report(
        [
            record("t1", "Auto", 10, None),
            record("t2", "Manual", 20, 5),
            record("t3", "Manual", None, 15),
        ]
    )
    assert summary["total_tasks"] == 3
    assert summary["mode_counts"] == {"Auto": 1, "Manual": 2, "Unknown": 0}
    assert summary["productive_time"]["count"] == 2
    assert summary["productive_time"]["mean"] == 15.0
    assert summary["waiting_time"]["median"] == 10.0


def test_summarize_empty():
    summary = summarize_report([])
    assert summary["total_tasks"] == 0
    assert summary["productive_time"] == {"count": 0, "mean": 0.0, "median": 0.0, "p90": 0.0}
    assert summarize_auto_open([])["median_time_to_open"] == 0.0


def test_summarize_auto_open():
    rows = [
        AutoOpenRecord("t1", "n", "e", "", "", 30, 2, ""),
        AutoOpenRecord("t2", "n", "e", "", "", None, 2, ""),
    ]
    summary = summarize_auto_open(rows)
    assert summary["total_auto_tasks"] == 2
    assert summary["opened_after_assignment"] == 1
    assert summary["mean_time_to_open"] == 30.0
