"""Aggregate figures over the generated reports."""

from __future__ import annotations

from collections import Counter

import numpy as np

from task_performance.schema import MODE_AUTO, MODE_MANUAL, MODE_UNKNOWN, AutoOpenRecord, ReportRecord


def _minutes_stats(values: list) -> dict:
    present = np.asarray([v for v in values if v is not None], dtype=float)
    if present.size == 0:
        return {"count": 0, "mean": 0.0, "median": 0.0, "p90": 0.0}
    return {
        "count": int(present.size),
        "mean": float(np.mean(present)),
        "median": float(np.median(present)),
        "p90": float(np.percentile(present, 90)),
    }


def summarize_report(records: list[ReportRecord]) -> dict:
    """Task counts per mode and productive/waiting time statistics."""

    modes = Counter(record.mode for record in records)
    return {
        "total_tasks": len(records),
        "mode_counts": {mode: modes.get(mode, 0) for mode in (MODE_AUTO, MODE_MANUAL, MODE_UNKNOWN)},
        "productive_time": _minutes_stats([r.productive_time for r in records]),
        "waiting_time": _minutes_stats([r.waiting_time for r in records]),
    }


def summarize_auto_open(records: list[AutoOpenRecord]) -> dict:
    stats = _minutes_stats([r.time_to_open_minutes for r in records])
    return {
        "total_auto_tasks": len(records),
        "opened_after_assignment": stats["count"],
        "mean_time_to_open": stats["mean"],
        "median_time_to_open": stats["median"],
    }
