"""End-to-end report generation from source files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from task_performance.adapters import csv_adapter, json_adapter
from task_performance.auto_open import AUTO_OPEN_COLUMNS, build_auto_open_analysis
from task_performance.config import ReportConfig
from task_performance.indexes import EventIndexes
from task_performance.report import REPORT_COLUMNS, build_report
from task_performance.schema import AutoOpenRecord, ReportRecord
from task_performance.summary import summarize_auto_open, summarize_report
from task_performance.writer import commit, discard, stage_rows

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    report: list[ReportRecord]
    analysis: list[AutoOpenRecord]
    summary: dict
    written: list[Path] = field(default_factory=list)


def load_sources(config: ReportConfig) -> EventIndexes:
    """Parse every source file, then build the indexes in one step.

    Any source that cannot be read at all aborts the run.
    """

    logger.info("Loading sources from %s", config.input_dir)
    sources = {
        "task_actions": csv_adapter.parse_task_actions(str(config.source_path("task_actions"))),
        "task_history": csv_adapter.parse_task_history(str(config.source_path("task_history"))),
        "users": csv_adapter.parse_users(str(config.source_path("users"))),
        "auto_assignments": json_adapter.parse_auto_assignments(str(config.source_path("auto_assignments"))),
        "open_times": csv_adapter.parse_open_times(str(config.source_path("open_times"))),
        "screen_opens": csv_adapter.parse_screen_opens(str(config.source_path("screen_opens"))),
    }
    return EventIndexes.build(**sources)


def run(config: ReportConfig, write: bool = True) -> RunResult:
    """Generate both reports; files are only written once both are complete."""

    indexes = load_sources(config)
    report = build_report(indexes)
    analysis = build_auto_open_analysis(indexes)
    summary = {
        "report": summarize_report(report),
        "auto_open": summarize_auto_open(analysis),
        "dropped_rows": dict(indexes.dropped),
    }
    result = RunResult(report=report, analysis=analysis, summary=summary)

    if write:
        result.written = write_outputs(config, report, analysis)
        for path in result.written:
            logger.info("Saved %s", path)
    return result


def write_outputs(config: ReportConfig, report: list[ReportRecord], analysis: list[AutoOpenRecord]) -> list[Path]:
    """Stage both CSV files, then replace the targets only if both staged cleanly."""

    outputs = [
        (Path(config.report_out), REPORT_COLUMNS, [r.as_row() for r in report]),
        (Path(config.analysis_out), AUTO_OPEN_COLUMNS, [r.as_row() for r in analysis]),
    ]
    staged: dict[Path, Path] = {}
    try:
        for target, columns, rows in outputs:
            staged[target] = stage_rows(target, columns, rows)
    except BaseException:
        discard(staged)
        raise
    return commit(staged)
