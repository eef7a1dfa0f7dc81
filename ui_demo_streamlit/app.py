"""Streamlit viewer for the task performance reports."""

from __future__ import annotations

from typing import Any

from task_performance.config import load_config
from task_performance.pipeline import run
from task_performance.schema import MODE_AUTO, MODE_MANUAL, MODE_UNKNOWN


def run_reports(input_dir: str, settings_path: str | None = None) -> dict[str, Any]:
    """Run the pipeline without writing files and return a UI-friendly payload."""

    config = load_config(settings_path or None, input_dir=input_dir or None)
    result = run(config, write=False)
    return {
        "summary": result.summary,
        "report_rows": [record.as_row() for record in result.report],
        "analysis_rows": [record.as_row() for record in result.analysis],
    }


def _fmt_minutes(value: float) -> str:
    return f"{value:.1f} min"


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Task Performance Report", layout="wide")
    st.title("Task Performance Report")

    with st.sidebar:
        st.header("Sources")
        input_dir = st.text_input("Input directory", value="csvs1")
        settings_path = st.text_input("Settings file (optional)", value="")
        mode_filter = st.multiselect("Mode", options=[MODE_AUTO, MODE_MANUAL, MODE_UNKNOWN], default=[MODE_AUTO, MODE_MANUAL, MODE_UNKNOWN])
        go = st.button("Build reports", type="primary")

    if not go:
        st.info("Choose the source directory in the sidebar and click **Build reports**.")
        return

    try:
        result = run_reports(input_dir, settings_path)
    except (OSError, ValueError) as exc:
        st.error(f"Input error: {exc}")
        return

    summary = result["summary"]["report"]
    st.subheader("A) Summary")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Tasks", summary["total_tasks"])
    c2.metric("Auto", summary["mode_counts"][MODE_AUTO])
    c3.metric("Median productive", _fmt_minutes(summary["productive_time"]["median"]))
    c4.metric("Median waiting", _fmt_minutes(summary["waiting_time"]["median"]))
    st.table([summary["mode_counts"]])

    st.subheader("B) Task performance")
    rows = [row for row in result["report_rows"] if row["mode"] in mode_filter]
    st.dataframe(rows, use_container_width=True)

    st.subheader("C) Auto task open analysis")
    auto_open = result["summary"]["auto_open"]
    a1, a2 = st.columns(2)
    a1.metric("Auto-assigned tasks", auto_open["total_auto_tasks"])
    a2.metric("Median time to open", _fmt_minutes(auto_open["median_time_to_open"]))
    st.dataframe(result["analysis_rows"], use_container_width=True)

    dropped = result["summary"]["dropped_rows"]
    if dropped:
        st.caption(f"Rows without a join key: {dropped}")


if __name__ == "__main__":
    main()
