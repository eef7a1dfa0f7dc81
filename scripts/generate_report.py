"""Generate the task performance report and auto task open analysis."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from task_performance.config import load_config
from task_performance.pipeline import run


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate task performance reports")
    parser.add_argument("--settings", help="YAML/JSON settings file")
    parser.add_argument("--input-dir", help="Directory holding the source CSV/JSON files")
    parser.add_argument("--report-out", help="Path for task_performance_report.csv")
    parser.add_argument("--analysis-out", help="Path for auto_task_open_analysis.csv")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING)")
    args = parser.parse_args(argv)

    try:
        config = load_config(
            args.settings,
            input_dir=args.input_dir,
            report_out=args.report_out,
            analysis_out=args.analysis_out,
            log_level=args.log_level,
        )
        logging.basicConfig(level=config.log_level.upper(), format="%(levelname)s  %(name)s: %(message)s")
        result = run(config)
    except (OSError, ValueError) as exc:
        logging.getLogger("generate_report").error("Report generation failed: %s", exc)
        raise SystemExit(1) from exc

    print(json.dumps(result.summary, indent=2))
    for path in result.written:
        print(f"Saved report to {path}")


if __name__ == "__main__":
    main()
