"""Rebuild openCambridgeTime.csv from users.csv and a query_data.csv export."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from task_performance.adapters.csv_adapter import regenerate_screen_opens


def main() -> None:
    parser = argparse.ArgumentParser(description="Regenerate the screen-open CSV")
    parser.add_argument("--input-dir", default=os.environ.get("CSV_INPUT_DIR", "csvs1"))
    parser.add_argument("--output-dir", default=os.environ.get("CSV_OUTPUT_DIR", "csvs1"))
    parser.add_argument("--users-file", default=os.environ.get("USERS_FILE", "users.csv"))
    parser.add_argument("--query-file", default=os.environ.get("QUERY_DATA_FILE", "query_data.csv"))
    parser.add_argument("--output-file", default=os.environ.get("OUTPUT_FILE", "openCambridgeTime.csv"))
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s  %(message)s")

    input_dir = Path(args.input_dir)
    output_path = Path(args.output_dir) / args.output_file
    count = regenerate_screen_opens(
        str(input_dir / args.users_file),
        str(input_dir / args.query_file),
        str(output_path),
    )
    print(f"Generated {output_path} with {count} records")


if __name__ == "__main__":
    main()
