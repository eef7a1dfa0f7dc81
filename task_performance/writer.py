"""CSV output for report rows."""

from __future__ import annotations

import csv
import os
import tempfile
from pathlib import Path
from typing import Iterable


def stage_rows(path: str | Path, columns: list[str], rows: Iterable[dict]) -> Path:
    """Write rows to a temporary sibling of ``path`` and return the temp path.

    ``None`` values are written as empty cells. The target is untouched until
    :func:`commit` is called.
    """

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", newline="", encoding="utf-8") as handle:
            writer = csv.DictWriter(handle, fieldnames=columns, extrasaction="ignore")
            writer.writeheader()
            for row in rows:
                writer.writerow(row)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise
    return Path(temp_name)


def commit(staged: dict[Path, Path]) -> list[Path]:
    """Move each staged temp file onto its target."""

    for target, temp in staged.items():
        os.replace(temp, target)
    return list(staged)


def discard(staged: dict[Path, Path]) -> None:
    for temp in staged.values():
        temp.unlink(missing_ok=True)


def write_rows(path: str | Path, columns: list[str], rows: Iterable[dict]) -> Path:
    """Write rows to a CSV file, replacing the target only once fully written."""

    target = Path(path)
    [written] = commit({target: stage_rows(target, columns, rows)})
    return written
