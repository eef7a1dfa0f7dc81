import csv

import pytest

from task_performance.writer import write_rows


def test_write_rows_blank_for_none(tmp_path):
    path = write_rows(tmp_path / "out.csv", ["a", "b"], [{"a": 1, "b": None}])
    with open(path, newline="", encoding="utf-8") as handle:
        assert list(csv.DictReader(handle)) == [{"a": "1", "b": ""}]


def test_failed_write_keeps_previous_file(tmp_path):
    target = tmp_path / "out.csv"
    target.write_text("previous\n", encoding="utf-8")

    def rows():
        yield {"a": 1}
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        write_rows(target, ["a"], rows())
    assert target.read_text(encoding="utf-8") == "previous\n"
    assert [p.name for p in tmp_path.iterdir()] == ["out.csv"]
