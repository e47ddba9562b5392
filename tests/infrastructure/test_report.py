"""Tests for the fixed-width stats report."""

from trainchinese.application.stats.metrics_calculator import ItemLevelSummary
from trainchinese.infrastructure.persistence.report import (
    TASK_COLUMNS,
    format_header,
    format_row,
    write_stats_report,
)


def _row(item_id="w.1", hanzi="你", levels=(1, 2, 3, 4, 5, 9)):
    levels = list(levels)
    return ItemLevelSummary(
        item_id=item_id,
        hanzi=hanzi,
        pinyin="ni3",
        translation="you",
        levels=levels,
        mean_level=sum(levels) / len(levels),
        min_level=min(levels),
    )


def test_header_lists_task_columns():
    header = format_header()
    assert header.startswith("Hanzi")
    for column in (*TASK_COLUMNS, "mean", "min"):
        assert column in header


def test_row_contains_levels_mean_and_min():
    fields = format_row(_row()).split("\t")
    assert fields[0].startswith("你")
    assert fields[0].endswith("1")
    assert [int(f) for f in fields[1:6]] == [2, 3, 4, 5, 9]
    assert fields[-2].strip() == "4.0"
    assert fields[-1].strip() == "1"


def test_write_stats_report(tmp_path):
    path = tmp_path / "stats.txt"
    write_stats_report([_row("a", "水"), _row("b", "茶")], path)

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    assert lines[0] == format_header()
    assert lines[1].startswith("水")
    assert lines[2].startswith("茶")


def test_empty_report_has_header_only(tmp_path):
    path = tmp_path / "stats.txt"
    write_stats_report([], path)
    assert path.read_text(encoding="utf-8") == format_header() + "\n"


def test_report_creates_parent_directory(tmp_path):
    path = tmp_path / "reports" / "daily" / "stats.txt"
    write_stats_report([_row()], path)
    assert len(path.read_text(encoding="utf-8").splitlines()) == 2
