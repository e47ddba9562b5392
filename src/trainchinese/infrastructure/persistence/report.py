"""Fixed-width text report of per-task levels, for quick inspection."""

import logging
from pathlib import Path

from trainchinese.application.stats.metrics_calculator import ItemLevelSummary

logger = logging.getLogger(__name__)

TASK_COLUMNS = ("h->p", "h->t", "p->h", "p->t", "t->h", "t->p")


def format_header() -> str:
    head = f"{'Hanzi':<10} {'Pinyin':<20} {'Translation':<50} "
    return head + "\t".join(f"{c:<4}" for c in (*TASK_COLUMNS, "mean", "min"))


def format_row(row: ItemLevelSummary) -> str:
    line = f"{row.hanzi:<10} {row.pinyin:<20} {row.translation:<50}"
    levels = "\t".join(f"{level:4d}" for level in row.levels)
    return f"{line}{levels}\t{row.mean_level:4.1f}\t{row.min_level:4d}"


def write_stats_report(rows: list[ItemLevelSummary], path: Path) -> None:
    """Write one line per item after a header; ``rows`` are written in order."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [format_header()] + [format_row(row) for row in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info(f"Stats report written to {path}")
