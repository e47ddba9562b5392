"""
Vocabulary file ingestion.

Input format (one entry per line)::

    id | hanzi | pinyin | translation | optional context

- Lines starting with ``#`` are comments.
- A line starting with ``SKIP`` toggles a skipped region.
- A line starting with ``STOP`` ends parsing.
- Pinyin may use tone marks; it is stored with tone numbers.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from trainchinese.application.utils.pinyin import convert_pinyin
from trainchinese.domain.models import Item, Pool

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = " | "
_KEEP_INTACT = ("（一）", "（不）")


@dataclass(frozen=True)
class VocabularyRecord:
    id: str
    hanzi: str
    pinyin: str
    translation: str
    context: str = ""


@dataclass
class IngestResult:
    """Counts reported after merging records into a pool."""

    added: int = 0
    updated: int = 0


def split_hanzi_context(hanzi: str) -> tuple[str, str]:
    """
    Split a trailing full-width note off the hanzi field.

    ``"你好（context）"`` -> ``("你好", "（context）")``. Tone-change markers
    ``（一）``/``（不）`` and notes that repeat a character of the head are kept
    as part of the hanzi.
    """
    index = hanzi.find("（")
    if index == -1 or any(marker in hanzi for marker in _KEEP_INTACT):
        return hanzi, ""

    head, note = hanzi[:index], hanzi[index:]
    if any(char in head for char in note):
        return hanzi, ""
    return head, note


def _merge_context(hanzi_note: str, context: str) -> str:
    if not context:
        return hanzi_note
    if not hanzi_note:
        return context
    return f"{hanzi_note} {context}"


def parse_line(line: str) -> VocabularyRecord | None:
    """Parse one entry line; returns None when the format is invalid."""
    parts = [part.strip() for part in line.split(FIELD_SEPARATOR)]
    if len(parts) not in (4, 5):
        return None

    item_id, hanzi, pinyin, translation = parts[:4]
    context = parts[4] if len(parts) == 5 else ""

    hanzi, hanzi_note = split_hanzi_context(hanzi)
    return VocabularyRecord(
        id=item_id,
        hanzi=hanzi,
        pinyin=convert_pinyin(pinyin),
        translation=translation,
        context=_merge_context(hanzi_note, context),
    )


def parse_vocabulary_lines(lines: Iterable[str]) -> list[VocabularyRecord]:
    """Parse entry lines, honouring comments and SKIP/STOP markers."""
    records: list[VocabularyRecord] = []
    skipping = False

    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        if line.startswith("STOP"):
            break
        if line.startswith("#"):
            continue
        if line.startswith("SKIP"):
            skipping = not skipping
            continue
        if skipping:
            continue

        record = parse_line(line)
        if record is None:
            logger.warning(f"Invalid line format: {line}")
            continue
        records.append(record)

    return records


def parse_vocabulary_file(path: Path) -> list[VocabularyRecord]:
    with path.open(encoding="utf-8") as f:
        return parse_vocabulary_lines(f)


def update_pool_from_records(
    pool: Pool, records: Iterable[VocabularyRecord], now: datetime
) -> IngestResult:
    """
    Merge parsed records into ``pool``.

    Unknown ids become fresh items in "new". For ids already in "known" only
    the context is refreshed; review state is never recreated.
    """
    result = IngestResult()

    for record in records:
        existing = pool.known.get(record.id)
        if existing is None:
            pool.new[record.id] = Item.new(
                id=record.id,
                hanzi=record.hanzi,
                pinyin=record.pinyin,
                translation=record.translation,
                context=record.context,
                now=now,
            )
            result.added += 1
        elif existing.context != record.context:
            logger.info(f"Updated context for {existing.hanzi}: {record.context}")
            existing.context = record.context
            result.updated += 1

    return result


def update_pool_from_file(pool: Pool, path: Path, now: datetime) -> IngestResult:
    result = update_pool_from_records(pool, parse_vocabulary_file(path), now)
    logger.info(f"Item pool updated from {path}: {result.added} new, {result.updated} updated")
    return result
