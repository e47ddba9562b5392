"""
Task statistics tracker.

Applies the level-transition model to one directed task, appends the
immutable review record, and keeps the item's global level in sync.
"""

import logging
import random
from datetime import datetime

from trainchinese.application.scheduling import (
    calculate_memory_strength,
    calculate_new_level,
    calculate_priority,
    elapsed_minutes,
)
from trainchinese.application.utils.pinyin import compare_pinyin
from trainchinese.domain.models import (
    Attribute,
    Item,
    Outcome,
    Pool,
    ReviewEvent,
    Task,
    TaskStats,
)

logger = logging.getLogger(__name__)


def record_attempt(
    stats: TaskStats,
    outcome: int | Outcome,
    now: datetime,
    rng: random.Random,
) -> ReviewEvent:
    """
    Apply one attempt to ``stats`` and append its ReviewEvent.

    Elapsed time and priority are measured against the pre-update timestamp
    at the old level; the stored memory strength is evaluated at the new
    level against that same old timestamp.
    """
    outcome = Outcome.coerce(outcome)
    level_old = stats.level
    last_reviewed = stats.last_reviewed

    level_new = calculate_new_level(level_old, last_reviewed, outcome, now, rng)

    event = ReviewEvent(
        date_reviewed=now,
        time_interval_minutes=elapsed_minutes(last_reviewed, now),
        time_reaction_seconds=0.0,  # reaction time is not tracked yet
        priority=calculate_priority(level_old, last_reviewed, now),
        memory_strength=calculate_memory_strength(level_new, last_reviewed, now),
        hint_used=outcome is Outcome.HINT,
        result=int(outcome),
        level_old=level_old,
        level_new=level_new,
    )
    stats.review_history.append(event)

    stats.level = level_new
    stats.last_reviewed = now
    return event


def update_global(item: Item, now: datetime) -> None:
    """Global level is the weakest task's level."""
    item.global_level = min(stats.level for stats in item.tasks.values())
    item.global_last_reviewed = now


def update_item(
    item: Item,
    task: Task,
    outcome: int | Outcome,
    now: datetime,
    rng: random.Random,
) -> ReviewEvent:
    """Record an attempt on one task of ``item`` and refresh its global level."""
    event = record_attempt(item.task(*task), outcome, now, rng)
    update_global(item, now)
    logger.debug(
        f"{item.id} {task[0].value}->{task[1].value}: "
        f"result={event.result} level {event.level_old}->{event.level_new}"
    )
    return event


def record_confusion(item: Item, attribute: Attribute, given: str, pool: Pool) -> str | None:
    """
    Count a wrong answer that matches another known item.

    For TRANSLATION, ``given`` is the id of the wrongly selected item. For
    HANZI (exact) and PINYIN (space-insensitive), ``given`` is the typed value,
    matched against every other known item; only the first match counts.

    Returns:
        The id the confusion was recorded against, or None.
    """
    table = item.confusions.setdefault(attribute, {})

    if attribute is Attribute.TRANSLATION:
        table[given] = table.get(given, 0) + 1
        logger.info(f"Confusion ({attribute.value}): {item.id} mixed up with {given}")
        return given

    for candidate in pool.known.values():
        if candidate.id == item.id:
            continue
        if attribute is Attribute.HANZI:
            matched = candidate.hanzi == given
        else:
            matched = compare_pinyin(given, candidate.pinyin)
        if matched:
            table[candidate.id] = table.get(candidate.id, 0) + 1
            logger.info(f"Confusion ({attribute.value}): {item.id} mixed up with {candidate.id}")
            return candidate.id

    return None
