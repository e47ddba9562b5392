"""
Pool composition policy.

Decides when a new item may join the review rotation and moves items from
the "new" partition to the "known" one.
"""

import logging
import random
from datetime import datetime

from trainchinese.application.scheduling import calculate_priority
from trainchinese.domain.constants import DUE_PRIORITY, GRADATIONS
from trainchinese.domain.models import IntroduceDecision, Item, Pool, TrainingParams

logger = logging.getLogger(__name__)


def gradation_of(level: int) -> str:
    """Name of the gradation a global level falls into."""
    for name, upper in GRADATIONS:
        if upper is None or level < upper:
            return name
    raise AssertionError("GRADATIONS must end with an open bucket")


def calculate_gradations(pool: Pool) -> dict[str, int]:
    """Histogram of known items per gradation, in gradation order."""
    gradations = {name: 0 for name, _ in GRADATIONS}
    for item in pool.known.values():
        gradations[gradation_of(item.global_level)] += 1
    return gradations


def global_priority(item: Item, now: datetime) -> float:
    return calculate_priority(item.global_level, item.global_last_reviewed, now)


def count_due(pool: Pool, now: datetime) -> int:
    """Known items whose global priority is at least 1."""
    return sum(1 for item in pool.known.values() if global_priority(item, now) >= DUE_PRIORITY)


def should_introduce_new_item(
    pool: Pool, params: TrainingParams, now: datetime
) -> IntroduceDecision:
    """
    Decide whether to introduce a new item.

    - Nothing due: ASK_CALLER (the learner decides).
    - Fewer "ephemeral" items than ``max_ephemeral_words``: INTRODUCE.
    - Otherwise DO_NOT_INTRODUCE, whether because "ephemeral" + "fleeting"
      reached ``max_fleeting_words``, the due count reached
      ``max_total_words``, or by default.
    """
    gradations = calculate_gradations(pool)
    due = count_due(pool, now)

    if due == 0:
        return IntroduceDecision.ASK_CALLER

    if gradations["ephemeral"] < params.max_ephemeral_words:
        return IntroduceDecision.INTRODUCE
    if gradations["ephemeral"] + gradations["fleeting"] >= params.max_fleeting_words:
        logger.debug("Too many active items; not introducing")
        return IntroduceDecision.DO_NOT_INTRODUCE
    if due >= params.max_total_words:
        logger.debug("Too many due items; not introducing")
        return IntroduceDecision.DO_NOT_INTRODUCE
    return IntroduceDecision.DO_NOT_INTRODUCE


def select_and_promote_random_unseen_item(pool: Pool, rng: random.Random) -> Item | None:
    """
    Move a uniformly random item from "new" to "known" and return it.

    Returns None when the "new" partition is empty.
    """
    if not pool.new:
        logger.info("New item pool is empty.")
        return None

    item_id = rng.choice(sorted(pool.new))
    item = pool.new.pop(item_id)
    pool.known[item_id] = item

    logger.info(f"Added a new item to learn: {item.hanzi} ({item_id})")
    return item
