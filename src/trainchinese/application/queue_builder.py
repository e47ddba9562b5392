"""
Queue builder for review rounds.

Builds a review batch by:
1. Filtering known items that are due (global priority > 1) or never
   trained (global level 0)
2. Sampling a bounded random batch without replacement
"""

import logging
import random
from datetime import datetime

from trainchinese.application.pool_policy import global_priority
from trainchinese.domain.constants import DEFAULT_BATCH_SIZE, DUE_PRIORITY
from trainchinese.domain.models import Item, Pool

logger = logging.getLogger(__name__)


def is_eligible(item: Item, now: datetime) -> bool:
    return item.global_level == 0 or global_priority(item, now) > DUE_PRIORITY


def eligible_items(pool: Pool, now: datetime) -> list[Item]:
    """Known items eligible for review, in a stable (id) order."""
    return [item for _, item in sorted(pool.known.items()) if is_eligible(item, now)]


def select_due_batch(
    pool: Pool,
    now: datetime,
    batch_size: int = DEFAULT_BATCH_SIZE,
    rng: random.Random | None = None,
) -> list[Item]:
    """
    Sample up to ``batch_size`` distinct eligible items.

    An empty list means there is nothing to train this round.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    candidates = eligible_items(pool, now)
    if not candidates:
        logger.info("No items to train.")
        return []

    rng = rng or random.Random()
    batch = rng.sample(candidates, min(batch_size, len(candidates)))
    logger.debug(f"Selected {len(batch)} of {len(candidates)} eligible items")
    return batch
