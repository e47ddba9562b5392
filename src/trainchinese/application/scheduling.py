"""
Priority, memory-strength and level-transition model.

This is a pure computation module with no I/O. Time and randomness are
always passed in so results are reproducible under a fixed clock and a
seeded ``random.Random``.
"""

import random
from datetime import datetime

from trainchinese.domain.constants import MEMORY_DECAY_CONSTANT
from trainchinese.domain.errors import ClockSkewError
from trainchinese.domain.models import Outcome


def elapsed_minutes(last_reviewed: datetime, now: datetime) -> float:
    """
    Minutes between ``last_reviewed`` and ``now``.

    Raises:
        ClockSkewError: If ``now`` is earlier than ``last_reviewed``.
    """
    delta = now - last_reviewed
    minutes = delta.total_seconds() / 60.0
    if minutes < 0:
        raise ClockSkewError(
            f"now ({now.isoformat()}) precedes last review ({last_reviewed.isoformat()})"
        )
    return minutes


def calculate_priority(level: int, last_reviewed: datetime, now: datetime) -> float:
    """
    Review urgency: elapsed minutes divided by the half-life ``2**level``.

    Values >= 1 mean the item is due. Unbounded above.
    """
    return elapsed_minutes(last_reviewed, now) / 2**level


def calculate_memory_strength(level: int, last_reviewed: datetime, now: datetime) -> float:
    """
    Modeled recall probability in [0, 1].

    M = 2^(-C * priority). Equals 1 right after a review and decays
    exponentially as priority grows. Underflows to 0.0 once priority exceeds
    roughly 987, e.g. a level-0 task left for about 17 hours.
    """
    priority = calculate_priority(level, last_reviewed, now)
    return 2.0 ** (-MEMORY_DECAY_CONSTANT * priority)


def calculate_new_level(
    level: int,
    last_reviewed: datetime,
    outcome: int | Outcome,
    now: datetime,
    rng: random.Random,
) -> int:
    """
    Compute a new level after an attempt.

    The update is a chain of Bernoulli trials driven by the memory strength
    before the attempt:

    - CORRECT: climb one level while ``rng.random() < 1 - M``, re-evaluating
      M at each new level against the same ``last_reviewed``. A correct answer
      on a nearly forgotten item is strong evidence and may jump several levels.
    - INCORRECT: drop one level while ``rng.random() < M`` and the level is
      above 1, re-evaluating M at each new level. Never reaches 0 by failing.
    - HINT: no change.

    Raises:
        InvalidOutcomeError: If ``outcome`` is not -1, 0 or 1.
    """
    outcome = Outcome.coerce(outcome)
    level_new = level

    if outcome is Outcome.CORRECT:
        transition_probability = 1 - calculate_memory_strength(level_new, last_reviewed, now)
        while rng.random() < transition_probability:
            level_new += 1
            transition_probability = 1 - calculate_memory_strength(
                level_new, last_reviewed, now
            )
    elif outcome is Outcome.INCORRECT:
        transition_probability = calculate_memory_strength(level_new, last_reviewed, now)
        while rng.random() < transition_probability and level_new > 1:
            level_new -= 1
            transition_probability = calculate_memory_strength(level_new, last_reviewed, now)

    return level_new
