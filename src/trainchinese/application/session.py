"""
Training session orchestration.

One round:
1. Ask the pool policy whether to introduce a new item (the trainer
   resolves ASK_CALLER) and promote one from "new"
2. Select a random batch of due items
3. Train each item, starting from its weakest attribute
"""

import logging
import random
from dataclasses import dataclass, field

from trainchinese.application.pool_policy import (
    select_and_promote_random_unseen_item,
    should_introduce_new_item,
)
from trainchinese.application.queue_builder import select_due_batch
from trainchinese.application.tracker import update_item
from trainchinese.domain.constants import DEFAULT_BATCH_SIZE
from trainchinese.domain.models import (
    TASKS,
    Attribute,
    IntroduceDecision,
    Item,
    Outcome,
    Pool,
    ReviewEvent,
    Task,
    TrainingParams,
)
from trainchinese.domain.ports import Clock, SystemClock, Trainer

logger = logging.getLogger(__name__)


@dataclass
class RoundResult:
    """Result of one training round."""

    decision: IntroduceDecision
    introduced: Item | None = None
    trained: list[Item] = field(default_factory=list)
    events: list[ReviewEvent] = field(default_factory=list)

    @property
    def nothing_to_train(self) -> bool:
        return not self.trained


def weakest_attribute(item: Item) -> Attribute:
    """Source attribute of the lowest-level task (first in TASKS order on ties)."""
    source, _ = min(TASKS, key=lambda task: item.task(*task).level)
    return source


class TrainingSession:
    """Drives rounds of introduction and review against a Trainer."""

    def __init__(
        self,
        pool: Pool,
        trainer: Trainer,
        params: TrainingParams | None = None,
        clock: Clock | None = None,
        rng: random.Random | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        self.pool = pool
        self.trainer = trainer
        self.params = params or TrainingParams()
        self.clock = clock or SystemClock()
        self.rng = rng or random.Random()
        self.batch_size = batch_size

    def _score(self, item: Item, task: Task, outcome: Outcome) -> ReviewEvent:
        return update_item(item, task, outcome, self.clock.now(), self.rng)

    def train_item(self, item: Item) -> list[ReviewEvent]:
        """Run the exercise chain for ``item`` and record the scored outcomes."""
        start = weakest_attribute(item)
        logger.debug(f"Training {item.id} from {start.value}")
        events: list[ReviewEvent] = []
        trainer, pool = self.trainer, self.pool
        trainer.present(item, start)

        if start is Attribute.HANZI:
            trainer.exercise_hanzi(item, pool)  # warm-up, unscored
            outcome = trainer.exercise_pinyin(item, pool)
            events.append(self._score(item, (Attribute.HANZI, Attribute.PINYIN), outcome))
            outcome = trainer.exercise_translation(item, pool)
            events.append(self._score(item, (Attribute.HANZI, Attribute.TRANSLATION), outcome))
        elif start is Attribute.PINYIN:
            trainer.exercise_pinyin(item, pool, audio_cue=True)  # warm-up, unscored
            outcome = trainer.exercise_hanzi(item, pool)
            events.append(self._score(item, (Attribute.PINYIN, Attribute.HANZI), outcome))
            outcome = trainer.exercise_translation(item, pool)
            events.append(self._score(item, (Attribute.PINYIN, Attribute.TRANSLATION), outcome))
        else:
            outcome = trainer.exercise_hanzi(item, pool)
            events.append(self._score(item, (Attribute.TRANSLATION, Attribute.HANZI), outcome))
            outcome = trainer.exercise_pinyin(item, pool)
            events.append(self._score(item, (Attribute.TRANSLATION, Attribute.PINYIN), outcome))

        return events

    def maybe_introduce(self) -> tuple[IntroduceDecision, Item | None]:
        decision = should_introduce_new_item(self.pool, self.params, self.clock.now())
        wanted = decision is IntroduceDecision.INTRODUCE or (
            decision is IntroduceDecision.ASK_CALLER and self.trainer.confirm_new_item()
        )
        if not wanted:
            return decision, None

        item = select_and_promote_random_unseen_item(self.pool, self.rng)
        if item is not None:
            self.trainer.introduce(item, self.pool)
        return decision, item

    def run_round(self) -> RoundResult:
        decision, introduced = self.maybe_introduce()
        result = RoundResult(decision=decision, introduced=introduced)

        batch = select_due_batch(self.pool, self.clock.now(), self.batch_size, self.rng)
        for item in batch:
            result.events.extend(self.train_item(item))
            result.trained.append(item)

        return result
