"""
Domain models for vocabulary items and their review state.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum

from .constants import (
    DEFAULT_MAX_EPHEMERAL_WORDS,
    DEFAULT_MAX_FLEETING_WORDS,
    DEFAULT_MAX_TOTAL_WORDS,
)
from .errors import InvalidOutcomeError, MissingTaskError


class Attribute(Enum):
    """Which side of a vocabulary item is shown or recalled."""

    HANZI = "Hanzi"
    PINYIN = "Pinyin"
    TRANSLATION = "Translation"

    @classmethod
    def parse(cls, name: str) -> "Attribute | None":
        """Parse a persisted name like ``"Hanzi"``; returns None when unknown."""
        for attribute in cls:
            if attribute.value == name:
                return attribute
        return None


Task = tuple[Attribute, Attribute]

# Fixed order: h->p, h->t, p->h, p->t, t->h, t->p
TASKS: tuple[Task, ...] = tuple(
    (source, target) for source in Attribute for target in Attribute if source != target
)

TASK_SEPARATOR = " -> "


def task_to_string(task: Task) -> str:
    return f"{task[0].value}{TASK_SEPARATOR}{task[1].value}"


def task_from_string(text: str) -> Task:
    """
    Parse ``"Hanzi -> Pinyin"`` into a task tuple.

    Raises:
        ValueError: If the text is not two known, distinct attribute names.
    """
    parts = text.split(TASK_SEPARATOR)
    if len(parts) == 2:
        source, target = Attribute.parse(parts[0]), Attribute.parse(parts[1])
        if source is not None and target is not None and source != target:
            return (source, target)
    raise ValueError(f"Invalid task string format: {text!r}")


class Outcome(IntEnum):
    """Result of one exercise as reported by the trainer."""

    INCORRECT = -1
    HINT = 0  # correct on a second try or after a hint
    CORRECT = 1  # correct on the first try

    @classmethod
    def coerce(cls, value: "int | Outcome") -> "Outcome":
        """
        Validate a raw outcome code.

        Raises:
            InvalidOutcomeError: If the value is not the integer -1, 0 or 1.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidOutcomeError(f"Invalid outcome code: {value!r}")
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidOutcomeError(f"Invalid outcome code: {value!r}") from e


class IntroduceDecision(Enum):
    """Answer of the pool-composition policy."""

    INTRODUCE = "introduce"
    DO_NOT_INTRODUCE = "do_not_introduce"
    ASK_CALLER = "ask_caller"


@dataclass(frozen=True)
class ReviewEvent:
    """
    A single scored attempt on one directed task.

    Attributes:
        date_reviewed: When the attempt was recorded.
        time_interval_minutes: Minutes since the previous review of this task.
        time_reaction_seconds: Reaction time (not tracked yet, always 0).
        priority: Priority at the old level before the attempt.
        memory_strength: Memory strength at the new level against the old timestamp.
        hint_used: True when the outcome was HINT.
        result: Outcome code (+1, 0, -1).
        level_old: Level before the attempt.
        level_new: Level after the attempt.
    """

    date_reviewed: datetime
    time_interval_minutes: float
    time_reaction_seconds: float
    priority: float
    memory_strength: float
    hint_used: bool
    result: int
    level_old: int
    level_new: int


@dataclass
class TaskStats:
    """
    Spaced-repetition state of one directed task of an item.

    The count_* fields are persisted but never incremented by the level update.
    """

    level: int
    last_reviewed: datetime
    count_correct: int = 0
    count_hint: int = 0
    count_incorrect: int = 0
    review_history: list[ReviewEvent] = field(default_factory=list)


@dataclass
class Item:
    """
    Vocabulary entry tracked by the trainer.

    `tasks` always holds exactly the six ordered attribute pairs. `confusions`
    maps an attribute to {other item id: times the learner gave that item's
    value instead}.
    """

    id: str
    hanzi: str
    pinyin: str  # tone numbers, e.g. "ni3 hao3"
    translation: str
    context: str
    date_added: datetime
    global_last_reviewed: datetime
    global_level: int
    tasks: dict[Task, TaskStats]
    confusions: dict[Attribute, dict[str, int]]

    @classmethod
    def new(
        cls,
        id: str,
        hanzi: str,
        pinyin: str,
        translation: str,
        context: str,
        now: datetime,
    ) -> "Item":
        """Create an unseen item with all six tasks at level 0."""
        return cls(
            id=id,
            hanzi=hanzi,
            pinyin=pinyin,
            translation=translation,
            context=context,
            date_added=now,
            global_last_reviewed=now,
            global_level=0,
            tasks={task: TaskStats(level=0, last_reviewed=now) for task in TASKS},
            confusions={attribute: {} for attribute in Attribute},
        )

    def task(self, source: Attribute, target: Attribute) -> TaskStats:
        """
        Return the stats for ``source -> target``.

        Raises:
            MissingTaskError: If the pair is absent (corrupted state).
        """
        try:
            return self.tasks[(source, target)]
        except KeyError:
            raise MissingTaskError(
                f"Item {self.id!r} has no task {source.value} -> {target.value}"
            ) from None

    def value_of(self, attribute: Attribute) -> str:
        if attribute is Attribute.HANZI:
            return self.hanzi
        if attribute is Attribute.PINYIN:
            return self.pinyin
        return self.translation


@dataclass
class Pool:
    """
    Two disjoint partitions of items.

    - known: items under active review.
    - new: parsed items not introduced yet.
    """

    known: dict[str, Item] = field(default_factory=dict)
    new: dict[str, Item] = field(default_factory=dict)


@dataclass(frozen=True)
class TrainingParams:
    """
    Thresholds for introducing new items.

    Attributes:
        max_ephemeral_words: Cap on items in the "ephemeral" gradation.
        max_fleeting_words: Cap on "ephemeral" + "fleeting" items combined.
        max_total_words: Cap on items due for review.
    """

    max_ephemeral_words: int = DEFAULT_MAX_EPHEMERAL_WORDS
    max_fleeting_words: int = DEFAULT_MAX_FLEETING_WORDS
    max_total_words: int = DEFAULT_MAX_TOTAL_WORDS
