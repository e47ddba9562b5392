"""
Metrics calculator for summarising pool progress.

This is a pure computation module with no I/O.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from statistics import mean

from trainchinese.application.pool_policy import calculate_gradations
from trainchinese.application.scheduling import calculate_priority
from trainchinese.domain.constants import DUE_PRIORITY, MEDIUM_PRIORITY
from trainchinese.domain.models import TASKS, Item, Pool, ReviewEvent, Task


@dataclass
class ItemLevelSummary:
    """
    Per-item row of the stats export.

    `levels` follows TASKS order: h->p, h->t, p->h, p->t, t->h, t->p.
    """

    item_id: str
    hanzi: str
    pinyin: str
    translation: str
    levels: list[int]
    mean_level: float
    min_level: int


@dataclass
class TaskSummary:
    """Aggregates for one directed task across all known items."""

    task: Task
    average_level: float
    high_priority: int  # priority >= 1
    medium_priority: int  # 0.5 <= priority < 1
    average_priority: float


@dataclass
class PoolSummary:
    known: int
    new: int
    gradations: dict[str, int]
    tasks: list[TaskSummary]


@dataclass(frozen=True)
class GlobalLevelPoint:
    """One step of a replayed global-level history."""

    date: datetime
    task: Task
    global_level: int


class MetricsCalculator:
    """
    Computes summaries from items and their review histories.

    Stateless and side-effect free.
    """

    def item_summary(self, item: Item) -> ItemLevelSummary:
        levels = [item.task(*task).level for task in TASKS]
        return ItemLevelSummary(
            item_id=item.id,
            hanzi=item.hanzi,
            pinyin=item.pinyin,
            translation=item.translation,
            levels=levels,
            mean_level=mean(levels),
            min_level=min(levels),
        )

    def task_summary(self, pool: Pool, task: Task, now: datetime) -> TaskSummary:
        total = len(pool.known)
        total_level = 0
        total_priority = 0.0
        high = 0
        medium = 0

        for item in pool.known.values():
            stats = item.task(*task)
            total_level += stats.level
            priority = calculate_priority(stats.level, stats.last_reviewed, now)
            if priority >= DUE_PRIORITY:
                high += 1
            elif priority >= MEDIUM_PRIORITY:
                medium += 1
            total_priority += priority

        return TaskSummary(
            task=task,
            average_level=total_level / total if total else 0.0,
            high_priority=high,
            medium_priority=medium,
            average_priority=total_priority / total if total else 0.0,
        )

    def pool_summary(self, pool: Pool, now: datetime) -> PoolSummary:
        return PoolSummary(
            known=len(pool.known),
            new=len(pool.new),
            gradations=calculate_gradations(pool),
            tasks=[self.task_summary(pool, task, now) for task in TASKS],
        )

    def iter_review_history(self, item: Item) -> Iterator[tuple[Task, ReviewEvent]]:
        """Every review event of ``item``, task by task in TASKS order."""
        for task in TASKS:
            for event in item.task(*task).review_history:
                yield task, event

    def replay_global_levels(self, item: Item) -> list[GlobalLevelPoint]:
        """
        Rebuild the global level over time.

        Merges all per-task events chronologically and recomputes the
        minimum across task levels after each one. Tasks start at level 0.
        """
        events = sorted(self.iter_review_history(item), key=lambda pair: pair[1].date_reviewed)
        task_levels = {task: 0 for task in TASKS}
        points: list[GlobalLevelPoint] = []

        for task, event in events:
            task_levels[task] = event.level_new
            points.append(
                GlobalLevelPoint(
                    date=event.date_reviewed,
                    task=task,
                    global_level=min(task_levels.values()),
                )
            )
        return points
