"""
Snapshot schema for the JSON save file.

Pydantic models mirror the on-disk layout; conversion to and from the domain
models happens here so the domain stays free of serialization concerns.
"""

from pydantic import BaseModel, Field, NaiveDatetime, field_validator

from trainchinese.domain.errors import SnapshotError
from trainchinese.domain.models import (
    TASKS,
    Attribute,
    Item,
    ReviewEvent,
    TaskStats,
    task_from_string,
    task_to_string,
)


class ReviewEventRecord(BaseModel):
    date_reviewed: NaiveDatetime
    time_interval_minutes: float
    time_reaction_seconds: float = 0.0
    priority: float
    memory_strength: float
    hint_used: bool
    result: int
    level_old: int
    level_new: int

    @field_validator("result")
    @classmethod
    def check_result(cls, v: int) -> int:
        if v not in (-1, 0, 1):
            raise ValueError(f"result must be -1, 0 or 1, got {v}")
        return v


class TaskStatsRecord(BaseModel):
    level: int = Field(ge=0)
    date_last_reviewed: NaiveDatetime
    count_correct: int = 0
    count_hint: int = 0
    count_incorrect: int = 0
    review_history: list[ReviewEventRecord] = Field(default_factory=list)


class ItemRecord(BaseModel):
    id: str
    hanzi: str
    pinyin: str
    translation: str
    context: str = ""
    date_added: NaiveDatetime
    date_last_reviewed_global: NaiveDatetime
    level_global: int = Field(ge=0)
    stats: dict[str, TaskStatsRecord]
    correlation_errors: dict[str, dict[str, int]] = Field(default_factory=dict)


# ---------- Domain -> record ----------


def item_to_record(item: Item) -> ItemRecord:
    return ItemRecord(
        id=item.id,
        hanzi=item.hanzi,
        pinyin=item.pinyin,
        translation=item.translation,
        context=item.context,
        date_added=item.date_added,
        date_last_reviewed_global=item.global_last_reviewed,
        level_global=item.global_level,
        stats={
            task_to_string(task): TaskStatsRecord(
                level=stats.level,
                date_last_reviewed=stats.last_reviewed,
                count_correct=stats.count_correct,
                count_hint=stats.count_hint,
                count_incorrect=stats.count_incorrect,
                review_history=[
                    ReviewEventRecord(
                        date_reviewed=e.date_reviewed,
                        time_interval_minutes=e.time_interval_minutes,
                        time_reaction_seconds=e.time_reaction_seconds,
                        priority=e.priority,
                        memory_strength=e.memory_strength,
                        hint_used=e.hint_used,
                        result=e.result,
                        level_old=e.level_old,
                        level_new=e.level_new,
                    )
                    for e in stats.review_history
                ],
            )
            for task, stats in item.tasks.items()
        },
        correlation_errors={
            attribute.value: dict(counts) for attribute, counts in item.confusions.items()
        },
    )


# ---------- Record -> domain ----------


def _stats_from_record(record: TaskStatsRecord) -> TaskStats:
    return TaskStats(
        level=record.level,
        last_reviewed=record.date_last_reviewed,
        count_correct=record.count_correct,
        count_hint=record.count_hint,
        count_incorrect=record.count_incorrect,
        review_history=[
            ReviewEvent(
                date_reviewed=e.date_reviewed,
                time_interval_minutes=e.time_interval_minutes,
                time_reaction_seconds=e.time_reaction_seconds,
                priority=e.priority,
                memory_strength=e.memory_strength,
                hint_used=e.hint_used,
                result=e.result,
                level_old=e.level_old,
                level_new=e.level_new,
            )
            for e in record.review_history
        ],
    )


def item_from_record(record: ItemRecord) -> Item:
    """
    Build a domain Item from a validated record.

    Raises:
        SnapshotError: If a task key is malformed, a task is missing, the
            global level differs from the lowest task level, or a confusion
            table names an unknown attribute.
    """
    tasks = {}
    for key, stats in record.stats.items():
        try:
            task = task_from_string(key)
        except ValueError as e:
            raise SnapshotError(f"Item {record.id!r}: {e}") from e
        tasks[task] = _stats_from_record(stats)

    missing = [task_to_string(task) for task in TASKS if task not in tasks]
    if missing:
        raise SnapshotError(f"Item {record.id!r} is missing tasks: {', '.join(missing)}")

    lowest = min(stats.level for stats in tasks.values())
    if record.level_global != lowest:
        raise SnapshotError(
            f"Item {record.id!r}: global level {record.level_global} does not match "
            f"lowest task level {lowest}"
        )

    confusions: dict[Attribute, dict[str, int]] = {attribute: {} for attribute in Attribute}
    for name, counts in record.correlation_errors.items():
        attribute = Attribute.parse(name)
        if attribute is None:
            raise SnapshotError(f"Item {record.id!r}: unknown attribute {name!r}")
        confusions[attribute] = dict(counts)

    return Item(
        id=record.id,
        hanzi=record.hanzi,
        pinyin=record.pinyin,
        translation=record.translation,
        context=record.context,
        date_added=record.date_added,
        global_last_reviewed=record.date_last_reviewed_global,
        global_level=record.level_global,
        tasks=tasks,
        confusions=confusions,
    )
