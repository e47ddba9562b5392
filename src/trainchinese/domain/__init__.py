# Domain Package
from .errors import (
    ClockSkewError,
    InvalidOutcomeError,
    MissingTaskError,
    SnapshotError,
    TrainChineseError,
)
from .models import (
    TASKS,
    Attribute,
    IntroduceDecision,
    Item,
    Outcome,
    Pool,
    ReviewEvent,
    TaskStats,
    TrainingParams,
)
from .ports import Clock, FixedClock, KnownItemsRepository, SystemClock, Trainer

__all__ = [
    "TASKS",
    "Attribute",
    "Clock",
    "ClockSkewError",
    "FixedClock",
    "IntroduceDecision",
    "InvalidOutcomeError",
    "Item",
    "KnownItemsRepository",
    "MissingTaskError",
    "Outcome",
    "Pool",
    "ReviewEvent",
    "SnapshotError",
    "SystemClock",
    "TaskStats",
    "Trainer",
    "TrainChineseError",
    "TrainingParams",
]
