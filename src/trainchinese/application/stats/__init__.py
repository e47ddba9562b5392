# Application Stats Package
from .metrics_calculator import (
    GlobalLevelPoint,
    ItemLevelSummary,
    MetricsCalculator,
    PoolSummary,
    TaskSummary,
)
from .service import PoolStatsService

__all__ = [
    "GlobalLevelPoint",
    "ItemLevelSummary",
    "MetricsCalculator",
    "PoolStatsService",
    "PoolSummary",
    "TaskSummary",
]
