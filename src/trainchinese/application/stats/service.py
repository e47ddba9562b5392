"""
Pool stats service. Application layer orchestrator.

Coordinates loading known items from the repository and summarising them.
"""

import logging

from trainchinese.domain.models import Item, Pool
from trainchinese.domain.ports import Clock, KnownItemsRepository, SystemClock

from .metrics_calculator import ItemLevelSummary, MetricsCalculator, PoolSummary

logger = logging.getLogger(__name__)


class PoolStatsService:
    """
    Application service for summarising learning progress.

    Depends on the KnownItemsRepository abstraction, not a concrete file format.
    """

    def __init__(
        self,
        repo: KnownItemsRepository,
        clock: Clock | None = None,
        calculator: MetricsCalculator | None = None,
    ):
        """
        Args:
            repo: The repository (port) holding known items.
            clock: Time source for priorities; wall clock if not provided.
            calculator: Optional custom calculator; uses default if not provided.
        """
        self._repo = repo
        self._clock = clock or SystemClock()
        self._calc = calculator or MetricsCalculator()

    def summarize(self, pool: Pool | None = None) -> PoolSummary:
        """
        Summarise ``pool``, or the persisted known items when no pool is given.
        """
        if pool is None:
            pool = Pool(known=self._repo.load())
        return self._calc.pool_summary(pool, self._clock.now())

    def item_rows(self, items: dict[str, Item] | None = None) -> list[ItemLevelSummary]:
        """Per-item level rows, oldest item first."""
        if items is None:
            items = self._repo.load()
        ordered = sorted(items.values(), key=lambda item: item.date_added)
        return [self._calc.item_summary(item) for item in ordered]
