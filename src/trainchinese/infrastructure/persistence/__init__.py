# Persistence Adapters Package
from .json_store import JsonKnownItemsRepository
from .report import write_stats_report

__all__ = ["JsonKnownItemsRepository", "write_stats_report"]
