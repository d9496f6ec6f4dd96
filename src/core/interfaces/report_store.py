"""Abstract interface for inventory reporting queries."""

from abc import ABC, abstractmethod

from src.core.entities.inventory import InventoryStatistics


class IInventoryReportStore(ABC):
    """Read-only aggregates over parts and movements."""

    @abstractmethod
    async def get_statistics(
        self, recent_limit: int = 10, top_limit: int = 10
    ) -> InventoryStatistics:
        """Stock value, counts by stock state, top-value parts, recent movements."""
        pass
