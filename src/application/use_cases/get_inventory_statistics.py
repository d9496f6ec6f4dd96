"""Get Inventory Statistics Use Case."""

from src.config import get_settings
from src.core.entities.inventory import InventoryStatistics
from src.core.interfaces.report_store import IInventoryReportStore


class GetInventoryStatisticsUseCase:
    """Aggregate stock value and stock-state counts."""

    def __init__(self, report_store: IInventoryReportStore | None = None):
        self._report_store = report_store

    async def _get_report_store(self) -> IInventoryReportStore:
        if self._report_store is None:
            from src.infrastructure.storage.sqlite import get_report_store

            self._report_store = await get_report_store()
        return self._report_store

    async def execute(self) -> InventoryStatistics:
        settings = get_settings().inventory
        report_store = await self._get_report_store()
        return await report_store.get_statistics(
            recent_limit=settings.recent_movements_limit,
            top_limit=settings.top_value_limit,
        )
