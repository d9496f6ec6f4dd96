"""Perform Stock Check Use Case: periodic threshold sweep."""

from src.application.use_cases.base import InventoryUseCase
from src.config import get_logger
from src.core.entities.inventory import StockCheckResult
from src.core.services.stock_check import StockCheckService

logger = get_logger(__name__)


class PerformStockCheckUseCase(InventoryUseCase):
    """Run the StockCheckService over all active parts."""

    async def execute(self) -> StockCheckResult:
        logger.info("stock_check_started")
        service = StockCheckService(
            part_store=await self._get_part_store(),
            ledger_store=await self._get_ledger_store(),
        )
        return await service.run()
