"""Stock movement history queries."""

from datetime import date

from src.application.use_cases.base import InventoryUseCase
from src.core.entities.inventory import (
    DailyMovement,
    MovementFilters,
    MovementSummary,
    StockMovement,
    TopMovingPart,
    ValueMovementSummary,
)


class GetStockMovementsUseCase(InventoryUseCase):
    """Read the movement ledger."""

    async def execute(self, part_id: int, limit: int | None = None) -> list[StockMovement]:
        """
        Movements of one part, newest first.

        Raises:
            PartNotFoundError: Unknown part.
        """
        await self._load_part(part_id)
        ledger = await self._get_ledger_store()
        return await ledger.get_movements(MovementFilters(part_id=part_id, limit=limit))

    async def find(self, filters: MovementFilters) -> list[StockMovement]:
        ledger = await self._get_ledger_store()
        return await ledger.get_movements(filters)

    async def recent(self, limit: int = 20) -> list[StockMovement]:
        ledger = await self._get_ledger_store()
        return await ledger.get_recent_movements(limit)

    async def summary(
        self,
        part_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> MovementSummary:
        await self._load_part(part_id)
        ledger = await self._get_ledger_store()
        return await ledger.get_movement_summary(part_id, date_from, date_to)

    async def value_movements(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> ValueMovementSummary:
        """Stock value received versus issued, optionally within a date range."""
        ledger = await self._get_ledger_store()
        return await ledger.get_value_movements(date_from, date_to)

    async def daily(self, days: int = 30) -> list[DailyMovement]:
        ledger = await self._get_ledger_store()
        return await ledger.get_daily_movements(days)

    async def top_moving(self, limit: int = 10, days: int = 30) -> list[TopMovingPart]:
        ledger = await self._get_ledger_store()
        return await ledger.get_top_moving_parts(limit, days)
