"""Abstract interface for the stock ledger."""

from abc import ABC, abstractmethod
from datetime import date

from src.core.entities.inventory import (
    DailyMovement,
    InventoryAlert,
    MovementFilters,
    MovementSummary,
    StockChange,
    StockChangeResult,
    StockMovement,
    TopMovingPart,
    ValueMovementSummary,
)
from src.core.entities.part import Part


class IStockLedgerStore(ABC):
    """Interface for quantity mutation and movement history."""

    @abstractmethod
    async def apply_stock_change(self, change: StockChange) -> StockChangeResult:
        """
        Move a part to an absolute quantity as one unit of work.

        Updates the part row, appends one movement and inserts any threshold
        alerts in a single transaction. Raises PartNotFoundError if the part
        does not exist.
        """
        pass

    @abstractmethod
    async def evaluate_alerts(self, part_id: int) -> list[InventoryAlert]:
        """Re-run threshold evaluation for a part's current quantity."""
        pass

    @abstractmethod
    async def get_movements(self, filters: MovementFilters) -> list[StockMovement]:
        """List movements, newest first."""
        pass

    @abstractmethod
    async def get_recent_movements(self, limit: int = 20) -> list[StockMovement]:
        """Latest movements across all parts."""
        pass

    @abstractmethod
    async def get_movement_summary(
        self,
        part_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> MovementSummary:
        """Totals per movement type for a part."""
        pass

    @abstractmethod
    async def create_part_with_stock(
        self,
        part: Part,
        initial_quantity: int,
        performed_by: int,
        unit_cost: float | None = None,
        notes: str | None = None,
    ) -> StockChangeResult:
        """
        Insert a part and book its opening quantity as one unit of work.

        Raises DuplicatePartCodeError if the part code is taken. On any
        failure neither the part nor the movement is stored.
        """
        pass

    @abstractmethod
    async def get_value_movements(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> ValueMovementSummary:
        """Cost value received versus issued across all parts."""
        pass

    @abstractmethod
    async def get_daily_movements(self, days: int = 30) -> list[DailyMovement]:
        """Units in and out per calendar day, newest day first."""
        pass

    @abstractmethod
    async def get_top_moving_parts(
        self, limit: int = 10, days: int = 30
    ) -> list[TopMovingPart]:
        """Parts with the most movements in the window."""
        pass
