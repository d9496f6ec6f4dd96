"""Core domain entities."""

from src.core.entities.inventory import (
    INITIAL_STOCK_REFERENCE,
    AlertFilters,
    AlertType,
    AlertTypeCount,
    DailyMovement,
    InventoryAlert,
    InventoryStatistics,
    MovementFilters,
    MovementSummary,
    MovementType,
    StockChange,
    StockChangeResult,
    StockCheckResult,
    StockMovement,
    TopMovingPart,
    ValueMovementSummary,
)
from src.core.entities.part import (
    BrandCount,
    LocationSummary,
    Part,
    PartSearchFilters,
    PartUpdate,
    StockStatus,
)

__all__ = [
    # Part entities
    "Part",
    "PartUpdate",
    "PartSearchFilters",
    "StockStatus",
    "BrandCount",
    "LocationSummary",
    # Ledger entities
    "StockMovement",
    "MovementType",
    "MovementFilters",
    "MovementSummary",
    "StockChange",
    "StockChangeResult",
    "INITIAL_STOCK_REFERENCE",
    # Alert entities
    "InventoryAlert",
    "AlertType",
    "AlertFilters",
    "AlertTypeCount",
    # Reporting
    "StockCheckResult",
    "InventoryStatistics",
    "ValueMovementSummary",
    "DailyMovement",
    "TopMovingPart",
]
