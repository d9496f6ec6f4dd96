"""Inventory domain entities."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field

from src.core.entities.part import Part

# reference_type of the movement that books a new part's opening quantity
INITIAL_STOCK_REFERENCE = "initial_stock"


class MovementType(str, Enum):
    """Why a part's quantity changed."""

    IN = "in"
    OUT = "out"
    ADJUSTMENT = "adjustment"
    LOSS = "loss"
    RETURN = "return"


class AlertType(str, Enum):
    """Threshold conditions that raise an inventory alert."""

    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"
    OVERSTOCK = "overstock"
    EXPIRING = "expiring"


class StockMovement(BaseModel):
    """Append-only record of a single signed quantity change."""

    id: int | None = None
    part_id: int  # FK → parts.id
    movement_type: MovementType
    quantity: int  # signed delta
    unit_cost: float | None = None
    total_cost: float | None = None
    reference_type: str | None = None  # e.g. "repair", "initial_stock"
    reference_id: int | None = None
    notes: str | None = None
    performed_by: int
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Joined from parts on read
    part_name: str | None = None
    part_code: str | None = None


class InventoryAlert(BaseModel):
    """Notice that a part crossed one of its stock thresholds."""

    id: int | None = None
    part_id: int  # FK → parts.id
    alert_type: AlertType
    message: str
    is_acknowledged: bool = False
    acknowledged_by: int | None = None
    acknowledged_at: datetime | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Joined from parts on read
    part_name: str | None = None
    part_code: str | None = None
    current_quantity: int | None = None


@dataclass
class StockChange:
    """Input of the stock mutation: move a part to an absolute quantity."""

    part_id: int
    target_quantity: int
    movement_type: MovementType
    performed_by: int
    notes: str | None = None
    unit_cost: float | None = None
    reference_type: str | None = None
    reference_id: int | None = None
    # Quantity the caller validated against; None skips the conflict check
    expected_quantity: int | None = None


@dataclass
class StockChangeResult:
    """Everything written by one stock mutation."""

    part: Part
    movement: StockMovement
    alerts: list[InventoryAlert] = field(default_factory=list)

    @property
    def previous_quantity(self) -> int:
        return self.part.quantity_in_stock - self.movement.quantity


class MovementFilters(BaseModel):
    """Filters for the movement history listing."""

    part_id: int | None = None
    movement_type: MovementType | None = None
    date_from: date | None = None
    date_to: date | None = None
    reference_type: str | None = None
    performed_by: int | None = None
    limit: int | None = None
    offset: int = 0


class AlertFilters(BaseModel):
    """Filters for the alert listing."""

    part_id: int | None = None
    alert_type: AlertType | None = None
    is_acknowledged: bool | None = None
    limit: int | None = None
    offset: int = 0


class MovementSummary(BaseModel):
    """Per-type totals of a part's signed movement deltas."""

    part_id: int
    total_in: int = 0
    total_out: int = 0
    total_adjustments: int = 0
    total_losses: int = 0
    total_returns: int = 0
    net_movement: int = 0


class ValueMovementSummary(BaseModel):
    """Cost value of stock received (in, return) versus issued (out, loss)."""

    total_value_in: float = 0.0
    total_value_out: float = 0.0
    net_value_change: float = 0.0


class DailyMovement(BaseModel):
    """Units received and issued on one calendar day; out is positive."""

    day: date
    total_in: int = 0
    total_out: int = 0
    net_movement: int = 0


class TopMovingPart(BaseModel):
    part_id: int
    part_name: str
    part_code: str
    total_movements: int
    total_in: int = 0
    total_out: int = 0


class AlertTypeCount(BaseModel):
    alert_type: AlertType
    total_alerts: int
    unacknowledged_alerts: int


class StockCheckResult(BaseModel):
    """Outcome of a stock check sweep."""

    parts_checked: int = 0
    alerts_created: int = 0
    low_stock_parts: int = 0
    out_of_stock_parts: int = 0
    overstock_parts: int = 0
    failed_parts: list[int] = Field(default_factory=list)


class InventoryStatistics(BaseModel):
    """Aggregate view of active stock."""

    total_parts: int = 0
    total_value: float = 0.0
    low_stock_count: int = 0
    out_of_stock_count: int = 0
    overstock_count: int = 0
    brands_count: int = 0
    locations_count: int = 0
    recent_movements: list[StockMovement] = Field(default_factory=list)
    top_value_parts: list[Part] = Field(default_factory=list)
