"""Part catalogue entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class StockStatus(str, Enum):
    """Where a part's quantity sits relative to its thresholds."""

    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    NORMAL = "normal"
    OVERSTOCK = "overstock"


class Part(BaseModel):
    """A stocked item consumed by repairs."""

    id: int | None = None
    part_code: str
    name: str
    description: str | None = None
    brand: str | None = None
    unit: str = "piece"
    purchase_price: float | None = None
    selling_price: float | None = None
    quantity_in_stock: int = 0  # only changed through the stock ledger
    min_stock_level: int = 5
    max_stock_level: int = 100
    location: str | None = None
    image_url: str | None = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def stock_status(self) -> StockStatus:
        if self.quantity_in_stock == 0:
            return StockStatus.OUT_OF_STOCK
        if self.quantity_in_stock <= self.min_stock_level:
            return StockStatus.LOW_STOCK
        if self.quantity_in_stock > self.max_stock_level:
            return StockStatus.OVERSTOCK
        return StockStatus.NORMAL

    @property
    def total_value(self) -> float:
        """Stock value at selling price."""
        return self.quantity_in_stock * (self.selling_price or 0.0)


class PartUpdate(BaseModel):
    """
    Partial update of a part's catalogue fields.

    Only fields explicitly set are written. There is no
    ``quantity_in_stock`` field: stock moves through the ledger only.
    """

    part_code: str | None = None
    name: str | None = None
    description: str | None = None
    brand: str | None = None
    unit: str | None = None
    purchase_price: float | None = None
    selling_price: float | None = None
    min_stock_level: int | None = None
    max_stock_level: int | None = None
    location: str | None = None
    image_url: str | None = None
    is_active: bool | None = None

    def changes(self) -> dict:
        """Return only the fields the caller set."""
        return self.model_dump(exclude_unset=True)


class PartSearchFilters(BaseModel):
    """Filters for part search. All conditions are ANDed."""

    search: str | None = None  # name, description, code or brand
    brand: str | None = None
    price_min: float | None = None
    price_max: float | None = None
    in_stock: bool = False
    low_stock: bool = False
    out_of_stock: bool = False
    location: str | None = None


class BrandCount(BaseModel):
    brand: str
    count: int


class LocationSummary(BaseModel):
    location: str
    count: int
    total_value: float
