"""Request DTOs for inventory use cases.

Pydantic v2 models describing use-case inputs. Range and business checks
(positive quantities, threshold ordering) are applied by the use cases so
they surface as ValidationError before any transaction starts.
"""

from pydantic import BaseModel, Field

# --- Parts ---


class CreatePartRequest(BaseModel):
    """Request to add a part to the catalogue."""

    part_code: str | None = Field(
        default=None,
        description="Unique part code (generated when omitted)",
        examples=["PT123456789", "BRK-PAD-01"],
    )
    name: str = Field(..., description="Part name", examples=["Brake pad"])
    description: str | None = Field(default=None, description="Free-text description")
    brand: str | None = Field(default=None, description="Manufacturer or brand")
    unit: str = Field(default="piece", description="Unit of measure")
    purchase_price: float | None = Field(default=None, description="Cost per unit")
    selling_price: float | None = Field(default=None, description="Price per unit")
    quantity_in_stock: int = Field(
        default=0,
        description="Opening quantity, booked as an initial stock movement",
    )
    min_stock_level: int = Field(default=5, description="Low-stock threshold")
    max_stock_level: int = Field(default=100, description="Overstock threshold")
    location: str | None = Field(default=None, description="Storage location")
    image_url: str | None = Field(default=None, description="Image URL")
    performed_by: int = Field(..., description="User creating the part")


# --- Stock ---


class AddStockRequest(BaseModel):
    """Request to receive stock (IN movement)."""

    part_id: int = Field(..., description="Part ID")
    quantity: int = Field(..., description="Quantity to receive")
    unit_cost: float | None = Field(default=None, description="Cost per unit (required)")
    performed_by: int = Field(..., description="User receiving the stock")
    notes: str | None = Field(default=None, description="Additional notes")
    reference_type: str | None = Field(
        default=None, description="Source document type", examples=["purchase_order"]
    )
    reference_id: int | None = Field(default=None, description="Source document ID")


class RemoveStockRequest(BaseModel):
    """Request to issue stock (OUT movement)."""

    part_id: int = Field(..., description="Part ID")
    quantity: int = Field(..., description="Quantity to issue")
    performed_by: int = Field(..., description="User issuing the stock")
    notes: str | None = Field(default=None, description="Additional notes")
    reference_type: str | None = Field(
        default=None, description="Consumer type", examples=["repair"]
    )
    reference_id: int | None = Field(default=None, description="Consumer ID")


class AdjustStockRequest(BaseModel):
    """Request to set a counted quantity (ADJUSTMENT movement)."""

    part_id: int = Field(..., description="Part ID")
    new_quantity: int = Field(..., description="Counted absolute quantity")
    reason: str | None = Field(
        default=None,
        description="Why the quantity is being corrected (required)",
        examples=["damaged in storage", "annual stock count"],
    )
    performed_by: int = Field(..., description="User adjusting the stock")


class ReturnStockRequest(BaseModel):
    """Request to put parts back on the shelf (RETURN movement)."""

    part_id: int = Field(..., description="Part ID")
    quantity: int = Field(..., description="Quantity returned")
    performed_by: int = Field(..., description="User recording the return")
    unit_cost: float | None = Field(default=None, description="Cost per unit")
    notes: str | None = Field(default=None, description="Additional notes")
    reference_type: str | None = Field(default=None, description="Source type")
    reference_id: int | None = Field(default=None, description="Source ID")


class RecordLossRequest(BaseModel):
    """Request to write off damaged or missing parts (LOSS movement)."""

    part_id: int = Field(..., description="Part ID")
    quantity: int = Field(..., description="Quantity lost")
    reason: str | None = Field(default=None, description="What happened (required)")
    performed_by: int = Field(..., description="User recording the loss")


class SyncRepairPartRequest(BaseModel):
    """A repair line's part quantity changed from ``previous_quantity`` to ``new_quantity``."""

    repair_id: int = Field(..., description="Repair ID")
    part_id: int = Field(..., description="Part ID")
    previous_quantity: int = Field(default=0, description="Quantity previously on the repair")
    new_quantity: int = Field(..., description="Quantity now on the repair")
    performed_by: int = Field(..., description="User editing the repair")


# --- Search ---


class PartSearchRequest(BaseModel):
    """Request for part search."""

    search: str | None = Field(
        default=None,
        description="Text matched against name, description, code and brand",
    )
    brand: str | None = Field(default=None, description="Brand substring")
    price_min: float | None = Field(default=None, description="Minimum selling price")
    price_max: float | None = Field(default=None, description="Maximum selling price")
    in_stock: bool = Field(default=False, description="Only parts with quantity > 0")
    low_stock: bool = Field(default=False, description="Only parts at or below minimum")
    out_of_stock: bool = Field(default=False, description="Only parts with quantity 0")
    location: str | None = Field(default=None, description="Location substring")
    limit: int | None = Field(default=None, description="Page size")
    offset: int = Field(default=0, description="Rows to skip")
