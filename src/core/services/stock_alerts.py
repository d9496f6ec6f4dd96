"""
Stock threshold rules.

Pure functions: given a part and a quantity, decide which alerts fire.
Persisting them is the ledger store's job.
"""

from src.core.entities.inventory import AlertType, InventoryAlert
from src.core.entities.part import Part


def evaluate_stock_thresholds(
    part: Part, quantity: int | None = None
) -> list[InventoryAlert]:
    """
    Build the alerts a part's quantity triggers.

    ``out_of_stock`` and ``low_stock`` are mutually exclusive; ``overstock``
    is checked independently of both.

    Args:
        part: The part, with thresholds and an ID.
        quantity: Quantity to evaluate; defaults to the part's stored quantity.

    Returns:
        Fresh, unacknowledged alerts in evaluation order.
    """
    if quantity is None:
        quantity = part.quantity_in_stock

    label = f"Part {part.name} ({part.part_code})"
    alerts: list[InventoryAlert] = []

    if quantity == 0:
        alerts.append(
            InventoryAlert(
                part_id=part.id,  # type: ignore[arg-type]
                alert_type=AlertType.OUT_OF_STOCK,
                message=f"{label} is out of stock",
            )
        )
    elif quantity <= part.min_stock_level:
        alerts.append(
            InventoryAlert(
                part_id=part.id,  # type: ignore[arg-type]
                alert_type=AlertType.LOW_STOCK,
                message=(
                    f"{label} is running low ({quantity} remaining, "
                    f"minimum: {part.min_stock_level})"
                ),
            )
        )

    if quantity > part.max_stock_level:
        alerts.append(
            InventoryAlert(
                part_id=part.id,  # type: ignore[arg-type]
                alert_type=AlertType.OVERSTOCK,
                message=(
                    f"{label} is overstocked ({quantity} in stock, "
                    f"maximum: {part.max_stock_level})"
                ),
            )
        )

    return alerts
