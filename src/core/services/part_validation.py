"""
Input validation for part and stock operations.

All checks raise ValidationError and run before any transaction starts.
"""

from src.core.exceptions import ValidationError


def require_text(field: str, value: str | None) -> str:
    """Reject missing or blank text; returns the stripped value."""
    if value is None or not value.strip():
        raise ValidationError(field, "This field is required", value)
    return value.strip()


def require_positive_quantity(quantity: int, field: str = "quantity") -> None:
    if quantity <= 0:
        raise ValidationError(field, "Quantity must be greater than 0", quantity)


def require_non_negative(field: str, value: float | int | None) -> None:
    """Reject negative numbers; None passes."""
    if value is not None and value < 0:
        raise ValidationError(field, "Value cannot be negative", value)


def validate_stock_levels(min_stock_level: int, max_stock_level: int) -> None:
    """Minimum must be non-negative and strictly below maximum."""
    require_non_negative("min_stock_level", min_stock_level)
    if max_stock_level <= min_stock_level:
        raise ValidationError(
            "max_stock_level",
            "Maximum stock level must be greater than minimum stock level",
            max_stock_level,
        )


def validate_prices(purchase_price: float | None, selling_price: float | None) -> None:
    require_non_negative("purchase_price", purchase_price)
    require_non_negative("selling_price", selling_price)
