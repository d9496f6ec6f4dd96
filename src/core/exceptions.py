"""
Domain exceptions for the parts inventory.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class ShopError(Exception):
    """Base exception for all inventory errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(ShopError):
    """Base exception for storage operations."""

    pass


class NotFoundError(StorageError):
    """Referenced record does not exist."""

    pass


class PartNotFoundError(NotFoundError):
    """Part not found in storage."""

    def __init__(self, part_id: int):
        super().__init__(
            f"Part not found: {part_id}",
            code="PART_NOT_FOUND",
            details={"part_id": part_id},
        )


class AlertNotFoundError(NotFoundError):
    """Inventory alert not found in storage."""

    def __init__(self, alert_id: int):
        super().__init__(
            f"Inventory alert not found: {alert_id}",
            code="ALERT_NOT_FOUND",
            details={"alert_id": alert_id},
        )


class StockConflictError(StorageError):
    """Part quantity changed between validation and write."""

    def __init__(self, part_id: int, expected: int, actual: int):
        super().__init__(
            f"Stock for part {part_id} changed concurrently "
            f"(expected {expected}, found {actual})",
            code="STOCK_CONFLICT",
            details={"part_id": part_id, "expected": expected, "actual": actual},
        )


# Stock Exceptions
class StockError(ShopError):
    """Base exception for stock operations."""

    pass


class InsufficientStockError(StockError):
    """Requested quantity exceeds what is on hand."""

    def __init__(self, part_id: int, requested: int, available: int):
        shortage = requested - available
        super().__init__(
            f"Insufficient stock for part {part_id}: "
            f"requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "part_id": part_id,
                "requested": requested,
                "available": available,
                "shortage": shortage,
            },
        )
        self.shortage = shortage


# Validation Exceptions
class ValidationError(ShopError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class DuplicatePartCodeError(ValidationError):
    """Another part already uses this code."""

    def __init__(self, part_code: str, existing_id: int):
        super().__init__(
            field="part_code",
            message=f"Part with code '{part_code}' already exists",
            value=part_code,
        )
        self.code = "DUPLICATE_PART_CODE"
        self.details["existing_id"] = existing_id
