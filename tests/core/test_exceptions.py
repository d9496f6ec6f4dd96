"""Unit tests for domain exceptions."""

import pytest

from src.core.exceptions import (
    AlertNotFoundError,
    DuplicatePartCodeError,
    InsufficientStockError,
    NotFoundError,
    PartNotFoundError,
    ShopError,
    StockConflictError,
    StockError,
    StorageError,
    ValidationError,
)


class TestShopError:
    """Tests for base ShopError exception."""

    def test_basic_initialization(self):
        error = ShopError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "ShopError"
        assert error.details == {}

    def test_with_custom_code(self):
        error = ShopError("Error message", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_to_dict(self):
        error = ShopError("Test error", code="TEST_CODE", details={"extra": "info"})

        assert error.to_dict() == {
            "error": "TEST_CODE",
            "message": "Test error",
            "details": {"extra": "info"},
        }


class TestNotFoundErrors:
    def test_part_not_found(self):
        error = PartNotFoundError(12)

        assert isinstance(error, NotFoundError)
        assert isinstance(error, StorageError)
        assert error.code == "PART_NOT_FOUND"
        assert error.details == {"part_id": 12}
        assert "12" in error.message

    def test_alert_not_found(self):
        error = AlertNotFoundError(7)

        assert isinstance(error, NotFoundError)
        assert error.code == "ALERT_NOT_FOUND"
        assert error.details == {"alert_id": 7}


class TestStockErrors:
    def test_insufficient_stock_reports_shortage(self):
        error = InsufficientStockError(part_id=3, requested=10, available=4)

        assert isinstance(error, StockError)
        assert error.code == "INSUFFICIENT_STOCK"
        assert error.shortage == 6
        assert error.details == {
            "part_id": 3,
            "requested": 10,
            "available": 4,
            "shortage": 6,
        }

    def test_stock_conflict(self):
        error = StockConflictError(part_id=3, expected=5, actual=2)

        assert isinstance(error, StorageError)
        assert error.code == "STOCK_CONFLICT"
        assert error.details["actual"] == 2


class TestValidationError:
    def test_details(self):
        error = ValidationError("quantity", "Quantity must be greater than 0", -1)

        assert error.code == "VALIDATION_ERROR"
        assert error.details == {
            "field": "quantity",
            "message": "Quantity must be greater than 0",
            "value": "-1",
        }

    def test_long_values_truncated(self):
        error = ValidationError("notes", "Too long", "x" * 500)
        assert len(error.details["value"]) == 100

    def test_duplicate_part_code(self):
        error = DuplicatePartCodeError("PT001", existing_id=4)

        assert isinstance(error, ValidationError)
        assert error.code == "DUPLICATE_PART_CODE"
        assert error.details["field"] == "part_code"
        assert error.details["existing_id"] == 4

    def test_catchable_as_base(self):
        with pytest.raises(ShopError):
            raise DuplicatePartCodeError("PT001", existing_id=4)
