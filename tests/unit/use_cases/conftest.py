"""Mock stores for use case tests."""

from unittest.mock import AsyncMock

import pytest

from src.core.entities.inventory import (
    INITIAL_STOCK_REFERENCE,
    MovementType,
    StockChange,
    StockChangeResult,
    StockMovement,
)
from src.core.entities.part import Part
from src.core.services.stock_alerts import evaluate_stock_thresholds


@pytest.fixture
def stored_part() -> Part:
    return Part(
        id=1,
        part_code="PT001",
        name="Brake pad",
        quantity_in_stock=5,
        min_stock_level=10,
        max_stock_level=100,
        purchase_price=800.0,
        selling_price=1000.0,
    )


@pytest.fixture
def mock_part_store(stored_part):
    store = AsyncMock()
    store.get_part.return_value = stored_part
    store.get_part_by_code.return_value = None
    return store


@pytest.fixture
def mock_ledger_store(stored_part):
    """
    Ledger mock that applies the change to a copy of ``stored_part``.

    ``create_part_with_stock`` returns the given part as ID 1 holding the
    opening quantity.
    """
    store = AsyncMock()

    async def apply(change: StockChange) -> StockChangeResult:
        part = stored_part.model_copy(update={"quantity_in_stock": change.target_quantity})
        delta = change.target_quantity - stored_part.quantity_in_stock
        movement = StockMovement(
            id=1,
            part_id=change.part_id,
            movement_type=change.movement_type,
            quantity=delta,
            unit_cost=change.unit_cost,
            total_cost=abs(delta) * change.unit_cost if change.unit_cost is not None else None,
            reference_type=change.reference_type,
            reference_id=change.reference_id,
            notes=change.notes,
            performed_by=change.performed_by,
        )
        return StockChangeResult(
            part=part,
            movement=movement,
            alerts=evaluate_stock_thresholds(part),
        )

    async def create_with_stock(
        part: Part,
        initial_quantity: int,
        performed_by: int,
        unit_cost: float | None = None,
        notes: str | None = None,
    ) -> StockChangeResult:
        created = part.model_copy(update={"id": 1, "quantity_in_stock": initial_quantity})
        movement = StockMovement(
            id=1,
            part_id=1,
            movement_type=MovementType.IN,
            quantity=initial_quantity,
            unit_cost=unit_cost,
            total_cost=initial_quantity * unit_cost if unit_cost is not None else None,
            reference_type=INITIAL_STOCK_REFERENCE,
            notes=notes,
            performed_by=performed_by,
        )
        return StockChangeResult(
            part=created,
            movement=movement,
            alerts=evaluate_stock_thresholds(created),
        )

    store.apply_stock_change.side_effect = apply
    store.create_part_with_stock.side_effect = create_with_stock
    return store


@pytest.fixture
def applied_change(mock_ledger_store):
    """Return the StockChange passed to the ledger's single apply call."""

    def _applied() -> StockChange:
        mock_ledger_store.apply_stock_change.assert_awaited_once()
        return mock_ledger_store.apply_stock_change.call_args[0][0]

    return _applied
