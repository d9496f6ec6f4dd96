"""Add Stock Use Case: IN movement priced at the delivery's unit cost."""

from src.application.dto.requests import AddStockRequest
from src.application.use_cases.base import InventoryUseCase
from src.config import get_logger
from src.core.entities.inventory import MovementType, StockChange, StockChangeResult
from src.core.exceptions import ValidationError
from src.core.services.part_validation import (
    require_non_negative,
    require_positive_quantity,
)

logger = get_logger(__name__)


class AddStockUseCase(InventoryUseCase):
    """Receive stock for a part."""

    async def execute(self, request: AddStockRequest) -> StockChangeResult:
        """Execute add stock use case."""
        require_positive_quantity(request.quantity)
        if request.unit_cost is None:
            raise ValidationError("unit_cost", "Unit cost is required when adding stock")
        require_non_negative("unit_cost", request.unit_cost)

        logger.info(
            "add_stock_started",
            part_id=request.part_id,
            quantity=request.quantity,
        )

        part = await self._load_part(request.part_id)
        current = part.quantity_in_stock

        result = await self._apply(
            StockChange(
                part_id=request.part_id,
                target_quantity=current + request.quantity,
                movement_type=MovementType.IN,
                performed_by=request.performed_by,
                notes=request.notes,
                unit_cost=request.unit_cost,
                reference_type=request.reference_type,
                reference_id=request.reference_id,
                expected_quantity=current,
            )
        )

        logger.info(
            "add_stock_complete",
            part_id=request.part_id,
            new_qty=result.part.quantity_in_stock,
            total_cost=result.movement.total_cost,
        )
        return result
