"""Return Stock Use Case: parts handed back go back on the shelf."""

from src.application.dto.requests import ReturnStockRequest
from src.application.use_cases.base import InventoryUseCase
from src.config import get_logger
from src.core.entities.inventory import MovementType, StockChange, StockChangeResult
from src.core.services.part_validation import (
    require_non_negative,
    require_positive_quantity,
)

logger = get_logger(__name__)


class ReturnStockUseCase(InventoryUseCase):
    """Record a RETURN movement."""

    async def execute(self, request: ReturnStockRequest) -> StockChangeResult:
        require_positive_quantity(request.quantity)
        require_non_negative("unit_cost", request.unit_cost)

        part = await self._load_part(request.part_id)
        current = part.quantity_in_stock

        result = await self._apply(
            StockChange(
                part_id=request.part_id,
                target_quantity=current + request.quantity,
                movement_type=MovementType.RETURN,
                performed_by=request.performed_by,
                notes=request.notes,
                unit_cost=request.unit_cost,
                reference_type=request.reference_type,
                reference_id=request.reference_id,
                expected_quantity=current,
            )
        )

        logger.info(
            "stock_returned",
            part_id=request.part_id,
            quantity=request.quantity,
            new_qty=result.part.quantity_in_stock,
        )
        return result
