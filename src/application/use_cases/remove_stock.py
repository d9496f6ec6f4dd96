"""Remove Stock Use Case: OUT movement with balance check."""

from src.application.dto.requests import RemoveStockRequest
from src.application.use_cases.base import InventoryUseCase
from src.config import get_logger
from src.core.entities.inventory import MovementType, StockChange, StockChangeResult
from src.core.exceptions import InsufficientStockError
from src.core.services.part_validation import require_positive_quantity

logger = get_logger(__name__)


class RemoveStockUseCase(InventoryUseCase):
    """Issue stock from a part."""

    async def execute(self, request: RemoveStockRequest) -> StockChangeResult:
        """Execute remove stock use case."""
        require_positive_quantity(request.quantity)

        logger.info(
            "remove_stock_started",
            part_id=request.part_id,
            quantity=request.quantity,
        )

        part = await self._load_part(request.part_id)
        current = part.quantity_in_stock

        # Checked before any write
        if request.quantity > current:
            raise InsufficientStockError(
                part_id=request.part_id,
                requested=request.quantity,
                available=current,
            )

        result = await self._apply(
            StockChange(
                part_id=request.part_id,
                target_quantity=current - request.quantity,
                movement_type=MovementType.OUT,
                performed_by=request.performed_by,
                notes=request.notes,
                reference_type=request.reference_type,
                reference_id=request.reference_id,
                expected_quantity=current,
            )
        )

        logger.info(
            "remove_stock_complete",
            part_id=request.part_id,
            remaining_qty=result.part.quantity_in_stock,
        )
        return result
