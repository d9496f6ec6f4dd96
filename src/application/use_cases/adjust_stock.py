"""Adjust Stock Use Case: set a counted quantity with a mandatory reason."""

from src.application.dto.requests import AdjustStockRequest
from src.application.use_cases.base import InventoryUseCase
from src.config import get_logger
from src.core.entities.inventory import MovementType, StockChange, StockChangeResult
from src.core.services.part_validation import require_non_negative, require_text

logger = get_logger(__name__)


class AdjustStockUseCase(InventoryUseCase):
    """Correct a part's quantity to an absolute value."""

    async def execute(self, request: AdjustStockRequest) -> StockChangeResult:
        """Execute adjust stock use case."""
        require_non_negative("new_quantity", request.new_quantity)
        reason = require_text("reason", request.reason)

        part = await self._load_part(request.part_id)
        current = part.quantity_in_stock

        result = await self._apply(
            StockChange(
                part_id=request.part_id,
                target_quantity=request.new_quantity,
                movement_type=MovementType.ADJUSTMENT,
                performed_by=request.performed_by,
                notes=reason,
                expected_quantity=current,
            )
        )

        logger.info(
            "stock_adjusted",
            part_id=request.part_id,
            previous_qty=current,
            new_qty=request.new_quantity,
            reason=reason,
        )
        return result
