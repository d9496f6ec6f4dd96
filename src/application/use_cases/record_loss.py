"""Record Loss Use Case: write off damaged or missing parts."""

from src.application.dto.requests import RecordLossRequest
from src.application.use_cases.base import InventoryUseCase
from src.config import get_logger
from src.core.entities.inventory import MovementType, StockChange, StockChangeResult
from src.core.exceptions import InsufficientStockError
from src.core.services.part_validation import require_positive_quantity, require_text

logger = get_logger(__name__)


class RecordLossUseCase(InventoryUseCase):
    """Record a LOSS movement."""

    async def execute(self, request: RecordLossRequest) -> StockChangeResult:
        require_positive_quantity(request.quantity)
        reason = require_text("reason", request.reason)

        part = await self._load_part(request.part_id)
        current = part.quantity_in_stock

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
                movement_type=MovementType.LOSS,
                performed_by=request.performed_by,
                notes=reason,
                expected_quantity=current,
            )
        )

        logger.warning(
            "stock_loss_recorded",
            part_id=request.part_id,
            quantity=request.quantity,
            reason=reason,
        )
        return result
