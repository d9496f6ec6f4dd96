"""
Sync Repair Part Use Case.

Keeps stock in step with a repair's parts list: a larger quantity on the
repair consumes stock (OUT), a smaller one puts the difference back (RETURN).
Both movements reference the repair.
"""

from src.application.dto.requests import SyncRepairPartRequest
from src.application.use_cases.base import InventoryUseCase
from src.config import get_logger
from src.core.entities.inventory import MovementType, StockChange, StockChangeResult
from src.core.exceptions import InsufficientStockError
from src.core.services.part_validation import require_non_negative

logger = get_logger(__name__)

REPAIR_REFERENCE = "repair"


class SyncRepairPartUseCase(InventoryUseCase):
    """Apply the stock effect of a repair line quantity change."""

    async def execute(self, request: SyncRepairPartRequest) -> StockChangeResult | None:
        """
        Execute the sync.

        Returns:
            The ledger result, or None when the quantity did not change.
        """
        require_non_negative("previous_quantity", request.previous_quantity)
        require_non_negative("new_quantity", request.new_quantity)

        difference = request.new_quantity - request.previous_quantity
        if difference == 0:
            return None

        part = await self._load_part(request.part_id)
        current = part.quantity_in_stock

        if difference > 0:
            if difference > current:
                raise InsufficientStockError(
                    part_id=request.part_id,
                    requested=difference,
                    available=current,
                )
            movement_type = MovementType.OUT
            notes = f"Used in repair #{request.repair_id}"
        else:
            movement_type = MovementType.RETURN
            notes = f"Returned from repair #{request.repair_id}"

        result = await self._apply(
            StockChange(
                part_id=request.part_id,
                target_quantity=current - difference,
                movement_type=movement_type,
                performed_by=request.performed_by,
                notes=notes,
                reference_type=REPAIR_REFERENCE,
                reference_id=request.repair_id,
                expected_quantity=current,
            )
        )

        logger.info(
            "repair_part_synced",
            repair_id=request.repair_id,
            part_id=request.part_id,
            movement_type=movement_type.value,
            difference=difference,
        )
        return result
