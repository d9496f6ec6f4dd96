"""
Create Part Use Case.

Validates the catalogue fields, assigns a part code when none is given and
books any opening quantity through the stock ledger in the same transaction
as the insert, so the movement history reconciles from zero.
"""

import random
import time
from dataclasses import dataclass, field

from src.application.dto.requests import CreatePartRequest
from src.application.use_cases.base import InventoryUseCase
from src.config import get_logger, get_settings
from src.core.entities.inventory import (
    InventoryAlert,
    StockMovement,
)
from src.core.entities.part import Part
from src.core.exceptions import DuplicatePartCodeError, ShopError
from src.core.services.part_validation import (
    require_non_negative,
    require_text,
    validate_prices,
    validate_stock_levels,
)

logger = get_logger(__name__)

MAX_CODE_ATTEMPTS = 10


def generate_part_code(prefix: str) -> str:
    """Prefix + last 6 digits of the millisecond clock + 3 random digits."""
    timestamp = str(int(time.time() * 1000))[-6:]
    suffix = f"{random.randint(0, 999):03d}"
    return f"{prefix}{timestamp}{suffix}"


@dataclass
class CreatePartResult:
    """Result of creating a part."""

    part: Part
    initial_movement: StockMovement | None = None
    alerts: list[InventoryAlert] = field(default_factory=list)


class CreatePartUseCase(InventoryUseCase):
    """Add a part to the catalogue."""

    async def execute(self, request: CreatePartRequest) -> CreatePartResult:
        """Execute create part use case."""
        name = require_text("name", request.name)
        validate_prices(request.purchase_price, request.selling_price)
        require_non_negative("quantity_in_stock", request.quantity_in_stock)
        validate_stock_levels(request.min_stock_level, request.max_stock_level)

        part_store = await self._get_part_store()

        if request.part_code:
            part_code = require_text("part_code", request.part_code)
            existing = await part_store.get_part_by_code(part_code)
            if existing is not None:
                raise DuplicatePartCodeError(part_code, existing.id)  # type: ignore[arg-type]
        else:
            part_code = await self._unique_part_code()

        part = Part(
            part_code=part_code,
            name=name,
            description=request.description,
            brand=request.brand,
            unit=request.unit,
            purchase_price=request.purchase_price,
            selling_price=request.selling_price,
            quantity_in_stock=0,
            min_stock_level=request.min_stock_level,
            max_stock_level=request.max_stock_level,
            location=request.location,
            image_url=request.image_url,
        )

        if request.quantity_in_stock > 0:
            ledger = await self._get_ledger_store()
            change = await ledger.create_part_with_stock(
                part,
                initial_quantity=request.quantity_in_stock,
                performed_by=request.performed_by,
                unit_cost=request.purchase_price or 0.0,
                notes="Initial stock",
            )
            result = CreatePartResult(
                part=change.part,
                initial_movement=change.movement,
                alerts=change.alerts,
            )
        else:
            result = CreatePartResult(part=await part_store.create_part(part))

        logger.info(
            "part_create_complete",
            part_id=result.part.id,
            part_code=result.part.part_code,
            initial_quantity=result.part.quantity_in_stock,
        )
        return result

    async def _unique_part_code(self) -> str:
        prefix = get_settings().inventory.part_code_prefix
        part_store = await self._get_part_store()

        for _ in range(MAX_CODE_ATTEMPTS):
            candidate = generate_part_code(prefix)
            if await part_store.get_part_by_code(candidate) is None:
                return candidate

        raise ShopError(
            "Could not generate a unique part code",
            code="PART_CODE_EXHAUSTED",
            details={"attempts": MAX_CODE_ATTEMPTS},
        )
