"""Update Part Use Case: partial catalogue edit, never touches quantity."""

from src.application.use_cases.base import InventoryUseCase
from src.config import get_logger
from src.core.entities.part import Part, PartUpdate
from src.core.exceptions import (
    DuplicatePartCodeError,
    PartNotFoundError,
    ValidationError,
)
from src.core.services.part_validation import (
    require_text,
    validate_prices,
    validate_stock_levels,
)

logger = get_logger(__name__)

REQUIRED_FIELDS = (
    "part_code",
    "name",
    "unit",
    "min_stock_level",
    "max_stock_level",
    "is_active",
)


class UpdatePartUseCase(InventoryUseCase):
    """Apply a PartUpdate after validating it against the stored part."""

    async def execute(self, part_id: int, changes: PartUpdate) -> Part:
        """
        Execute update part use case.

        Threshold and price rules are checked on the merged result, so
        changing only ``max_stock_level`` is still validated against the
        stored minimum.

        Raises:
            PartNotFoundError: Unknown part.
            DuplicatePartCodeError: Another part already uses the new code.
            ValidationError: The merged values are invalid.
        """
        current = await self._load_part(part_id)
        values = changes.changes()
        if not values:
            return current

        for field_name in REQUIRED_FIELDS:
            if field_name in values and values[field_name] is None:
                raise ValidationError(field_name, "This field cannot be cleared")

        if "name" in values:
            values["name"] = require_text("name", values["name"])
        if "part_code" in values:
            part_code = require_text("part_code", values["part_code"])
            values["part_code"] = part_code
            part_store = await self._get_part_store()
            existing = await part_store.get_part_by_code(part_code)
            if existing is not None and existing.id != part_id:
                raise DuplicatePartCodeError(part_code, existing.id)  # type: ignore[arg-type]

        merged = current.model_copy(update=values)
        validate_prices(merged.purchase_price, merged.selling_price)
        validate_stock_levels(merged.min_stock_level, merged.max_stock_level)

        # Store the trimmed name and code, not the raw input
        changes = changes.model_copy(
            update={k: values[k] for k in ("name", "part_code") if k in values}
        )

        part_store = await self._get_part_store()
        updated = await part_store.update_part(part_id, changes)
        if updated is None:
            raise PartNotFoundError(part_id)

        logger.info("part_update_complete", part_id=part_id, fields=sorted(values))
        return updated
