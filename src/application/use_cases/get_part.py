"""Get Part Use Case."""

from src.application.use_cases.base import InventoryUseCase
from src.core.entities.part import Part


class GetPartUseCase(InventoryUseCase):
    async def execute(self, part_id: int) -> Part:
        """Return the part or raise PartNotFoundError."""
        return await self._load_part(part_id)
