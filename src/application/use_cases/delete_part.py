"""Delete Part Use Case: soft delete, movement history is kept."""

from src.application.use_cases.base import InventoryUseCase
from src.config import get_logger
from src.core.exceptions import PartNotFoundError

logger = get_logger(__name__)


class DeletePartUseCase(InventoryUseCase):
    async def execute(self, part_id: int) -> None:
        part_store = await self._get_part_store()
        if not await part_store.deactivate_part(part_id):
            raise PartNotFoundError(part_id)
        logger.info("part_delete_complete", part_id=part_id)
