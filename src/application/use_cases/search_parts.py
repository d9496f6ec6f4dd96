"""Search Parts Use Case: filtered listing and stock-state views."""

from src.application.dto.requests import PartSearchRequest
from src.application.use_cases.base import InventoryUseCase
from src.config import get_logger
from src.core.entities.part import BrandCount, LocationSummary, Part, PartSearchFilters
from src.core.exceptions import ValidationError
from src.core.services.part_validation import require_non_negative

logger = get_logger(__name__)


class SearchPartsUseCase(InventoryUseCase):
    """Read-only part listings."""

    async def execute(self, request: PartSearchRequest) -> list[Part]:
        """Execute search parts use case."""
        require_non_negative("price_min", request.price_min)
        require_non_negative("price_max", request.price_max)
        require_non_negative("offset", request.offset)
        if request.limit is not None and request.limit <= 0:
            raise ValidationError("limit", "Limit must be greater than 0", request.limit)
        if (
            request.price_min is not None
            and request.price_max is not None
            and request.price_min > request.price_max
        ):
            raise ValidationError(
                "price_max",
                "Maximum price must not be below minimum price",
                request.price_max,
            )

        filters = PartSearchFilters(
            search=request.search,
            brand=request.brand,
            price_min=request.price_min,
            price_max=request.price_max,
            in_stock=request.in_stock,
            low_stock=request.low_stock,
            out_of_stock=request.out_of_stock,
            location=request.location,
        )

        part_store = await self._get_part_store()
        parts = await part_store.search(filters, limit=request.limit, offset=request.offset)

        logger.debug("parts_searched", search=request.search, results=len(parts))
        return parts

    async def low_stock(self) -> list[Part]:
        part_store = await self._get_part_store()
        return await part_store.find_low_stock()

    async def out_of_stock(self) -> list[Part]:
        part_store = await self._get_part_store()
        return await part_store.find_out_of_stock()

    async def overstocked(self) -> list[Part]:
        part_store = await self._get_part_store()
        return await part_store.find_overstocked()

    async def brands(self) -> list[BrandCount]:
        part_store = await self._get_part_store()
        return await part_store.available_brands()

    async def locations(self) -> list[LocationSummary]:
        part_store = await self._get_part_store()
        return await part_store.storage_locations()
