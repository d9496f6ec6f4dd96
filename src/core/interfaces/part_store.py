"""Abstract interface for part catalogue storage."""

from abc import ABC, abstractmethod

from src.core.entities.part import (
    BrandCount,
    LocationSummary,
    Part,
    PartSearchFilters,
    PartUpdate,
)


class IPartStore(ABC):
    """Interface for part persistence and part listings."""

    @abstractmethod
    async def create_part(self, part: Part) -> Part:
        """Insert a new part row."""
        pass

    @abstractmethod
    async def get_part(self, part_id: int) -> Part | None:
        """Get part by ID."""
        pass

    @abstractmethod
    async def get_part_by_code(self, part_code: str) -> Part | None:
        """Get part by its unique code."""
        pass

    @abstractmethod
    async def update_part(self, part_id: int, changes: PartUpdate) -> Part | None:
        """Apply a partial catalogue update. Returns None if the part is missing."""
        pass

    @abstractmethod
    async def deactivate_part(self, part_id: int) -> bool:
        """Soft-delete a part. Returns False if the part is missing."""
        pass

    @abstractmethod
    async def list_active_parts(self) -> list[Part]:
        """All active parts ordered by ID."""
        pass

    @abstractmethod
    async def search(
        self,
        filters: PartSearchFilters,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Part]:
        """Filter active parts, ordered by name."""
        pass

    @abstractmethod
    async def find_low_stock(self) -> list[Part]:
        """Active parts at or below minimum but not empty."""
        pass

    @abstractmethod
    async def find_out_of_stock(self) -> list[Part]:
        """Active parts with zero quantity."""
        pass

    @abstractmethod
    async def find_overstocked(self) -> list[Part]:
        """Active parts above their maximum level."""
        pass

    @abstractmethod
    async def available_brands(self) -> list[BrandCount]:
        """Brands of active parts with part counts."""
        pass

    @abstractmethod
    async def storage_locations(self) -> list[LocationSummary]:
        """Storage locations of active parts with counts and stock value."""
        pass
