"""Abstract interface for inventory alert storage."""

from abc import ABC, abstractmethod

from src.core.entities.inventory import AlertFilters, AlertTypeCount, InventoryAlert


class IAlertStore(ABC):
    """Interface for reading and acknowledging inventory alerts."""

    @abstractmethod
    async def get_alert(self, alert_id: int) -> InventoryAlert | None:
        """Get alert by ID."""
        pass

    @abstractmethod
    async def list_alerts(self, filters: AlertFilters) -> list[InventoryAlert]:
        """List alerts, newest first."""
        pass

    @abstractmethod
    async def acknowledge(
        self, alert_id: int, acknowledged_by: int
    ) -> InventoryAlert | None:
        """Mark an alert handled. Returns None if the alert is missing."""
        pass

    @abstractmethod
    async def acknowledge_many(self, alert_ids: list[int], acknowledged_by: int) -> int:
        """Acknowledge several alerts. Returns the number of rows updated."""
        pass

    @abstractmethod
    async def acknowledge_by_part(self, part_id: int, acknowledged_by: int) -> int:
        """Acknowledge every open alert of a part."""
        pass

    @abstractmethod
    async def count_unacknowledged(self) -> int:
        pass

    @abstractmethod
    async def count_by_type(self) -> list[AlertTypeCount]:
        pass

    @abstractmethod
    async def delete_acknowledged(self, older_than_days: int) -> int:
        """Purge alerts acknowledged more than N days ago."""
        pass
