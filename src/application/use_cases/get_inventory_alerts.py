"""Inventory alert queries and housekeeping."""

from src.config import get_logger, get_settings
from src.core.entities.inventory import AlertFilters, AlertTypeCount, InventoryAlert
from src.core.interfaces.alert_store import IAlertStore
from src.core.services.part_validation import require_non_negative

logger = get_logger(__name__)


class GetInventoryAlertsUseCase:
    """List and count inventory alerts."""

    def __init__(self, alert_store: IAlertStore | None = None):
        self._alert_store = alert_store

    async def _get_alert_store(self) -> IAlertStore:
        if self._alert_store is None:
            from src.infrastructure.storage.sqlite import get_alert_store

            self._alert_store = await get_alert_store()
        return self._alert_store

    async def execute(self, filters: AlertFilters | None = None) -> list[InventoryAlert]:
        store = await self._get_alert_store()
        return await store.list_alerts(filters or AlertFilters())

    async def count_unacknowledged(self) -> int:
        store = await self._get_alert_store()
        return await store.count_unacknowledged()

    async def count_by_type(self) -> list[AlertTypeCount]:
        store = await self._get_alert_store()
        return await store.count_by_type()


class PurgeAlertsUseCase:
    """Delete acknowledged alerts past the retention window."""

    def __init__(self, alert_store: IAlertStore | None = None):
        self._alert_store = alert_store

    async def _get_alert_store(self) -> IAlertStore:
        if self._alert_store is None:
            from src.infrastructure.storage.sqlite import get_alert_store

            self._alert_store = await get_alert_store()
        return self._alert_store

    async def execute(self, older_than_days: int | None = None) -> int:
        """
        Purge acknowledged alerts.

        Args:
            older_than_days: Retention window; defaults to
                ``INVENTORY_ALERT_RETENTION_DAYS``.

        Returns:
            Number of alerts deleted.
        """
        if older_than_days is None:
            older_than_days = get_settings().inventory.alert_retention_days
        require_non_negative("older_than_days", older_than_days)

        store = await self._get_alert_store()
        deleted = await store.delete_acknowledged(older_than_days)
        logger.info("alert_purge_complete", older_than_days=older_than_days, deleted=deleted)
        return deleted
