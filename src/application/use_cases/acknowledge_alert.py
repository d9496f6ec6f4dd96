"""Acknowledge Alert Use Case."""

from src.config import get_logger
from src.core.entities.inventory import InventoryAlert
from src.core.exceptions import AlertNotFoundError
from src.core.interfaces.alert_store import IAlertStore

logger = get_logger(__name__)


class AcknowledgeAlertUseCase:
    """
    Mark inventory alerts as handled.

    Re-acknowledging rewrites the acknowledger and timestamp; concurrent
    acknowledgments are last-writer-wins.
    """

    def __init__(self, alert_store: IAlertStore | None = None):
        self._alert_store = alert_store

    async def _get_alert_store(self) -> IAlertStore:
        if self._alert_store is None:
            from src.infrastructure.storage.sqlite import get_alert_store

            self._alert_store = await get_alert_store()
        return self._alert_store

    async def execute(self, alert_id: int, acknowledged_by: int) -> InventoryAlert:
        """
        Acknowledge one alert.

        Raises:
            AlertNotFoundError: Unknown alert.
        """
        store = await self._get_alert_store()
        alert = await store.acknowledge(alert_id, acknowledged_by)
        if alert is None:
            raise AlertNotFoundError(alert_id)
        return alert

    async def execute_many(self, alert_ids: list[int], acknowledged_by: int) -> int:
        """Acknowledge several alerts; unknown IDs are skipped."""
        store = await self._get_alert_store()
        return await store.acknowledge_many(list(dict.fromkeys(alert_ids)), acknowledged_by)

    async def execute_for_part(self, part_id: int, acknowledged_by: int) -> int:
        """Acknowledge every open alert of a part."""
        store = await self._get_alert_store()
        return await store.acknowledge_by_part(part_id, acknowledged_by)
