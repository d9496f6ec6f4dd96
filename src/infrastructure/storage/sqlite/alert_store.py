"""SQLite implementation of inventory alert storage."""

from datetime import datetime, timedelta
from typing import Any

import aiosqlite

from src.config import get_logger
from src.core.entities.inventory import (
    AlertFilters,
    AlertType,
    AlertTypeCount,
    InventoryAlert,
)
from src.core.interfaces.alert_store import IAlertStore
from src.infrastructure.storage.sqlite.connection import ConnectionPool
from src.infrastructure.storage.sqlite.part_store import parse_timestamp

logger = get_logger(__name__)

_ALERT_SELECT = """
    SELECT
        ia.*,
        p.name AS part_name,
        p.part_code AS part_code,
        p.quantity_in_stock AS current_quantity
    FROM inventory_alerts ia
    JOIN parts p ON ia.part_id = p.id
"""


def row_to_alert(row: aiosqlite.Row) -> InventoryAlert:
    """Convert an inventory_alerts row joined with its part."""
    return InventoryAlert(
        id=row["id"],
        part_id=row["part_id"],
        alert_type=AlertType(row["alert_type"]),
        message=row["message"],
        is_acknowledged=bool(row["is_acknowledged"]),
        acknowledged_by=row["acknowledged_by"],
        acknowledged_at=parse_timestamp(row["acknowledged_at"]),
        created_at=parse_timestamp(row["created_at"]) or datetime.utcnow(),
        part_name=row["part_name"],
        part_code=row["part_code"],
        current_quantity=row["current_quantity"],
    )


class SQLiteAlertStore(IAlertStore):
    """SQLite implementation of alert listing and acknowledgment."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def get_alert(self, alert_id: int) -> InventoryAlert | None:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                _ALERT_SELECT + " WHERE ia.id = ?", (alert_id,)
            )
            row = await cursor.fetchone()
            return row_to_alert(row) if row else None

    async def list_alerts(self, filters: AlertFilters) -> list[InventoryAlert]:
        query = _ALERT_SELECT + " WHERE 1=1"
        params: list[Any] = []

        if filters.part_id is not None:
            query += " AND ia.part_id = ?"
            params.append(filters.part_id)

        if filters.alert_type is not None:
            query += " AND ia.alert_type = ?"
            params.append(filters.alert_type.value)

        if filters.is_acknowledged is not None:
            query += " AND ia.is_acknowledged = ?"
            params.append(int(filters.is_acknowledged))

        query += " ORDER BY ia.created_at DESC, ia.id DESC"

        if filters.limit is not None:
            query += " LIMIT ? OFFSET ?"
            params.extend([filters.limit, filters.offset])

        async with self._pool.acquire() as conn:
            cursor = await conn.execute(query, tuple(params))
            rows = await cursor.fetchall()
            return [row_to_alert(row) for row in rows]

    async def acknowledge(
        self, alert_id: int, acknowledged_by: int
    ) -> InventoryAlert | None:
        """
        Mark an alert acknowledged.

        Re-acknowledging overwrites the acknowledger and timestamp.
        """
        async with self._pool.transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE inventory_alerts
                SET is_acknowledged = 1, acknowledged_by = ?, acknowledged_at = ?
                WHERE id = ?
                """,
                (acknowledged_by, datetime.utcnow().isoformat(), alert_id),
            )
            if cursor.rowcount == 0:
                return None
            cursor = await conn.execute(
                _ALERT_SELECT + " WHERE ia.id = ?", (alert_id,)
            )
            row = await cursor.fetchone()

        logger.info(
            "inventory_alert_acknowledged",
            alert_id=alert_id,
            acknowledged_by=acknowledged_by,
        )
        return row_to_alert(row)

    async def acknowledge_many(self, alert_ids: list[int], acknowledged_by: int) -> int:
        if not alert_ids:
            return 0

        placeholders = ", ".join("?" for _ in alert_ids)
        async with self._pool.transaction() as conn:
            cursor = await conn.execute(
                f"""
                UPDATE inventory_alerts
                SET is_acknowledged = 1, acknowledged_by = ?, acknowledged_at = ?
                WHERE id IN ({placeholders})
                """,
                (acknowledged_by, datetime.utcnow().isoformat(), *alert_ids),
            )
            updated = cursor.rowcount

        logger.info(
            "inventory_alerts_acknowledged",
            requested=len(alert_ids),
            updated=updated,
            acknowledged_by=acknowledged_by,
        )
        return updated

    async def acknowledge_by_part(self, part_id: int, acknowledged_by: int) -> int:
        async with self._pool.transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE inventory_alerts
                SET is_acknowledged = 1, acknowledged_by = ?, acknowledged_at = ?
                WHERE part_id = ? AND is_acknowledged = 0
                """,
                (acknowledged_by, datetime.utcnow().isoformat(), part_id),
            )
            updated = cursor.rowcount

        logger.info(
            "part_alerts_acknowledged",
            part_id=part_id,
            updated=updated,
            acknowledged_by=acknowledged_by,
        )
        return updated

    async def count_unacknowledged(self) -> int:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM inventory_alerts WHERE is_acknowledged = 0"
            )
            row = await cursor.fetchone()
            return row[0]

    async def count_by_type(self) -> list[AlertTypeCount]:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT
                    alert_type,
                    COUNT(*) AS total_alerts,
                    SUM(CASE WHEN is_acknowledged = 0 THEN 1 ELSE 0 END) AS unacknowledged_alerts
                FROM inventory_alerts
                GROUP BY alert_type
                ORDER BY total_alerts DESC, alert_type ASC
                """
            )
            rows = await cursor.fetchall()
            return [
                AlertTypeCount(
                    alert_type=AlertType(row["alert_type"]),
                    total_alerts=row["total_alerts"],
                    unacknowledged_alerts=row["unacknowledged_alerts"] or 0,
                )
                for row in rows
            ]

    async def delete_acknowledged(self, older_than_days: int) -> int:
        cutoff = datetime.utcnow() - timedelta(days=older_than_days)
        async with self._pool.transaction() as conn:
            cursor = await conn.execute(
                """
                DELETE FROM inventory_alerts
                WHERE is_acknowledged = 1 AND acknowledged_at < ?
                """,
                (cutoff.isoformat(),),
            )
            deleted = cursor.rowcount

        logger.info(
            "acknowledged_alerts_purged",
            older_than_days=older_than_days,
            deleted=deleted,
        )
        return deleted
