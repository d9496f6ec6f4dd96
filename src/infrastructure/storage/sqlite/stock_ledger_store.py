"""
SQLite stock ledger.

Every quantity change goes through ``apply_stock_change`` (or
``create_part_with_stock`` for a new part): the part row, its movement and
any threshold alerts are written by one transaction on one connection, or
not at all.
"""

from datetime import date, datetime
from typing import Any

import aiosqlite

from src.config import get_logger
from src.core.entities.inventory import (
    INITIAL_STOCK_REFERENCE,
    DailyMovement,
    InventoryAlert,
    MovementFilters,
    MovementSummary,
    MovementType,
    StockChange,
    StockChangeResult,
    StockMovement,
    TopMovingPart,
    ValueMovementSummary,
)
from src.core.entities.part import Part
from src.core.exceptions import (
    InsufficientStockError,
    PartNotFoundError,
    StockConflictError,
)
from src.core.interfaces.inventory_store import IStockLedgerStore
from src.core.services.stock_alerts import evaluate_stock_thresholds
from src.infrastructure.storage.sqlite.connection import ConnectionPool
from src.infrastructure.storage.sqlite.part_store import (
    insert_part,
    parse_timestamp,
    row_to_part,
)

logger = get_logger(__name__)

# Report expressions over signed movement quantities; out and loss are stored negative
MOVEMENT_VALUE = "COALESCE(total_cost, ABS(quantity) * unit_cost, 0)"
UNITS_IN = (
    "COALESCE(SUM(CASE WHEN movement_type IN ('in', 'return') THEN quantity ELSE 0 END), 0)"
)
UNITS_OUT = (
    "COALESCE(SUM(CASE WHEN movement_type IN ('out', 'loss') THEN -quantity ELSE 0 END), 0)"
)


def row_to_movement(row: aiosqlite.Row) -> StockMovement:
    """Convert a stock_movements row (optionally joined with parts)."""
    keys = row.keys()
    return StockMovement(
        id=row["id"],
        part_id=row["part_id"],
        movement_type=MovementType(row["movement_type"]),
        quantity=int(row["quantity"]),
        unit_cost=row["unit_cost"],
        total_cost=row["total_cost"],
        reference_type=row["reference_type"],
        reference_id=row["reference_id"],
        notes=row["notes"],
        performed_by=row["performed_by"],
        created_at=parse_timestamp(row["created_at"]) or datetime.utcnow(),
        part_name=row["part_name"] if "part_name" in keys else None,
        part_code=row["part_code"] if "part_code" in keys else None,
    )


class SQLiteStockLedgerStore(IStockLedgerStore):
    """SQLite implementation of the stock ledger."""

    def __init__(self, pool: ConnectionPool, deduplicate_alerts: bool = False):
        self._pool = pool
        self._deduplicate_alerts = deduplicate_alerts

    async def apply_stock_change(self, change: StockChange) -> StockChangeResult:
        """
        Set a part's quantity and record why.

        Runs under ``BEGIN IMMEDIATE`` so the quantity read here is the one
        the delta is computed from.

        Raises:
            PartNotFoundError: No part with ``change.part_id``.
            StockConflictError: ``expected_quantity`` no longer matches.
            InsufficientStockError: ``target_quantity`` is negative.
        """
        async with self._pool.transaction(immediate=True) as conn:
            part = await self._load_part(conn, change.part_id)
            result = await self._apply_on(conn, part, change)

        self._log_change(change, result)
        return result

    async def create_part_with_stock(
        self,
        part: Part,
        initial_quantity: int,
        performed_by: int,
        unit_cost: float | None = None,
        notes: str | None = None,
    ) -> StockChangeResult:
        """
        Insert ``part`` at zero stock and book ``initial_quantity`` as an
        ``in`` movement in the same transaction.

        A failure at any step leaves neither the part nor its movement behind.

        Raises:
            DuplicatePartCodeError: ``part.part_code`` is already taken.
        """
        part.quantity_in_stock = 0
        change = StockChange(
            part_id=0,
            target_quantity=initial_quantity,
            movement_type=MovementType.IN,
            performed_by=performed_by,
            notes=notes,
            unit_cost=unit_cost,
            reference_type=INITIAL_STOCK_REFERENCE,
            expected_quantity=0,
        )

        async with self._pool.transaction(immediate=True) as conn:
            await insert_part(conn, part)
            change.part_id = part.id
            result = await self._apply_on(conn, part, change)

        logger.info("part_created", part_id=part.id, part_code=part.part_code)
        self._log_change(change, result)
        return result

    async def _apply_on(
        self,
        conn: aiosqlite.Connection,
        part: Part,
        change: StockChange,
    ) -> StockChangeResult:
        """Validate and write ``change`` against ``part`` on the caller's connection."""
        current = part.quantity_in_stock

        if (
            change.expected_quantity is not None
            and change.expected_quantity != current
        ):
            raise StockConflictError(
                part_id=change.part_id,
                expected=change.expected_quantity,
                actual=current,
            )

        if change.target_quantity < 0:
            raise InsufficientStockError(
                part_id=change.part_id,
                requested=current - change.target_quantity,
                available=current,
            )

        delta = change.target_quantity - current
        now = datetime.utcnow()

        await conn.execute(
            "UPDATE parts SET quantity_in_stock = ?, updated_at = ? WHERE id = ?",
            (change.target_quantity, now.isoformat(), change.part_id),
        )
        part.quantity_in_stock = change.target_quantity
        part.updated_at = now

        total_cost = None
        if change.unit_cost is not None:
            total_cost = abs(delta) * change.unit_cost

        movement = StockMovement(
            part_id=change.part_id,
            movement_type=change.movement_type,
            quantity=delta,
            unit_cost=change.unit_cost,
            total_cost=total_cost,
            reference_type=change.reference_type,
            reference_id=change.reference_id,
            notes=change.notes,
            performed_by=change.performed_by,
            created_at=now,
            part_name=part.name,
            part_code=part.part_code,
        )
        movement.id = await self._insert_movement(conn, movement)

        alerts = await self._insert_alerts(conn, part, evaluate_stock_thresholds(part))
        return StockChangeResult(part=part, movement=movement, alerts=alerts)

    @staticmethod
    def _log_change(change: StockChange, result: StockChangeResult) -> None:
        logger.info(
            "stock_changed",
            part_id=change.part_id,
            movement_type=change.movement_type.value,
            previous_quantity=result.previous_quantity,
            new_quantity=change.target_quantity,
            delta=result.movement.quantity,
            alerts=len(result.alerts),
        )

    async def evaluate_alerts(self, part_id: int) -> list[InventoryAlert]:
        """Evaluate thresholds against the stored quantity and persist alerts."""
        async with self._pool.transaction(immediate=True) as conn:
            part = await self._load_part(conn, part_id)
            return await self._insert_alerts(conn, part, evaluate_stock_thresholds(part))

    async def get_movements(self, filters: MovementFilters) -> list[StockMovement]:
        query = """
            SELECT sm.*, p.name AS part_name, p.part_code AS part_code
            FROM stock_movements sm
            JOIN parts p ON sm.part_id = p.id
            WHERE 1=1
        """
        params: list[Any] = []

        if filters.part_id is not None:
            query += " AND sm.part_id = ?"
            params.append(filters.part_id)

        if filters.movement_type is not None:
            query += " AND sm.movement_type = ?"
            params.append(filters.movement_type.value)

        if filters.reference_type:
            query += " AND sm.reference_type = ?"
            params.append(filters.reference_type)

        if filters.performed_by is not None:
            query += " AND sm.performed_by = ?"
            params.append(filters.performed_by)

        if filters.date_from:
            query += " AND date(sm.created_at) >= ?"
            params.append(filters.date_from.isoformat())

        if filters.date_to:
            query += " AND date(sm.created_at) <= ?"
            params.append(filters.date_to.isoformat())

        query += " ORDER BY sm.created_at DESC, sm.id DESC"

        if filters.limit is not None:
            query += " LIMIT ? OFFSET ?"
            params.extend([filters.limit, filters.offset])

        async with self._pool.acquire() as conn:
            cursor = await conn.execute(query, tuple(params))
            rows = await cursor.fetchall()
            return [row_to_movement(row) for row in rows]

    async def get_recent_movements(self, limit: int = 20) -> list[StockMovement]:
        return await self.get_movements(MovementFilters(limit=limit))

    async def get_movement_summary(
        self,
        part_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> MovementSummary:
        query = """
            SELECT movement_type, COALESCE(SUM(quantity), 0) AS total
            FROM stock_movements
            WHERE part_id = ?
        """
        params: list[Any] = [part_id]

        if date_from:
            query += " AND date(created_at) >= ?"
            params.append(date_from.isoformat())

        if date_to:
            query += " AND date(created_at) <= ?"
            params.append(date_to.isoformat())

        query += " GROUP BY movement_type"

        async with self._pool.acquire() as conn:
            cursor = await conn.execute(query, tuple(params))
            totals = {row["movement_type"]: int(row["total"]) for row in await cursor.fetchall()}

        return MovementSummary(
            part_id=part_id,
            total_in=totals.get(MovementType.IN.value, 0),
            total_out=totals.get(MovementType.OUT.value, 0),
            total_adjustments=totals.get(MovementType.ADJUSTMENT.value, 0),
            total_losses=totals.get(MovementType.LOSS.value, 0),
            total_returns=totals.get(MovementType.RETURN.value, 0),
            net_movement=sum(totals.values()),
        )

    async def get_value_movements(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> ValueMovementSummary:
        """
        Cost value moved in and out of stock across all parts.

        Receipts and returns count as value in; issues and losses as value
        out. Adjustments are corrections and are left out. A movement without
        ``total_cost`` is valued at ``|quantity| * unit_cost``, or zero.
        """
        query = f"""
            SELECT
                COALESCE(SUM(CASE WHEN movement_type IN ('in', 'return')
                    THEN {MOVEMENT_VALUE} ELSE 0 END), 0) AS value_in,
                COALESCE(SUM(CASE WHEN movement_type IN ('out', 'loss')
                    THEN {MOVEMENT_VALUE} ELSE 0 END), 0) AS value_out
            FROM stock_movements
            WHERE 1=1
        """
        params: list[Any] = []

        if date_from:
            query += " AND date(created_at) >= ?"
            params.append(date_from.isoformat())

        if date_to:
            query += " AND date(created_at) <= ?"
            params.append(date_to.isoformat())

        async with self._pool.acquire() as conn:
            cursor = await conn.execute(query, tuple(params))
            row = await cursor.fetchone()

        value_in = float(row["value_in"])
        value_out = float(row["value_out"])
        return ValueMovementSummary(
            total_value_in=value_in,
            total_value_out=value_out,
            net_value_change=value_in - value_out,
        )

    async def get_daily_movements(self, days: int = 30) -> list[DailyMovement]:
        """Units in and out per day over the last ``days`` days, newest first."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                f"""
                SELECT
                    date(created_at) AS day,
                    {UNITS_IN} AS total_in,
                    {UNITS_OUT} AS total_out
                FROM stock_movements
                WHERE date(created_at) >= date('now', ?)
                GROUP BY date(created_at)
                ORDER BY day DESC
                """,
                (f"-{int(days)} days",),
            )
            rows = await cursor.fetchall()

        return [
            DailyMovement(
                day=date.fromisoformat(row["day"]),
                total_in=int(row["total_in"]),
                total_out=int(row["total_out"]),
                net_movement=int(row["total_in"]) - int(row["total_out"]),
            )
            for row in rows
        ]

    async def get_top_moving_parts(
        self, limit: int = 10, days: int = 30
    ) -> list[TopMovingPart]:
        """Parts ranked by number of movements over the last ``days`` days."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                f"""
                SELECT
                    sm.part_id,
                    p.name AS part_name,
                    p.part_code AS part_code,
                    COUNT(*) AS total_movements,
                    {UNITS_IN} AS total_in,
                    {UNITS_OUT} AS total_out
                FROM stock_movements sm
                JOIN parts p ON sm.part_id = p.id
                WHERE date(sm.created_at) >= date('now', ?)
                GROUP BY sm.part_id, p.name, p.part_code
                ORDER BY total_movements DESC, p.name ASC
                LIMIT ?
                """,
                (f"-{int(days)} days", limit),
            )
            rows = await cursor.fetchall()

        return [
            TopMovingPart(
                part_id=row["part_id"],
                part_name=row["part_name"],
                part_code=row["part_code"],
                total_movements=row["total_movements"],
                total_in=int(row["total_in"]),
                total_out=int(row["total_out"]),
            )
            for row in rows
        ]

    async def _load_part(self, conn: aiosqlite.Connection, part_id: int) -> Part:
        cursor = await conn.execute("SELECT * FROM parts WHERE id = ?", (part_id,))
        row = await cursor.fetchone()
        if row is None:
            raise PartNotFoundError(part_id)
        return row_to_part(row)

    async def _insert_movement(
        self, conn: aiosqlite.Connection, movement: StockMovement
    ) -> int:
        cursor = await conn.execute(
            """
            INSERT INTO stock_movements (
                part_id, movement_type, quantity, unit_cost, total_cost,
                reference_type, reference_id, notes, performed_by, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                movement.part_id,
                movement.movement_type.value,
                movement.quantity,
                movement.unit_cost,
                movement.total_cost,
                movement.reference_type,
                movement.reference_id,
                movement.notes,
                movement.performed_by,
                movement.created_at.isoformat(),
            ),
        )
        return cursor.lastrowid

    async def _insert_alerts(
        self,
        conn: aiosqlite.Connection,
        part: Part,
        alerts: list[InventoryAlert],
    ) -> list[InventoryAlert]:
        """Persist alerts on the caller's connection; returns those written."""
        created: list[InventoryAlert] = []

        for alert in alerts:
            if self._deduplicate_alerts and await self._has_open_alert(conn, alert):
                logger.debug(
                    "alert_suppressed",
                    part_id=alert.part_id,
                    alert_type=alert.alert_type.value,
                )
                continue

            cursor = await conn.execute(
                """
                INSERT INTO inventory_alerts (
                    part_id, alert_type, message, is_acknowledged, created_at
                ) VALUES (?, ?, ?, 0, ?)
                """,
                (
                    alert.part_id,
                    alert.alert_type.value,
                    alert.message,
                    alert.created_at.isoformat(),
                ),
            )
            alert.id = cursor.lastrowid
            alert.part_name = part.name
            alert.part_code = part.part_code
            alert.current_quantity = part.quantity_in_stock
            created.append(alert)

            logger.info(
                "inventory_alert_created",
                alert_id=alert.id,
                part_id=alert.part_id,
                alert_type=alert.alert_type.value,
            )

        return created

    async def _has_open_alert(
        self, conn: aiosqlite.Connection, alert: InventoryAlert
    ) -> bool:
        cursor = await conn.execute(
            """
            SELECT 1 FROM inventory_alerts
            WHERE part_id = ? AND alert_type = ? AND is_acknowledged = 0
            LIMIT 1
            """,
            (alert.part_id, alert.alert_type.value),
        )
        return await cursor.fetchone() is not None
