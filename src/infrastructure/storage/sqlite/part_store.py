"""SQLite implementation of part catalogue storage."""

from datetime import datetime
from typing import Any

import aiosqlite

from src.config import get_logger
from src.core.entities.part import (
    BrandCount,
    LocationSummary,
    Part,
    PartSearchFilters,
    PartUpdate,
)
from src.core.exceptions import DuplicatePartCodeError
from src.core.interfaces.part_store import IPartStore
from src.infrastructure.storage.sqlite.connection import ConnectionPool

logger = get_logger(__name__)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a stored ISO timestamp, tolerating NULL and malformed values."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None


def row_to_part(row: aiosqlite.Row) -> Part:
    """Convert a parts row to a Part entity."""
    return Part(
        id=row["id"],
        part_code=row["part_code"],
        name=row["name"],
        description=row["description"],
        brand=row["brand"],
        unit=row["unit"] or "piece",
        purchase_price=row["purchase_price"],
        selling_price=row["selling_price"],
        quantity_in_stock=int(row["quantity_in_stock"]),
        min_stock_level=int(row["min_stock_level"]),
        max_stock_level=int(row["max_stock_level"]),
        location=row["location"],
        image_url=row["image_url"],
        is_active=bool(row["is_active"]),
        created_at=parse_timestamp(row["created_at"]) or datetime.utcnow(),
        updated_at=parse_timestamp(row["updated_at"]) or datetime.utcnow(),
    )


async def insert_part(conn: aiosqlite.Connection, part: Part) -> Part:
    """
    Insert ``part`` on the caller's connection and set its ID and timestamps.

    Raises:
        DuplicatePartCodeError: Another row already holds ``part.part_code``.
    """
    now = datetime.utcnow()
    part.created_at = now
    part.updated_at = now
    try:
        cursor = await conn.execute(
            """
            INSERT INTO parts (
                part_code, name, description, brand, unit,
                purchase_price, selling_price, quantity_in_stock,
                min_stock_level, max_stock_level, location, image_url,
                is_active, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                part.part_code,
                part.name,
                part.description,
                part.brand,
                part.unit,
                part.purchase_price,
                part.selling_price,
                part.quantity_in_stock,
                part.min_stock_level,
                part.max_stock_level,
                part.location,
                part.image_url,
                int(part.is_active),
                part.created_at.isoformat(),
                part.updated_at.isoformat(),
            ),
        )
    except aiosqlite.IntegrityError as e:
        if "parts.part_code" not in str(e):
            raise
        cursor = await conn.execute(
            "SELECT id FROM parts WHERE part_code = ?", (part.part_code,)
        )
        existing = await cursor.fetchone()
        raise DuplicatePartCodeError(part.part_code, existing["id"]) from e

    part.id = cursor.lastrowid
    return part


class SQLitePartStore(IPartStore):
    """SQLite implementation of part persistence."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def create_part(self, part: Part) -> Part:
        """Insert a new part row."""
        async with self._pool.transaction() as conn:
            await insert_part(conn, part)
        logger.info("part_created", part_id=part.id, part_code=part.part_code)
        return part

    async def get_part(self, part_id: int) -> Part | None:
        """Get part by ID."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute("SELECT * FROM parts WHERE id = ?", (part_id,))
            row = await cursor.fetchone()
            return row_to_part(row) if row else None

    async def get_part_by_code(self, part_code: str) -> Part | None:
        """Get part by its unique code."""
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT * FROM parts WHERE part_code = ?", (part_code,)
            )
            row = await cursor.fetchone()
            return row_to_part(row) if row else None

    async def update_part(self, part_id: int, changes: PartUpdate) -> Part | None:
        """Apply the fields set on ``changes``."""
        values = changes.changes()
        if "is_active" in values and values["is_active"] is not None:
            values["is_active"] = int(values["is_active"])
        values["updated_at"] = datetime.utcnow().isoformat()

        # Column names come from PartUpdate's declared fields only
        assignments = ", ".join(f"{column} = ?" for column in values)
        async with self._pool.transaction() as conn:
            cursor = await conn.execute(
                f"UPDATE parts SET {assignments} WHERE id = ?",
                (*values.values(), part_id),
            )
            if cursor.rowcount == 0:
                return None
            cursor = await conn.execute("SELECT * FROM parts WHERE id = ?", (part_id,))
            row = await cursor.fetchone()

        logger.info("part_updated", part_id=part_id, fields=sorted(values))
        return row_to_part(row)

    async def deactivate_part(self, part_id: int) -> bool:
        """Soft-delete a part; its movement history is kept."""
        async with self._pool.transaction() as conn:
            cursor = await conn.execute(
                "UPDATE parts SET is_active = 0, updated_at = ? WHERE id = ?",
                (datetime.utcnow().isoformat(), part_id),
            )
            deactivated = cursor.rowcount > 0
        if deactivated:
            logger.info("part_deactivated", part_id=part_id)
        return deactivated

    async def list_active_parts(self) -> list[Part]:
        return await self._fetch_parts(
            "SELECT * FROM parts WHERE is_active = 1 ORDER BY id"
        )

    async def search(
        self,
        filters: PartSearchFilters,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Part]:
        """Filter active parts, ordered by name."""
        query = "SELECT p.* FROM parts p WHERE p.is_active = 1"
        params: list[Any] = []

        if filters.search:
            query += """
                AND (
                    p.name LIKE ? OR
                    p.description LIKE ? OR
                    p.part_code LIKE ? OR
                    p.brand LIKE ?
                )
            """
            term = f"%{filters.search}%"
            params.extend([term, term, term, term])

        if filters.brand:
            query += " AND p.brand LIKE ?"
            params.append(f"%{filters.brand}%")

        if filters.price_min is not None:
            query += " AND p.selling_price >= ?"
            params.append(filters.price_min)

        if filters.price_max is not None:
            query += " AND p.selling_price <= ?"
            params.append(filters.price_max)

        if filters.in_stock:
            query += " AND p.quantity_in_stock > 0"

        if filters.low_stock:
            query += (
                " AND p.quantity_in_stock <= p.min_stock_level"
                " AND p.quantity_in_stock > 0"
            )

        if filters.out_of_stock:
            query += " AND p.quantity_in_stock = 0"

        if filters.location:
            query += " AND p.location LIKE ?"
            params.append(f"%{filters.location}%")

        query += " ORDER BY p.name ASC, p.id ASC"

        if limit is not None:
            query += " LIMIT ? OFFSET ?"
            params.extend([limit, offset])

        return await self._fetch_parts(query, tuple(params))

    async def find_low_stock(self) -> list[Part]:
        """Most critical first: lowest quantity relative to the minimum."""
        return await self._fetch_parts(
            """
            SELECT * FROM parts
            WHERE is_active = 1
              AND quantity_in_stock <= min_stock_level
              AND quantity_in_stock > 0
            ORDER BY CAST(quantity_in_stock AS REAL) / MAX(min_stock_level, 1) ASC, name ASC
            """
        )

    async def find_out_of_stock(self) -> list[Part]:
        return await self._fetch_parts(
            """
            SELECT * FROM parts
            WHERE is_active = 1 AND quantity_in_stock = 0
            ORDER BY name ASC
            """
        )

    async def find_overstocked(self) -> list[Part]:
        return await self._fetch_parts(
            """
            SELECT * FROM parts
            WHERE is_active = 1 AND quantity_in_stock > max_stock_level
            ORDER BY CAST(quantity_in_stock AS REAL) / MAX(max_stock_level, 1) DESC, name ASC
            """
        )

    async def available_brands(self) -> list[BrandCount]:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT brand, COUNT(*) AS count
                FROM parts
                WHERE is_active = 1 AND brand IS NOT NULL AND brand != ''
                GROUP BY brand
                ORDER BY count DESC, brand ASC
                """
            )
            rows = await cursor.fetchall()
            return [BrandCount(brand=row["brand"], count=row["count"]) for row in rows]

    async def storage_locations(self) -> list[LocationSummary]:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT
                    location,
                    COUNT(*) AS count,
                    COALESCE(SUM(quantity_in_stock * COALESCE(selling_price, 0)), 0) AS total_value
                FROM parts
                WHERE is_active = 1 AND location IS NOT NULL AND location != ''
                GROUP BY location
                ORDER BY total_value DESC, location ASC
                """
            )
            rows = await cursor.fetchall()
            return [
                LocationSummary(
                    location=row["location"],
                    count=row["count"],
                    total_value=float(row["total_value"]),
                )
                for row in rows
            ]

    async def _fetch_parts(self, query: str, params: tuple = ()) -> list[Part]:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [row_to_part(row) for row in rows]
