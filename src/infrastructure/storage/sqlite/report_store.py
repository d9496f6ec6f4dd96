"""SQLite reporting queries over active parts and the movement ledger."""

from src.config import get_logger
from src.core.entities.inventory import InventoryStatistics
from src.core.interfaces.report_store import IInventoryReportStore
from src.infrastructure.storage.sqlite.connection import ConnectionPool
from src.infrastructure.storage.sqlite.part_store import row_to_part
from src.infrastructure.storage.sqlite.stock_ledger_store import row_to_movement

logger = get_logger(__name__)


class SQLiteInventoryReportStore(IInventoryReportStore):
    """Read-only inventory statistics."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def get_statistics(
        self, recent_limit: int = 10, top_limit: int = 10
    ) -> InventoryStatistics:
        """
        Aggregate the active catalogue.

        Value is quantity times selling price; parts without a price
        contribute nothing.
        """
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT
                    COUNT(*) AS total_parts,
                    COALESCE(SUM(quantity_in_stock * COALESCE(selling_price, 0)), 0) AS total_value,
                    SUM(CASE WHEN quantity_in_stock <= min_stock_level
                             AND quantity_in_stock > 0 THEN 1 ELSE 0 END) AS low_stock_count,
                    SUM(CASE WHEN quantity_in_stock = 0 THEN 1 ELSE 0 END) AS out_of_stock_count,
                    SUM(CASE WHEN quantity_in_stock > max_stock_level THEN 1 ELSE 0 END) AS overstock_count,
                    COUNT(DISTINCT CASE WHEN brand IS NOT NULL AND brand != ''
                                        THEN brand END) AS brands_count,
                    COUNT(DISTINCT CASE WHEN location IS NOT NULL AND location != ''
                                        THEN location END) AS locations_count
                FROM parts
                WHERE is_active = 1
                """
            )
            totals = await cursor.fetchone()

            cursor = await conn.execute(
                """
                SELECT sm.*, p.name AS part_name, p.part_code AS part_code
                FROM stock_movements sm
                JOIN parts p ON sm.part_id = p.id
                ORDER BY sm.created_at DESC, sm.id DESC
                LIMIT ?
                """,
                (recent_limit,),
            )
            recent = [row_to_movement(row) for row in await cursor.fetchall()]

            cursor = await conn.execute(
                """
                SELECT * FROM parts
                WHERE is_active = 1 AND selling_price > 0
                ORDER BY quantity_in_stock * selling_price DESC, name ASC
                LIMIT ?
                """,
                (top_limit,),
            )
            top_value = [row_to_part(row) for row in await cursor.fetchall()]

        stats = InventoryStatistics(
            total_parts=totals["total_parts"],
            total_value=float(totals["total_value"]),
            low_stock_count=totals["low_stock_count"] or 0,
            out_of_stock_count=totals["out_of_stock_count"] or 0,
            overstock_count=totals["overstock_count"] or 0,
            brands_count=totals["brands_count"],
            locations_count=totals["locations_count"],
            recent_movements=recent,
            top_value_parts=top_value,
        )
        logger.debug(
            "inventory_statistics_computed",
            total_parts=stats.total_parts,
            total_value=stats.total_value,
        )
        return stats
