"""
Stock Check Service.

Re-runs threshold evaluation over every active part without touching
quantities. Intended for a periodic job; there is no background scheduler.
"""

from __future__ import annotations

from src.config import get_logger
from src.core.entities.inventory import StockCheckResult
from src.core.entities.part import StockStatus
from src.core.interfaces.inventory_store import IStockLedgerStore
from src.core.interfaces.part_store import IPartStore

logger = get_logger(__name__)


class StockCheckService:
    """
    Sweep active parts and record threshold alerts.

    Each part is evaluated in its own transaction. A failure on one part is
    logged and reported in ``failed_parts``; alerts already written for
    earlier parts stay committed.
    """

    def __init__(
        self,
        part_store: IPartStore,
        ledger_store: IStockLedgerStore,
    ) -> None:
        self._part_store = part_store
        self._ledger_store = ledger_store

    async def run(self) -> StockCheckResult:
        parts = await self._part_store.list_active_parts()
        result = StockCheckResult(parts_checked=len(parts))

        for part in parts:
            status = part.stock_status
            if status is StockStatus.OUT_OF_STOCK:
                result.out_of_stock_parts += 1
            elif status is StockStatus.LOW_STOCK:
                result.low_stock_parts += 1
            # low and overstock can only co-occur when min >= max
            if part.quantity_in_stock > part.max_stock_level:
                result.overstock_parts += 1

            try:
                alerts = await self._ledger_store.evaluate_alerts(part.id)  # type: ignore[arg-type]
            except Exception:
                logger.warning(
                    "stock_check_part_failed",
                    part_id=part.id,
                    exc_info=True,
                )
                result.failed_parts.append(part.id)  # type: ignore[arg-type]
                continue

            result.alerts_created += len(alerts)

        logger.info(
            "stock_check_complete",
            parts_checked=result.parts_checked,
            alerts_created=result.alerts_created,
            low_stock=result.low_stock_parts,
            out_of_stock=result.out_of_stock_parts,
            overstock=result.overstock_parts,
            failed=len(result.failed_parts),
        )
        return result
