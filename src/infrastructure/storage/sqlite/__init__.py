"""SQLite storage implementations."""

from src.config import get_settings
from src.infrastructure.storage.sqlite.alert_store import SQLiteAlertStore
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_pool,
)
from src.infrastructure.storage.sqlite.part_store import SQLitePartStore
from src.infrastructure.storage.sqlite.report_store import SQLiteInventoryReportStore
from src.infrastructure.storage.sqlite.stock_ledger_store import SQLiteStockLedgerStore

# Singleton instances
_part_store: SQLitePartStore | None = None
_stock_ledger_store: SQLiteStockLedgerStore | None = None
_alert_store: SQLiteAlertStore | None = None
_report_store: SQLiteInventoryReportStore | None = None


async def get_part_store() -> SQLitePartStore:
    """Get singleton part store instance."""
    global _part_store
    if _part_store is None:
        _part_store = SQLitePartStore(await get_pool())
    return _part_store


async def get_stock_ledger_store() -> SQLiteStockLedgerStore:
    """Get singleton stock ledger instance."""
    global _stock_ledger_store
    if _stock_ledger_store is None:
        _stock_ledger_store = SQLiteStockLedgerStore(
            await get_pool(),
            deduplicate_alerts=get_settings().inventory.deduplicate_alerts,
        )
    return _stock_ledger_store


async def get_alert_store() -> SQLiteAlertStore:
    """Get singleton alert store instance."""
    global _alert_store
    if _alert_store is None:
        _alert_store = SQLiteAlertStore(await get_pool())
    return _alert_store


async def get_report_store() -> SQLiteInventoryReportStore:
    """Get singleton report store instance."""
    global _report_store
    if _report_store is None:
        _report_store = SQLiteInventoryReportStore(await get_pool())
    return _report_store


def reset_stores() -> None:
    """Drop cached store instances (after the pool is closed)."""
    global _part_store, _stock_ledger_store, _alert_store, _report_store
    _part_store = None
    _stock_ledger_store = None
    _alert_store = None
    _report_store = None


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    # Store classes
    "SQLitePartStore",
    "SQLiteStockLedgerStore",
    "SQLiteAlertStore",
    "SQLiteInventoryReportStore",
    # Factory functions
    "get_part_store",
    "get_stock_ledger_store",
    "get_alert_store",
    "get_report_store",
    "reset_stores",
]
