"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    SQLiteAlertStore,
    SQLiteInventoryReportStore,
    SQLitePartStore,
    SQLiteStockLedgerStore,
    close_pool,
    get_pool,
)

__all__ = [
    # SQLite stores
    "SQLitePartStore",
    "SQLiteStockLedgerStore",
    "SQLiteAlertStore",
    "SQLiteInventoryReportStore",
    # Connection pool
    "get_pool",
    "close_pool",
]
