"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.alert_store import IAlertStore
from src.core.interfaces.inventory_store import IStockLedgerStore
from src.core.interfaces.part_store import IPartStore
from src.core.interfaces.report_store import IInventoryReportStore

__all__ = [
    # Storage interfaces
    "IPartStore",
    "IStockLedgerStore",
    "IAlertStore",
    "IInventoryReportStore",
]
