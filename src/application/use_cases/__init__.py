"""Application use cases."""

from src.application.use_cases.acknowledge_alert import AcknowledgeAlertUseCase
from src.application.use_cases.add_stock import AddStockUseCase
from src.application.use_cases.adjust_stock import AdjustStockUseCase
from src.application.use_cases.create_part import CreatePartResult, CreatePartUseCase
from src.application.use_cases.delete_part import DeletePartUseCase
from src.application.use_cases.get_inventory_alerts import (
    GetInventoryAlertsUseCase,
    PurgeAlertsUseCase,
)
from src.application.use_cases.get_inventory_statistics import (
    GetInventoryStatisticsUseCase,
)
from src.application.use_cases.get_part import GetPartUseCase
from src.application.use_cases.get_stock_movements import GetStockMovementsUseCase
from src.application.use_cases.perform_stock_check import PerformStockCheckUseCase
from src.application.use_cases.record_loss import RecordLossUseCase
from src.application.use_cases.remove_stock import RemoveStockUseCase
from src.application.use_cases.return_stock import ReturnStockUseCase
from src.application.use_cases.search_parts import SearchPartsUseCase
from src.application.use_cases.sync_repair_part import SyncRepairPartUseCase
from src.application.use_cases.update_part import UpdatePartUseCase

__all__ = [
    "CreatePartUseCase",
    "CreatePartResult",
    "UpdatePartUseCase",
    "DeletePartUseCase",
    "GetPartUseCase",
    "AddStockUseCase",
    "RemoveStockUseCase",
    "AdjustStockUseCase",
    "ReturnStockUseCase",
    "RecordLossUseCase",
    "SyncRepairPartUseCase",
    "GetStockMovementsUseCase",
    "PerformStockCheckUseCase",
    "AcknowledgeAlertUseCase",
    "GetInventoryAlertsUseCase",
    "PurgeAlertsUseCase",
    "SearchPartsUseCase",
    "GetInventoryStatisticsUseCase",
]
