"""
Application layer - Use cases and DTOs.

This layer orchestrates business logic by:
1. Defining request DTOs for use-case inputs
2. Implementing use cases that coordinate core services and stores

Use cases are the only entry point for callers such as the repair workflow
and the maintenance CLI.
"""

from src.application.dto.requests import (
    AddStockRequest,
    AdjustStockRequest,
    CreatePartRequest,
    PartSearchRequest,
    RecordLossRequest,
    RemoveStockRequest,
    ReturnStockRequest,
    SyncRepairPartRequest,
)
from src.application.use_cases import (
    AcknowledgeAlertUseCase,
    AddStockUseCase,
    AdjustStockUseCase,
    CreatePartUseCase,
    DeletePartUseCase,
    GetInventoryAlertsUseCase,
    GetInventoryStatisticsUseCase,
    GetPartUseCase,
    GetStockMovementsUseCase,
    PerformStockCheckUseCase,
    PurgeAlertsUseCase,
    RecordLossUseCase,
    RemoveStockUseCase,
    ReturnStockUseCase,
    SearchPartsUseCase,
    SyncRepairPartUseCase,
    UpdatePartUseCase,
)

__all__ = [
    # Request DTOs
    "CreatePartRequest",
    "AddStockRequest",
    "RemoveStockRequest",
    "AdjustStockRequest",
    "ReturnStockRequest",
    "RecordLossRequest",
    "SyncRepairPartRequest",
    "PartSearchRequest",
    # Use Cases
    "CreatePartUseCase",
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
