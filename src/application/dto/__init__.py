"""Data Transfer Objects for the application layer.

Request DTOs: describe use-case inputs.
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

__all__ = [
    "CreatePartRequest",
    "AddStockRequest",
    "RemoveStockRequest",
    "AdjustStockRequest",
    "ReturnStockRequest",
    "RecordLossRequest",
    "SyncRepairPartRequest",
    "PartSearchRequest",
]
