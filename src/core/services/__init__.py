"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from src.core.services.part_validation import (
    require_non_negative,
    require_positive_quantity,
    require_text,
    validate_prices,
    validate_stock_levels,
)
from src.core.services.stock_alerts import evaluate_stock_thresholds
from src.core.services.stock_check import StockCheckService

__all__ = [
    "evaluate_stock_thresholds",
    "StockCheckService",
    "require_text",
    "require_positive_quantity",
    "require_non_negative",
    "validate_stock_levels",
    "validate_prices",
]
