"""Configuration module."""

from src.config.logging import configure_logging, get_logger
from src.config.settings import (
    InventorySettings,
    Settings,
    StorageSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "StorageSettings",
    "InventorySettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]
