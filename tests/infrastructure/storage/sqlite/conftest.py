"""Pytest fixtures for SQLite storage tests."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    mock.inventory.deduplicate_alerts = False
    return mock


@pytest.fixture
def insert_part_sql() -> str:
    return (
        "INSERT INTO parts (part_code, name, quantity_in_stock, min_stock_level, "
        "max_stock_level) VALUES (?, ?, ?, 10, 100)"
    )
