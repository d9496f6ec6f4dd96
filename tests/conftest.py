"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable, Coroutine, Generator
from pathlib import Path
from typing import Any

import pytest

from src.config import reset_settings
from src.core.entities.part import Part
from src.infrastructure.storage.sqlite.alert_store import SQLiteAlertStore
from src.infrastructure.storage.sqlite.connection import ConnectionPool
from src.infrastructure.storage.sqlite.migrations import initialize_database
from src.infrastructure.storage.sqlite.part_store import SQLitePartStore
from src.infrastructure.storage.sqlite.report_store import SQLiteInventoryReportStore
from src.infrastructure.storage.sqlite.stock_ledger_store import SQLiteStockLedgerStore


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """Isolate settings from the developer's environment and data directory."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def migrated_db(temp_db_path: Path) -> Path:
    """Temporary database with the real schema applied."""
    await initialize_database(temp_db_path, create_backup_before=False)
    return temp_db_path


@pytest.fixture
async def pool(migrated_db: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Connection pool over the migrated database."""
    pool = ConnectionPool(migrated_db, pool_size=2, busy_timeout=5000)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def part_store(pool: ConnectionPool) -> SQLitePartStore:
    return SQLitePartStore(pool)


@pytest.fixture
def ledger_store(pool: ConnectionPool) -> SQLiteStockLedgerStore:
    return SQLiteStockLedgerStore(pool)


@pytest.fixture
def alert_store(pool: ConnectionPool) -> SQLiteAlertStore:
    return SQLiteAlertStore(pool)


@pytest.fixture
def report_store(pool: ConnectionPool) -> SQLiteInventoryReportStore:
    return SQLiteInventoryReportStore(pool)


PartFactory = Callable[..., Coroutine[Any, Any, Part]]


@pytest.fixture
def make_part(part_store: SQLitePartStore) -> PartFactory:
    """Insert a part row directly, bypassing the ledger."""
    counter = {"n": 0}

    async def _make(**overrides: Any) -> Part:
        counter["n"] += 1
        fields: dict[str, Any] = {
            "part_code": f"PT-TEST-{counter['n']:03d}",
            "name": f"Test part {counter['n']}",
            "brand": "Bosch",
            "purchase_price": 600.0,
            "selling_price": 1000.0,
            "quantity_in_stock": 0,
            "min_stock_level": 10,
            "max_stock_level": 100,
            "location": "Shelf A1",
        }
        fields.update(overrides)
        return await part_store.create_part(Part(**fields))

    return _make


@pytest.fixture
def sample_part() -> Part:
    """Unsaved part with min=10, max=100."""
    return Part(
        id=1,
        part_code="PT001",
        name="Brake pad",
        brand="Brembo",
        purchase_price=600.0,
        selling_price=1000.0,
        quantity_in_stock=15,
        min_stock_level=10,
        max_stock_level=100,
        location="Shelf A1",
    )
