"""
Versioned schema migrations for the inventory database.

Migration files live next to this module and are named ``vNNN_name.sql``.
Each applied file is recorded in ``schema_migrations`` with a checksum of its
contents. An existing database file is copied aside before migrating and put
back if migrating raises.
"""

import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

import aiosqlite

from src.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
MIGRATION_FILENAME = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = (
    "parts",
    "stock_movements",
    "inventory_alerts",
    "schema_migrations",
)


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


@dataclass
class MigrationInfo:
    """A migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = MIGRATION_FILENAME.fullmatch(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")
        version, name = match.groups()
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(version=version, name=name, path=path, checksum=digest[:16])


@dataclass
class MigrationResult:
    """Outcome of applying one migration."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied version -> checksum; empty before the first migration."""
    try:
        cursor = await conn.execute(
            "SELECT version, checksum FROM schema_migrations ORDER BY version"
        )
    except aiosqlite.OperationalError:
        return {}
    return {version: checksum for version, checksum in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await get_applied_migrations(conn)
    return max(applied) if applied else None


def discover_migrations(migrations_dir: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration files in ``migrations_dir``, ordered by version."""
    found = []
    for path in migrations_dir.glob("v*.sql"):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("migration_file_ignored", path=str(path), error=str(e))
    return sorted(found, key=lambda m: int(m.version))


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: MigrationInfo,
) -> MigrationResult:
    """Run one migration script and record it; failures are returned, not raised."""
    logger.info("migration_started", version=migration.version, name=migration.name)
    started = time.perf_counter()

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        await conn.execute(
            """
            INSERT OR REPLACE INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, _elapsed_ms(started)),
        )
        await conn.commit()
    except (aiosqlite.Error, OSError) as e:
        await conn.rollback()
        logger.error(
            "migration_failed",
            version=migration.version,
            name=migration.name,
            error=str(e),
        )
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=_elapsed_ms(started),
            error=str(e),
        )

    result = MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=_elapsed_ms(started),
    )
    logger.info(
        "migration_applied",
        version=result.version,
        execution_time_ms=result.execution_time_ms,
    )
    return result


async def check_foreign_keys(conn: aiosqlite.Connection) -> int:
    """Count rows that violate a foreign key."""
    cursor = await conn.execute("PRAGMA foreign_key_check")
    return len(await cursor.fetchall())


def create_backup(db_path: Path) -> Path:
    """Copy the database file to ``<name>.backup_<timestamp>.db``."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_suffix(f".backup_{stamp}.db")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.warning("database_restored_from_backup", backup_path=str(backup_path))


async def _apply_pending(conn: aiosqlite.Connection) -> list[MigrationResult]:
    """Apply unapplied migrations in order, stopping at the first failure."""
    applied = await get_applied_migrations(conn)
    results: list[MigrationResult] = []

    for migration in discover_migrations():
        recorded = applied.get(migration.version)
        if recorded is not None:
            if recorded != migration.checksum:
                logger.warning("migration_checksum_changed", version=migration.version)
            continue

        result = await apply_migration(conn, migration)
        results.append(result)
        if not result.success:
            break

        violations = await check_foreign_keys(conn)
        if violations:
            logger.error(
                "migration_left_foreign_key_violations",
                version=migration.version,
                violations=violations,
            )
            break

    return results


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Bring the database schema up to date.

    Args:
        db_path: Database file; defaults to ``STORAGE_DATA_DIR/STORAGE_DB_NAME``.
        create_backup_before: Copy an existing file aside first.

    Returns:
        One result per migration attempted; empty when already up to date.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("database_migration_started", db_path=str(db_path))

    backup_path = create_backup(db_path) if create_backup_before and db_path.exists() else None

    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA foreign_keys=ON")
            results = await _apply_pending(conn)
    except Exception:
        logger.exception("database_migration_failed", db_path=str(db_path))
        if backup_path is not None:
            restore_backup(db_path, backup_path)
        raise

    if backup_path is not None and all(r.success for r in results):
        backup_path.unlink()

    return results


async def get_migration_status(db_path: Path | None = None) -> dict[str, Any]:
    """Current version plus applied and pending migration versions."""
    db_path = db_path or get_settings().storage.db_path
    available = [m.version for m in discover_migrations()]

    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": available,
        }

    async with aiosqlite.connect(db_path) as conn:
        applied = await get_applied_migrations(conn)

    return {
        "exists": True,
        "current_version": max(applied) if applied else None,
        "applied_migrations": list(applied),
        "pending_migrations": [v for v in available if v not in applied],
        "total_migrations": len(available),
    }


def _check(name: str, passed: bool, **info: Any) -> dict[str, Any]:
    return {"check": name, "status": "PASS" if passed else "FAIL", **info}


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict[str, Any]]:
    """Foreign key, SQLite integrity and required-table checks."""
    db_path = db_path or get_settings().storage.db_path

    async with aiosqlite.connect(db_path) as conn:
        violations = await check_foreign_keys(conn)

        cursor = await conn.execute("PRAGMA integrity_check")
        (integrity,) = await cursor.fetchone()

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        tables = {name for (name,) in await cursor.fetchall()}

    missing = [t for t in REQUIRED_TABLES if t not in tables]
    return [
        _check("foreign_keys", violations == 0, violations=violations),
        _check("integrity", integrity == "ok", result=integrity),
        _check("required_tables", not missing, missing=missing),
    ]
