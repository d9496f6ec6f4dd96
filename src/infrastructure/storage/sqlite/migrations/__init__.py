"""Versioned SQL migrations for the inventory database."""

from src.infrastructure.storage.sqlite.migrations.migrator import (
    MigrationInfo,
    MigrationResult,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)

__all__ = [
    "MigrationInfo",
    "MigrationResult",
    "initialize_database",
    "get_migration_status",
    "verify_schema_integrity",
]
