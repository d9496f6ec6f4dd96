#!/usr/bin/env python3
"""
Parts inventory management CLI.

Usage:
    python manage.py migrate         Apply pending database migrations
    python manage.py status          Show migration state and schema checks
    python manage.py stock-check     Re-evaluate stock thresholds for all parts
    python manage.py purge-alerts    Delete old acknowledged alerts
"""

import argparse
import asyncio
import sys
from pathlib import Path

from src.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


async def _shutdown() -> None:
    from src.infrastructure.storage.sqlite import close_pool, reset_stores

    await close_pool()
    reset_stores()


async def _migrate(db_path: Path | None, backup: bool) -> int:
    from src.infrastructure.storage.sqlite.migrations import initialize_database

    results = await initialize_database(db_path, create_backup_before=backup)
    if not results:
        print("Database is up to date.")
        return 0

    for result in results:
        state = "ok" if result.success else f"FAILED: {result.error}"
        print(f"  v{result.version} {result.name} ({result.execution_time_ms} ms) {state}")

    return 0 if all(r.success for r in results) else 1


async def _status(db_path: Path | None) -> int:
    from src.infrastructure.storage.sqlite.migrations import (
        get_migration_status,
        verify_schema_integrity,
    )

    status = await get_migration_status(db_path)
    if not status["exists"]:
        print("Database does not exist. Run 'migrate' first.")
        return 1

    print(f"Current version: {status['current_version']}")
    print(f"Applied: {', '.join(status['applied_migrations']) or '-'}")
    print(f"Pending: {', '.join(status['pending_migrations']) or '-'}")

    failed = False
    for check in await verify_schema_integrity(db_path):
        print(f"  {check['check']}: {check['status']}")
        failed = failed or check["status"] != "PASS"
    return 1 if failed else 0


async def _stock_check() -> int:
    from src.application.use_cases import PerformStockCheckUseCase

    try:
        result = await PerformStockCheckUseCase().execute()
    finally:
        await _shutdown()

    print(f"Parts checked:  {result.parts_checked}")
    print(f"Alerts created: {result.alerts_created}")
    print(f"Low stock:      {result.low_stock_parts}")
    print(f"Out of stock:   {result.out_of_stock_parts}")
    print(f"Overstock:      {result.overstock_parts}")
    if result.failed_parts:
        print(f"Failed parts:   {', '.join(str(p) for p in result.failed_parts)}")
        return 1
    return 0


async def _purge_alerts(days: int | None) -> int:
    from src.application.use_cases import PurgeAlertsUseCase

    try:
        deleted = await PurgeAlertsUseCase().execute(days)
    finally:
        await _shutdown()

    print(f"Deleted {deleted} acknowledged alert(s).")
    return 0


def cmd_migrate(args: argparse.Namespace) -> int:
    """Apply pending migrations."""
    return asyncio.run(_migrate(args.db, backup=not args.no_backup))


def cmd_status(args: argparse.Namespace) -> int:
    """Print migration state and schema checks."""
    return asyncio.run(_status(args.db))


def cmd_stock_check(args: argparse.Namespace) -> int:
    """Run the stock check sweep."""
    return asyncio.run(_stock_check())


def cmd_purge_alerts(args: argparse.Namespace) -> int:
    """Purge acknowledged alerts past retention."""
    return asyncio.run(_purge_alerts(args.days))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"{get_settings().app_name} management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    sub = parser.add_subparsers(dest="command", required=True)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--db", type=Path, default=None, help="Database file (default: from settings)")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip backup of an existing database")
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.add_argument("--db", type=Path, default=None, help="Database file (default: from settings)")
    p_status.set_defaults(func=cmd_status)

    # stock-check
    p_check = sub.add_parser("stock-check", help="Re-evaluate stock thresholds")
    p_check.set_defaults(func=cmd_stock_check)

    # purge-alerts
    p_purge = sub.add_parser("purge-alerts", help="Delete old acknowledged alerts")
    p_purge.add_argument(
        "--days",
        type=int,
        default=None,
        help="Retention in days (default: INVENTORY_ALERT_RETENTION_DAYS)",
    )
    p_purge.set_defaults(func=cmd_purge_alerts)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(json_output=True if args.json_logs else None)
    logger.debug("command_started", command=args.command)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
