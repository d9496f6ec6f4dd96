"""Integration tests: use cases over the real SQLite stores."""

import asyncio

import pytest

from src.application.dto.requests import (
    AddStockRequest,
    AdjustStockRequest,
    CreatePartRequest,
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
    GetInventoryAlertsUseCase,
    GetInventoryStatisticsUseCase,
    GetStockMovementsUseCase,
    PerformStockCheckUseCase,
    RecordLossUseCase,
    RemoveStockUseCase,
    ReturnStockUseCase,
    SyncRepairPartUseCase,
)
from src.core.entities.inventory import AlertFilters, AlertType, MovementType
from src.core.exceptions import (
    AlertNotFoundError,
    InsufficientStockError,
    StockConflictError,
)


@pytest.fixture
def stores(part_store, ledger_store):
    return {"part_store": part_store, "ledger_store": ledger_store}


@pytest.fixture
async def brake_pad(stores):
    """Brake pad with 5 on hand, min 10, max 100."""
    result = await CreatePartUseCase(**stores).execute(
        CreatePartRequest(
            part_code="BRK-PAD",
            name="Brake pad",
            brand="Bosch",
            purchase_price=800.0,
            selling_price=1000.0,
            quantity_in_stock=5,
            min_stock_level=10,
            max_stock_level=100,
            performed_by=1,
        )
    )
    return result.part


class TestStockFlow:
    async def test_add_stock(self, stores, brake_pad):
        result = await AddStockUseCase(**stores).execute(
            AddStockRequest(part_id=brake_pad.id, quantity=3, unit_cost=1000.0, performed_by=2)
        )

        assert result.part.quantity_in_stock == 8
        assert result.movement.quantity == 3
        assert result.movement.total_cost == 3000.0
        assert [a.alert_type for a in result.alerts] == [AlertType.LOW_STOCK]

    async def test_insufficient_stock_writes_nothing(self, stores, brake_pad):
        movements = GetStockMovementsUseCase(**stores)
        before = await movements.execute(brake_pad.id)

        with pytest.raises(InsufficientStockError):
            await RemoveStockUseCase(**stores).execute(
                RemoveStockRequest(part_id=brake_pad.id, quantity=10, performed_by=2)
            )

        assert await movements.execute(brake_pad.id) == before
        part = await stores["part_store"].get_part(brake_pad.id)
        assert part.quantity_in_stock == 5

    async def test_adjust_to_zero(self, stores, brake_pad):
        await AddStockUseCase(**stores).execute(
            AddStockRequest(part_id=brake_pad.id, quantity=15, unit_cost=900.0, performed_by=2)
        )

        result = await AdjustStockUseCase(**stores).execute(
            AdjustStockRequest(
                part_id=brake_pad.id, new_quantity=0, reason="flood damage", performed_by=2
            )
        )

        assert result.movement.quantity == -20
        assert result.movement.movement_type is MovementType.ADJUSTMENT
        assert [a.alert_type for a in result.alerts] == [AlertType.OUT_OF_STOCK]

    async def test_threshold_transitions(self, stores, brake_pad):
        adjust = AdjustStockUseCase(**stores)

        async def alerts_at(quantity: int) -> list[AlertType]:
            result = await adjust.execute(
                AdjustStockRequest(
                    part_id=brake_pad.id, new_quantity=quantity, reason="count", performed_by=2
                )
            )
            return [a.alert_type for a in result.alerts]

        assert await alerts_at(10) == [AlertType.LOW_STOCK]
        assert await alerts_at(11) == []
        assert await alerts_at(100) == []
        assert await alerts_at(101) == [AlertType.OVERSTOCK]
        assert await alerts_at(0) == [AlertType.OUT_OF_STOCK]

    async def test_ledger_reconciles(self, stores, brake_pad):
        """Sum of all movements equals the stored quantity."""
        await AddStockUseCase(**stores).execute(
            AddStockRequest(part_id=brake_pad.id, quantity=20, unit_cost=800.0, performed_by=2)
        )
        await RemoveStockUseCase(**stores).execute(
            RemoveStockRequest(part_id=brake_pad.id, quantity=7, performed_by=2)
        )
        await RecordLossUseCase(**stores).execute(
            RecordLossRequest(part_id=brake_pad.id, quantity=1, reason="cracked", performed_by=2)
        )
        await ReturnStockUseCase(**stores).execute(
            ReturnStockRequest(part_id=brake_pad.id, quantity=2, performed_by=2)
        )
        sync = SyncRepairPartUseCase(**stores)
        await sync.execute(
            SyncRepairPartRequest(repair_id=9, part_id=brake_pad.id, new_quantity=4, performed_by=2)
        )
        await sync.execute(
            SyncRepairPartRequest(
                repair_id=9,
                part_id=brake_pad.id,
                previous_quantity=4,
                new_quantity=1,
                performed_by=2,
            )
        )

        part = await stores["part_store"].get_part(brake_pad.id)
        movements = await GetStockMovementsUseCase(**stores).execute(brake_pad.id)

        assert part.quantity_in_stock == 5 + 20 - 7 - 1 + 2 - 4 + 3
        assert sum(m.quantity for m in movements) == part.quantity_in_stock
        assert movements[-1].reference_type == "initial_stock"
        assert {m.reference_id for m in movements if m.reference_type == "repair"} == {9}

        summary = await GetStockMovementsUseCase(**stores).summary(brake_pad.id)
        assert summary.net_movement == part.quantity_in_stock

    async def test_concurrent_removals_cannot_oversell(self, stores, brake_pad):
        """Two issues of 4 against 5 on hand: one wins, the other is refused."""
        remove = RemoveStockUseCase(**stores)

        outcomes = await asyncio.gather(
            remove.execute(RemoveStockRequest(part_id=brake_pad.id, quantity=4, performed_by=2)),
            remove.execute(RemoveStockRequest(part_id=brake_pad.id, quantity=4, performed_by=3)),
            return_exceptions=True,
        )

        failures = [o for o in outcomes if isinstance(o, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], (StockConflictError, InsufficientStockError))

        part = await stores["part_store"].get_part(brake_pad.id)
        movements = await GetStockMovementsUseCase(**stores).execute(brake_pad.id)
        assert part.quantity_in_stock == 1
        assert sum(m.quantity for m in movements) == part.quantity_in_stock
        assert len(movements) == 2

    async def test_failed_initial_booking_leaves_no_part(
        self, stores, ledger_store, monkeypatch
    ):
        async def failing_insert(conn, movement):
            raise RuntimeError("disk full")

        monkeypatch.setattr(ledger_store, "_insert_movement", failing_insert)

        with pytest.raises(RuntimeError):
            await CreatePartUseCase(**stores).execute(
                CreatePartRequest(
                    part_code="OIL-FLT", name="Oil filter", quantity_in_stock=6, performed_by=1
                )
            )

        assert await stores["part_store"].get_part_by_code("OIL-FLT") is None


class TestAlertFlow:
    async def test_acknowledge(self, stores, alert_store, brake_pad):
        alerts = await GetInventoryAlertsUseCase(alert_store=alert_store).execute(
            AlertFilters(part_id=brake_pad.id)
        )
        assert [a.alert_type for a in alerts] == [AlertType.LOW_STOCK]

        acknowledge = AcknowledgeAlertUseCase(alert_store=alert_store)
        alert = await acknowledge.execute(alerts[0].id, acknowledged_by=4)

        assert alert.is_acknowledged is True
        assert alert.acknowledged_by == 4
        assert alert.acknowledged_at is not None
        assert await alert_store.count_unacknowledged() == 0

    async def test_acknowledge_unknown(self, alert_store):
        with pytest.raises(AlertNotFoundError):
            await AcknowledgeAlertUseCase(alert_store=alert_store).execute(
                12345, acknowledged_by=4
            )

    async def test_stock_check_records_alerts(self, stores, alert_store, brake_pad):
        result = await PerformStockCheckUseCase(**stores).execute()

        assert result.parts_checked == 1
        assert result.low_stock_parts == 1
        assert result.alerts_created == 1
        assert await alert_store.count_unacknowledged() == 2


class TestReads:
    async def test_reads_are_idempotent(self, stores, report_store, brake_pad):
        statistics = GetInventoryStatisticsUseCase(report_store=report_store)
        movements = GetStockMovementsUseCase(**stores)

        first_stats = await statistics.execute()
        first_movements = await movements.execute(brake_pad.id)

        assert await statistics.execute() == first_stats
        assert await movements.execute(brake_pad.id) == first_movements
        assert first_stats.total_parts == 1
        assert first_stats.total_value == 5000.0
