"""Shared store wiring for part and stock use cases."""

from src.core.entities.inventory import StockChange, StockChangeResult
from src.core.entities.part import Part
from src.core.exceptions import PartNotFoundError
from src.core.interfaces.inventory_store import IStockLedgerStore
from src.core.interfaces.part_store import IPartStore


class InventoryUseCase:
    """Base for use cases that read parts and write through the stock ledger."""

    def __init__(
        self,
        part_store: IPartStore | None = None,
        ledger_store: IStockLedgerStore | None = None,
    ):
        self._part_store = part_store
        self._ledger_store = ledger_store

    async def _get_part_store(self) -> IPartStore:
        if self._part_store is None:
            from src.infrastructure.storage.sqlite import get_part_store

            self._part_store = await get_part_store()
        return self._part_store

    async def _get_ledger_store(self) -> IStockLedgerStore:
        if self._ledger_store is None:
            from src.infrastructure.storage.sqlite import get_stock_ledger_store

            self._ledger_store = await get_stock_ledger_store()
        return self._ledger_store

    async def _load_part(self, part_id: int) -> Part:
        part_store = await self._get_part_store()
        part = await part_store.get_part(part_id)
        if part is None:
            raise PartNotFoundError(part_id)
        return part

    async def _apply(self, change: StockChange) -> StockChangeResult:
        ledger = await self._get_ledger_store()
        return await ledger.apply_stock_change(change)
