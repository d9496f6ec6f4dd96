"""Tests for part catalogue use cases."""

from unittest.mock import patch

import pytest

from src.application.dto.requests import CreatePartRequest
from src.application.use_cases.create_part import (
    CreatePartUseCase,
    generate_part_code,
)
from src.application.use_cases.delete_part import DeletePartUseCase
from src.application.use_cases.get_part import GetPartUseCase
from src.application.use_cases.update_part import UpdatePartUseCase
from src.core.entities.inventory import MovementType
from src.core.entities.part import Part, PartUpdate
from src.core.exceptions import (
    DuplicatePartCodeError,
    PartNotFoundError,
    ShopError,
    ValidationError,
)


def _created(part: Part) -> Part:
    return part.model_copy(update={"id": 1})


class TestGeneratePartCode:
    def test_format(self):
        code = generate_part_code("PT")

        assert code.startswith("PT")
        assert len(code) == 11
        assert code[2:].isdigit()

    def test_custom_prefix(self):
        assert generate_part_code("GX").startswith("GX")


class TestCreatePartUseCase:
    @pytest.fixture
    def use_case(self, mock_part_store, mock_ledger_store):
        mock_part_store.create_part.side_effect = _created
        return CreatePartUseCase(part_store=mock_part_store, ledger_store=mock_ledger_store)

    async def test_create_without_stock(self, use_case, mock_part_store, mock_ledger_store):
        result = await use_case.execute(
            CreatePartRequest(part_code="BRK-01", name=" Brake pad ", performed_by=3)
        )

        created = mock_part_store.create_part.call_args[0][0]
        assert created.part_code == "BRK-01"
        assert created.name == "Brake pad"
        assert created.quantity_in_stock == 0
        assert result.initial_movement is None
        mock_ledger_store.create_part_with_stock.assert_not_awaited()
        mock_ledger_store.apply_stock_change.assert_not_awaited()

    async def test_initial_stock_booked_with_insert(
        self, use_case, mock_part_store, mock_ledger_store
    ):
        result = await use_case.execute(
            CreatePartRequest(
                part_code="BRK-01",
                name="Brake pad",
                quantity_in_stock=12,
                purchase_price=40.0,
                performed_by=3,
            )
        )

        mock_part_store.create_part.assert_not_awaited()
        mock_ledger_store.apply_stock_change.assert_not_awaited()
        mock_ledger_store.create_part_with_stock.assert_awaited_once()

        call = mock_ledger_store.create_part_with_stock.call_args
        assert call.args[0].part_code == "BRK-01"
        assert call.args[0].quantity_in_stock == 0
        assert call.kwargs["initial_quantity"] == 12
        assert call.kwargs["unit_cost"] == 40.0
        assert call.kwargs["performed_by"] == 3

        assert result.part.quantity_in_stock == 12
        assert result.initial_movement.quantity == 12
        assert result.initial_movement.movement_type is MovementType.IN
        assert result.initial_movement.reference_type == "initial_stock"

    async def test_initial_stock_without_price(self, use_case, mock_ledger_store):
        await use_case.execute(
            CreatePartRequest(name="Bulb", quantity_in_stock=2, performed_by=3)
        )

        call = mock_ledger_store.create_part_with_stock.call_args
        assert call.kwargs["unit_cost"] == 0.0

    async def test_generates_code(self, use_case, mock_part_store):
        await use_case.execute(CreatePartRequest(name="Bulb", performed_by=3))

        created = mock_part_store.create_part.call_args[0][0]
        assert created.part_code.startswith("PT")

    async def test_code_generation_exhausted(self, use_case, mock_part_store, stored_part):
        mock_part_store.get_part_by_code.return_value = stored_part

        with pytest.raises(ShopError) as exc_info:
            await use_case.execute(CreatePartRequest(name="Bulb", performed_by=3))

        assert exc_info.value.code == "PART_CODE_EXHAUSTED"
        assert mock_part_store.get_part_by_code.await_count == 10
        mock_part_store.create_part.assert_not_awaited()

    async def test_code_retried_on_collision(self, use_case, mock_part_store, stored_part):
        mock_part_store.get_part_by_code.side_effect = [stored_part, None]

        with patch(
            "src.application.use_cases.create_part.generate_part_code",
            side_effect=["PT000001001", "PT000001002"],
        ):
            await use_case.execute(CreatePartRequest(name="Bulb", performed_by=3))

        created = mock_part_store.create_part.call_args[0][0]
        assert created.part_code == "PT000001002"

    async def test_duplicate_code(self, use_case, mock_part_store, stored_part):
        mock_part_store.get_part_by_code.return_value = stored_part

        with pytest.raises(DuplicatePartCodeError) as exc_info:
            await use_case.execute(
                CreatePartRequest(part_code="PT001", name="Pad", performed_by=3)
            )

        assert exc_info.value.details["existing_id"] == 1
        mock_part_store.create_part.assert_not_awaited()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": "  "},
            {"min_stock_level": 10, "max_stock_level": 10},
            {"min_stock_level": -1},
            {"selling_price": -1.0},
            {"quantity_in_stock": -5},
        ],
    )
    async def test_validation(self, use_case, mock_part_store, overrides):
        fields = {"name": "Pad", "performed_by": 3, **overrides}

        with pytest.raises(ValidationError):
            await use_case.execute(CreatePartRequest(**fields))
        mock_part_store.create_part.assert_not_awaited()


class TestUpdatePartUseCase:
    @pytest.fixture
    def use_case(self, mock_part_store):
        return UpdatePartUseCase(part_store=mock_part_store)

    async def test_update(self, use_case, mock_part_store, stored_part):
        updated = stored_part.model_copy(update={"location": "Shelf B2"})
        mock_part_store.update_part.return_value = updated

        result = await use_case.execute(1, PartUpdate(location="Shelf B2"))

        assert result.location == "Shelf B2"
        mock_part_store.update_part.assert_awaited_once()

    async def test_empty_update_returns_current(self, use_case, mock_part_store, stored_part):
        result = await use_case.execute(1, PartUpdate())

        assert result == stored_part
        mock_part_store.update_part.assert_not_awaited()

    async def test_max_checked_against_stored_min(self, use_case, mock_part_store):
        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(1, PartUpdate(max_stock_level=10))

        assert exc_info.value.details["field"] == "max_stock_level"
        mock_part_store.update_part.assert_not_awaited()

    async def test_required_field_cannot_be_cleared(self, use_case):
        with pytest.raises(ValidationError):
            await use_case.execute(1, PartUpdate(name=None))

    async def test_optional_field_can_be_cleared(self, use_case, mock_part_store, stored_part):
        mock_part_store.update_part.return_value = stored_part

        await use_case.execute(1, PartUpdate(brand=None))

        mock_part_store.update_part.assert_awaited_once()

    async def test_duplicate_code(self, use_case, mock_part_store):
        mock_part_store.get_part_by_code.return_value = Part(id=2, part_code="PT002", name="Disc")

        with pytest.raises(DuplicatePartCodeError):
            await use_case.execute(1, PartUpdate(part_code="PT002"))

    async def test_keeping_own_code(self, use_case, mock_part_store, stored_part):
        mock_part_store.get_part_by_code.return_value = stored_part
        mock_part_store.update_part.return_value = stored_part

        await use_case.execute(1, PartUpdate(part_code="PT001"))

        mock_part_store.update_part.assert_awaited_once()

    async def test_name_and_code_stored_trimmed(self, use_case, mock_part_store, stored_part):
        mock_part_store.update_part.return_value = stored_part

        await use_case.execute(1, PartUpdate(part_code="  PT009 ", name=" Disc rotor "))

        mock_part_store.get_part_by_code.assert_awaited_once_with("PT009")
        sent = mock_part_store.update_part.call_args[0][1]
        assert sent.changes() == {"part_code": "PT009", "name": "Disc rotor"}

    async def test_not_found(self, use_case, mock_part_store):
        mock_part_store.get_part.return_value = None

        with pytest.raises(PartNotFoundError):
            await use_case.execute(99, PartUpdate(name="x"))


class TestGetAndDeletePart:
    async def test_get(self, mock_part_store, stored_part):
        assert await GetPartUseCase(part_store=mock_part_store).execute(1) == stored_part

    async def test_get_missing(self, mock_part_store):
        mock_part_store.get_part.return_value = None

        with pytest.raises(PartNotFoundError):
            await GetPartUseCase(part_store=mock_part_store).execute(99)

    async def test_delete(self, mock_part_store):
        mock_part_store.deactivate_part.return_value = True

        await DeletePartUseCase(part_store=mock_part_store).execute(1)

        mock_part_store.deactivate_part.assert_awaited_once_with(1)

    async def test_delete_missing(self, mock_part_store):
        mock_part_store.deactivate_part.return_value = False

        with pytest.raises(PartNotFoundError):
            await DeletePartUseCase(part_store=mock_part_store).execute(99)
