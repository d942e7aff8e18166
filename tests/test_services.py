"""Tests de los servicios / Service tests."""

import io
from decimal import Decimal
from types import SimpleNamespace

import pytest
from openpyxl import load_workbook

from flota_admin.exceptions import FuelCardNotFound, InvalidFuelPrice
from flota_admin.models.fuel_card import FuelCard
from flota_admin.services.export_service import LEDGER_FIELDS, ExportService
from flota_admin.services.fuel_card_registry import FuelCardRegistry


def _operation():
    card = SimpleNamespace(card_number="TC-0001", currency="CUP")
    return SimpleNamespace(
        id=1,
        date="2025-03-01T08:00:00+00:00",
        fuel_card=card,
        operation_type="Carga",
        opening_balance=Decimal("0.00"),
        amount=Decimal("100.00"),
        amount_liters=Decimal("66.667"),
        closing_balance=Decimal("100.00"),
        closing_balance_liters=Decimal("66.667"),
    )


def test_operation_to_row():
    row = ExportService.operation_to_row(_operation())
    assert list(row) == LEDGER_FIELDS
    assert row["numeroDeTarjeta"] == "TC-0001"
    assert row["moneda"] == "CUP"
    assert row["valorOperacionLitros"] == Decimal("66.667")


def test_to_csv_has_bom_and_semicolons():
    content = ExportService.to_csv([ExportService.operation_to_row(_operation())], LEDGER_FIELDS)
    assert content.startswith(b"\xef\xbb\xbf")
    header, first = content.decode("utf-8-sig").splitlines()[:2]
    assert header == ";".join(LEDGER_FIELDS)
    assert first.split(";")[6] == "66.667"


def test_to_xlsx_bold_headers():
    content = ExportService.to_xlsx([ExportService.operation_to_row(_operation())], LEDGER_FIELDS)
    ws = load_workbook(io.BytesIO(content)).active
    assert ws.title == "Libro"
    assert ws.cell(row=1, column=1).font.bold
    assert ws.cell(row=2, column=3).value == "TC-0001"


@pytest.mark.asyncio
async def test_registry_get(db, card):
    found = await FuelCardRegistry(db).get(card.id)
    assert found.fuel_price == Decimal("1.50")
    with pytest.raises(FuelCardNotFound):
        await FuelCardRegistry(db).get(card.id + 100)


@pytest.mark.asyncio
async def test_registry_rejects_non_positive_price(db):
    # Fila fuera de la restriccion CHECK / Row that bypassed the CHECK constraint
    stale = FuelCard(id=50, card_number="TC-OLD", fuel_price=Decimal("1"), currency="CUP")
    db.add(stale)
    await db.commit()
    stale.fuel_price = Decimal("0")
    with db.sync_session.no_autoflush:
        with pytest.raises(InvalidFuelPrice):
            await FuelCardRegistry(db).get(50)


@pytest.mark.asyncio
async def test_registry_lists_by_number(db, card, other_card):
    cards = await FuelCardRegistry(db).list_cards()
    assert [c.card_number for c in cards] == ["TC-0001", "TC-0002"]


def test_csv_renders_money_and_liters_with_fixed_places():
    row = ExportService.operation_to_row(_operation())
    row["saldoInicio"] = Decimal("5")
    row["saldoFinalLitros"] = Decimal("2.5")
    content = ExportService.to_csv([row], LEDGER_FIELDS)
    values = dict(zip(LEDGER_FIELDS, content.decode("utf-8-sig").splitlines()[1].split(";")))
    assert values["saldoInicio"] == "5.00"
    assert values["valorOperacionDinero"] == "100.00"
    assert values["saldoFinalLitros"] == "2.500"
    assert values["id"] == "1"


def test_format_amount_leaves_other_columns_alone():
    assert ExportService.format_amount("moneda", "CUP") == "CUP"
    assert ExportService.format_amount("saldoFinal", None) is None
    assert ExportService.format_amount("saldoFinal", "") == ""
    assert ExportService.format_amount("valorOperacionLitros", Decimal("20")) == "20.000"


def test_xlsx_number_formats():
    content = ExportService.to_xlsx([ExportService.operation_to_row(_operation())], LEDGER_FIELDS)
    ws = load_workbook(io.BytesIO(content)).active
    money_col = LEDGER_FIELDS.index("saldoFinal") + 1
    liters_col = LEDGER_FIELDS.index("saldoFinalLitros") + 1
    assert ws.cell(row=2, column=money_col).number_format == "0.00"
    assert ws.cell(row=2, column=liters_col).number_format == "0.000"
    assert float(ws.cell(row=2, column=money_col).value) == 100.0
    assert ws.freeze_panes == "A2"
