"""
Servicio de exportacion CSV/Excel / CSV/Excel export service.
Genera el libro de combustible en CSV o XLSX.
Renders the fuel ledger as CSV or XLSX.
"""

import csv
import io
from decimal import Decimal
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font

from flota_admin.models.fuel_operation import FuelOperation

# Columnas del libro (nombres JSON del panel) / Ledger columns (dashboard JSON names)
LEDGER_FIELDS = [
    "id",
    "fecha",
    "numeroDeTarjeta",
    "tipoOperacion",
    "saldoInicio",
    "valorOperacionDinero",
    "valorOperacionLitros",
    "saldoFinal",
    "saldoFinalLitros",
    "moneda",
]

# Decimales por columna de importe / Decimal places per amount column
AMOUNT_PLACES = {
    "saldoInicio": 2,
    "valorOperacionDinero": 2,
    "saldoFinal": 2,
    "valorOperacionLitros": 3,
    "saldoFinalLitros": 3,
}


class ExportService:
    """Export del libro a CSV/XLSX / Ledger export to CSV/XLSX."""

    @staticmethod
    def operation_to_row(operation: FuelOperation) -> dict[str, Any]:
        """Fila plana de una operacion (tarjeta cargada) / Flat row for one operation (card loaded)."""
        return {
            "id": operation.id,
            "fecha": operation.date,
            "numeroDeTarjeta": operation.fuel_card.card_number,
            "tipoOperacion": operation.operation_type,
            "saldoInicio": operation.opening_balance,
            "valorOperacionDinero": operation.amount,
            "valorOperacionLitros": operation.amount_liters,
            "saldoFinal": operation.closing_balance,
            "saldoFinalLitros": operation.closing_balance_liters,
            "moneda": operation.fuel_card.currency,
        }

    @staticmethod
    def format_amount(field: str, value: Any) -> Any:
        """Dinero con 2 decimales, litros con 3 / Money to 2 places, liters to 3, as text."""
        if field not in AMOUNT_PLACES or value is None or value == "":
            return value
        return f"{Decimal(value):.{AMOUNT_PLACES[field]}f}"

    @staticmethod
    def to_csv(rows: list[dict], fields: list[str]) -> bytes:
        """CSV UTF-8 con BOM y separador ';' para Excel / UTF-8 BOM CSV, ';' separated, Excel friendly."""
        output = io.StringIO()
        writer = csv.writer(output, delimiter=";")
        writer.writerow(fields)
        writer.writerows(
            [ExportService.format_amount(f, row.get(f, "")) for f in fields]
            for row in rows
        )
        return ("\ufeff" + output.getvalue()).encode("utf-8")

    @staticmethod
    def to_xlsx(rows: list[dict], fields: list[str], sheet_name: str = "Libro") -> bytes:
        """Generar un fichero Excel / Generate an Excel file."""
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name

        # Cabeceras / Headers
        for col_idx, field in enumerate(fields, 1):
            cell = ws.cell(row=1, column=col_idx, value=field)
            cell.font = Font(bold=True)

        # Importes numericos con formato fijo / Amounts stay numeric with a fixed number format
        for row in rows:
            ws.append([row.get(field) for field in fields])
        for col_idx, field in enumerate(fields, 1):
            if field in AMOUNT_PLACES:
                number_format = "0." + "0" * AMOUNT_PLACES[field]
                for (cell,) in ws.iter_rows(min_row=2, min_col=col_idx, max_col=col_idx):
                    cell.number_format = number_format
        ws.freeze_panes = "A2"

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
