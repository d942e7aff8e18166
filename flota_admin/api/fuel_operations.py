"""Rutas Operaciones de combustible / Fuel operation API routes."""

import io
import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from flota_admin.config import settings
from flota_admin.database import get_db
from flota_admin.exceptions import FleetError, LedgerStorageError
from flota_admin.rate_limit import limiter
from flota_admin.schemas.fuel_operation import (
    FuelOperationCreate,
    FuelOperationDetail,
    FuelOperationPage,
    FuelOperationRead,
)
from flota_admin.services.export_service import LEDGER_FIELDS, ExportService
from flota_admin.services.fuel_ledger import FuelLedgerService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=FuelOperationPage)
async def list_fuel_operations(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: str = Query(default=""),
    order_by: str = Query(default="fecha", alias="orderBy"),
    order_direction: str = Query(default="desc", alias="orderDirection"),
    fuel_card_id: int | None = Query(default=None, alias="fuelCardId"),
    db: AsyncSession = Depends(get_db),
):
    """Listar operaciones paginadas / List paginated operations with card and distributions."""
    service = FuelLedgerService(db)
    try:
        operations, total = await service.list_operations(
            search=search or None,
            fuel_card_id=fuel_card_id,
            page=page,
            limit=limit,
            order_by=order_by,
            order_direction=order_direction,
        )
    except FleetError:
        raise
    except Exception as exc:
        logger.exception("Error fetching fuel operations")
        raise LedgerStorageError("Error fetching fuel operations", exc) from exc
    return {"data": operations, "total": total, "page": page, "limit": limit}


@router.post("/", response_model=FuelOperationRead, status_code=201)
@limiter.limit(settings.RATE_LIMIT_DEFAULT)
async def create_fuel_operation(
    request: Request,
    data: FuelOperationCreate,
    db: AsyncSession = Depends(get_db),
):
    """Registrar una operacion en el libro / Append an operation to the card's ledger."""
    service = FuelLedgerService(db)
    try:
        return await service.append(data)
    except FleetError:
        raise
    except Exception as exc:
        logger.exception("Error creating fuel operation")
        raise LedgerStorageError("Error creating fuel operation", exc) from exc


@router.get("/export")
async def export_fuel_operations(
    fuel_card_id: int | None = Query(default=None, alias="fuelCardId"),
    format: str = Query("xlsx", pattern="^(csv|xlsx)$"),
    db: AsyncSession = Depends(get_db),
):
    """Exportar el libro en orden cronologico / Export the ledger in chronological order."""
    operations = await FuelLedgerService(db).chronological(fuel_card_id)
    rows = [ExportService.operation_to_row(op) for op in operations]

    basename = f"fuel-operations-{fuel_card_id}" if fuel_card_id is not None else "fuel-operations"
    if format == "csv":
        content = ExportService.to_csv(rows, LEDGER_FIELDS)
        media_type = "text/csv; charset=utf-8"
        filename = f"{basename}.csv"
    else:
        content = ExportService.to_xlsx(rows, LEDGER_FIELDS)
        media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        filename = f"{basename}.xlsx"

    return StreamingResponse(
        io.BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{operation_id}", response_model=FuelOperationDetail)
async def get_fuel_operation(
    operation_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Ver una operacion / Get operation detail."""
    return await FuelLedgerService(db).get_operation(operation_id)
