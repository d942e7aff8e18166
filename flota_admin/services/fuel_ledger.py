"""
Libro de operaciones de combustible / Fuel operation ledger.

Saldo acumulado por tarjeta, en dinero y en litros, una fila por operacion.
Running balance per fuel card in money and liters, one row per operation:

    saldo_inicio  = saldo_final de la operacion anterior (0 si no hay)
    litros        = valor / precio
    saldo_final   = saldo_inicio +/- valor  (Carga / Consumo)
    saldo_litros  = saldo_final / precio

Las altas se serializan por tarjeta: lock asyncio en el proceso y
SELECT ... FOR UPDATE sobre la tarjeta. El commit ocurre dentro del lock.
"""

import asyncio
import json
import logging
import weakref
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from flota_admin.exceptions import (
    FuelOperationNotFound,
    InvalidArgumentError,
    InvalidOperationDate,
    InvalidOperationType,
    InvalidSortField,
    OutOfOrderOperation,
)
from flota_admin.models.audit import AuditLog
from flota_admin.models.fuel_card import FuelCard
from flota_admin.models.fuel_operation import FuelDistribution, FuelOperation, OperationType
from flota_admin.models.vehicle import Vehicle
from flota_admin.schemas.fuel_card import FuelCardBalance
from flota_admin.schemas.fuel_operation import FuelDistributionCreate, FuelOperationCreate
from flota_admin.services.fuel_card_registry import FuelCardRegistry

log = logging.getLogger(__name__)

# Precision / Precision
MONEY_QUANT = Decimal("0.01")
LITERS_QUANT = Decimal("0.001")

# Campos ordenables (nombre JSON -> columna) / Sortable fields (JSON name -> column)
SORTABLE_FIELDS = {
    "id": FuelOperation.id,
    "fecha": FuelOperation.date,
    "tipoOperacion": FuelOperation.operation_type,
    "fuelCardId": FuelOperation.fuel_card_id,
    "saldoInicio": FuelOperation.opening_balance,
    "valorOperacionDinero": FuelOperation.amount,
    "valorOperacionLitros": FuelOperation.amount_liters,
    "saldoFinal": FuelOperation.closing_balance,
    "saldoFinalLitros": FuelOperation.closing_balance_liters,
}
ORDER_DIRECTIONS = ("asc", "desc")

# Un lock por tarjeta, liberado cuando nadie lo usa / One lock per card, dropped when unused
_card_locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = weakref.WeakValueDictionary()


def _card_lock(card_id: int) -> asyncio.Lock:
    lock = _card_locks.get(card_id)
    if lock is None:
        lock = asyncio.Lock()
        _card_locks[card_id] = lock
    return lock


def parse_operation_type(value: str) -> OperationType:
    """Carga | Consumo, o InvalidOperationType / Load or Consumption."""
    try:
        return OperationType(value)
    except ValueError:
        raise InvalidOperationType(value) from None


def parse_operation_date(value: str) -> str:
    """Normalizar la fecha a ISO 8601 UTC / Normalize the date to an ISO 8601 UTC string.

    Acepta fecha sola o fecha-hora, con o sin zona ('Z' incluido). Sin zona = UTC.
    Al ser todas UTC y con segundos, el orden lexico es el cronologico.
    """
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        # Fuera de rango al pasar a UTC (anio 1 o 9999) / Out of range once shifted to UTC
        return parsed.astimezone(timezone.utc).isoformat(timespec="seconds")
    except (AttributeError, ValueError, OverflowError):
        raise InvalidOperationDate(value) from None


def compute_balances(
    operation_type: OperationType,
    opening_balance: Decimal,
    amount: Decimal,
    fuel_price: Decimal,
) -> tuple[Decimal, Decimal, Decimal]:
    """Calcular (litros, saldo_final, saldo_final_litros) / Compute the derived ledger fields."""
    price = Decimal(fuel_price)
    amount = Decimal(amount)
    amount_liters = (amount / price).quantize(LITERS_QUANT, rounding=ROUND_HALF_UP)
    if operation_type is OperationType.CARGA:
        closing = Decimal(opening_balance) + amount
    else:
        closing = Decimal(opening_balance) - amount
    closing = closing.quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)
    closing_liters = (closing / price).quantize(LITERS_QUANT, rounding=ROUND_HALF_UP)
    return amount_liters, closing, closing_liters


class FuelLedgerService:
    """Alta y consulta del libro de combustible / Fuel ledger append and queries."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.registry = FuelCardRegistry(db)

    async def append(self, data: FuelOperationCreate) -> FuelOperation:
        """Registrar una operacion al final del libro de su tarjeta / Append an operation to its card's ledger.

        Devuelve la operacion sin repartos adjuntos; el cliente la vuelve a pedir si los necesita.
        """
        operation_type = parse_operation_type(data.operation_type)
        operation_date = parse_operation_date(data.date)

        async with _card_lock(data.fuel_card_id):
            card = await self.registry.get(data.fuel_card_id, for_update=True)
            last = await self._latest_operation(card.id)

            if last is not None and operation_date < last.date:
                raise OutOfOrderOperation(operation_date, last.date)

            opening = Decimal(last.closing_balance) if last is not None else Decimal("0.00")
            amount = Decimal(data.amount).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)
            amount_liters, closing, closing_liters = compute_balances(
                operation_type, opening, amount, card.fuel_price
            )

            operation = FuelOperation(
                operation_type=operation_type.value,
                date=operation_date,
                fuel_card_id=card.id,
                opening_balance=opening,
                amount=amount,
                amount_liters=amount_liters,
                closing_balance=closing,
                closing_balance_liters=closing_liters,
                created_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
            )
            # Los repartos solo aplican a un consumo / Distributions only apply to a consumption
            distributed = operation_type is OperationType.CONSUMO and bool(data.distributions)
            if distributed:
                operation.distributions = [
                    FuelDistribution(vehicle_id=d.vehicle_id, liters=d.liters)
                    for d in data.distributions
                ]
                self._check_allocation(card, amount_liters, data.distributions)

            self.db.add(operation)
            await self.db.flush()

            self.db.add(AuditLog(
                entity_type="fuel_operation",
                entity_id=operation.id,
                action="CREATE",
                changes=json.dumps({
                    "fuel_card_id": card.id,
                    "operation_type": operation.operation_type,
                    "date": operation.date,
                    "opening_balance": str(opening),
                    "amount": str(amount),
                    "closing_balance": str(closing),
                    "distributions": len(data.distributions) if distributed else 0,
                }),
                timestamp=operation.created_at,
            ))
            await self.db.commit()

        log.info(
            "Fuel operation %s appended: card %s %s %s -> balance %s",
            operation.id, card.card_number, operation.operation_type, amount, closing,
        )
        return operation

    def _check_allocation(
        self,
        card: FuelCard,
        amount_liters: Decimal,
        distributions: list[FuelDistributionCreate],
    ) -> None:
        """Aviso si se reparten mas litros que los consumidos / Warn on over-allocation (advisory only)."""
        distributed = sum((Decimal(d.liters) for d in distributions), Decimal("0"))
        if distributed > amount_liters:
            log.warning(
                "Card %s: %s L distributed for a consumption of %s L",
                card.card_number, distributed, amount_liters,
            )

    async def _latest_operation(self, card_id: int) -> FuelOperation | None:
        result = await self.db.execute(
            select(FuelOperation)
            .where(FuelOperation.fuel_card_id == card_id)
            .order_by(FuelOperation.date.desc(), FuelOperation.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_operations(
        self,
        search: str | None = None,
        fuel_card_id: int | None = None,
        page: int = 1,
        limit: int = 10,
        order_by: str = "fecha",
        order_direction: str = "desc",
    ) -> tuple[list[FuelOperation], int]:
        """Pagina de operaciones con tarjeta y repartos / Page of operations with card and distributions.

        Devuelve (pagina, total); el total no depende de page/limit.
        """
        column = SORTABLE_FIELDS.get(order_by)
        if column is None:
            raise InvalidSortField(order_by, list(SORTABLE_FIELDS))
        if order_direction not in ORDER_DIRECTIONS:
            raise InvalidArgumentError(f"Invalid orderDirection '{order_direction}'. Allowed: {list(ORDER_DIRECTIONS)}")

        conditions = []
        if search:
            conditions.append(or_(
                FuelOperation.operation_type.contains(search, autoescape=True),
                FuelOperation.fuel_card.has(FuelCard.card_number.contains(search, autoescape=True)),
                FuelOperation.distributions.any(
                    FuelDistribution.vehicle.has(Vehicle.license_plate.contains(search, autoescape=True))
                ),
            ))
        if fuel_card_id is not None:
            conditions.append(FuelOperation.fuel_card_id == fuel_card_id)

        if order_direction == "asc":
            ordering = (column.asc(), FuelOperation.id.asc())
        else:
            ordering = (column.desc(), FuelOperation.id.desc())

        query = (
            select(FuelOperation)
            .where(*conditions)
            .options(
                selectinload(FuelOperation.fuel_card),
                selectinload(FuelOperation.distributions).selectinload(FuelDistribution.vehicle),
            )
            .order_by(*ordering)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        count_query = select(func.count(FuelOperation.id)).where(*conditions)

        total = await self.db.scalar(count_query) or 0
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def get_operation(self, operation_id: int) -> FuelOperation:
        result = await self.db.execute(
            select(FuelOperation)
            .where(FuelOperation.id == operation_id)
            .options(
                selectinload(FuelOperation.fuel_card),
                selectinload(FuelOperation.distributions).selectinload(FuelDistribution.vehicle),
            )
        )
        operation = result.scalar_one_or_none()
        if operation is None:
            raise FuelOperationNotFound(operation_id)
        return operation

    async def chronological(self, fuel_card_id: int | None = None) -> list[FuelOperation]:
        """Libro completo en orden cronologico / Whole ledger in chronological order."""
        query = (
            select(FuelOperation)
            .options(selectinload(FuelOperation.fuel_card))
            .order_by(FuelOperation.fuel_card_id, FuelOperation.date, FuelOperation.id)
        )
        if fuel_card_id is not None:
            await self.registry.get(fuel_card_id)
            query = query.where(FuelOperation.fuel_card_id == fuel_card_id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def balance(self, card_id: int) -> FuelCardBalance:
        """Saldo actual de la tarjeta / Current card balance (0 if no operation yet)."""
        card = await self.registry.get(card_id)
        last = await self._latest_operation(card.id)
        return FuelCardBalance(
            fuel_card_id=card.id,
            balance=last.closing_balance if last is not None else 0,
            balance_liters=last.closing_balance_liters if last is not None else 0,
            fuel_price=card.fuel_price,
            currency=card.currency,
            last_operation_id=last.id if last is not None else None,
            last_operation_date=last.date if last is not None else None,
        )
