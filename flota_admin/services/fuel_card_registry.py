"""
Registro de tarjetas de combustible / Fuel card registry.
Lectura de tarjetas para el libro: identidad, precio y moneda.
Read path used by the ledger: identity, price and currency.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from flota_admin.exceptions import FuelCardNotFound, InvalidFuelPrice
from flota_admin.models.fuel_card import FuelCard


class FuelCardRegistry:
    """Acceso de solo lectura a las tarjetas / Read-only access to fuel cards."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, card_id: int, for_update: bool = False) -> FuelCard:
        """Obtener una tarjeta con precio valido / Get a card whose price can be divided by.

        for_update bloquea la fila hasta el commit (PostgreSQL; SQLite lo ignora).
        """
        query = select(FuelCard).where(FuelCard.id == card_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        card = result.scalar_one_or_none()
        if card is None:
            raise FuelCardNotFound(card_id)
        if card.fuel_price is None or card.fuel_price <= 0:
            raise InvalidFuelPrice(card_id)
        return card

    async def list_cards(self) -> list[FuelCard]:
        result = await self.db.execute(select(FuelCard).order_by(FuelCard.card_number))
        return list(result.scalars().all())
