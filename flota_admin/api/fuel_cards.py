"""Rutas Tarjetas de combustible (lectura) / Fuel card read routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from flota_admin.database import get_db
from flota_admin.schemas.fuel_card import FuelCardBalance, FuelCardRead
from flota_admin.services.fuel_card_registry import FuelCardRegistry
from flota_admin.services.fuel_ledger import FuelLedgerService

router = APIRouter()


@router.get("/", response_model=list[FuelCardRead])
async def list_fuel_cards(db: AsyncSession = Depends(get_db)):
    """Listar tarjetas por numero / List cards by card number."""
    return await FuelCardRegistry(db).list_cards()


@router.get("/{card_id}", response_model=FuelCardRead)
async def get_fuel_card(card_id: int, db: AsyncSession = Depends(get_db)):
    """Ver una tarjeta / Get fuel card detail."""
    return await FuelCardRegistry(db).get(card_id)


@router.get("/{card_id}/balance", response_model=FuelCardBalance)
async def get_fuel_card_balance(card_id: int, db: AsyncSession = Depends(get_db)):
    """Saldo actual de la tarjeta / Current card balance."""
    return await FuelLedgerService(db).balance(card_id)
