"""Rutas API / API routes."""

from fastapi import APIRouter

from flota_admin.api import fuel_cards, fuel_operations

api_router = APIRouter(prefix="/api")

api_router.include_router(fuel_cards.router, prefix="/fuel-cards", tags=["fuel-cards"])
api_router.include_router(fuel_operations.router, prefix="/fuel-operations", tags=["fuel-operations"])
