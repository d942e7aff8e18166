"""Schemas Tarjeta de combustible / Fuel card schemas."""

from pydantic import BaseModel, ConfigDict, Field


class FuelCardRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    card_number: str = Field(serialization_alias="numeroDeTarjeta")
    card_type: str | None = Field(default=None, serialization_alias="tipoDeTarjeta")
    fuel_type: str | None = Field(default=None, serialization_alias="tipoDeCombustible")
    fuel_price: float = Field(serialization_alias="precioCombustible")
    currency: str = Field(serialization_alias="moneda")
    expiry_date: str | None = Field(default=None, serialization_alias="fechaVencimiento")
    is_reservoir: bool = Field(default=False, serialization_alias="esReservorio")


class FuelCardBalance(BaseModel):
    """Saldo actual de una tarjeta / Current balance of a card."""
    fuel_card_id: int = Field(serialization_alias="fuelCardId")
    balance: float = Field(serialization_alias="saldo")
    balance_liters: float = Field(serialization_alias="saldoLitros")
    fuel_price: float = Field(serialization_alias="precioCombustible")
    currency: str = Field(serialization_alias="moneda")
    last_operation_id: int | None = Field(default=None, serialization_alias="ultimaOperacionId")
    last_operation_date: str | None = Field(default=None, serialization_alias="ultimaOperacionFecha")
