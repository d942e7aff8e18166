"""Schemas Operaciones de combustible / Fuel operation schemas.

Los nombres JSON siguen el contrato del panel (tipoOperacion, saldoInicio...).
JSON names follow the dashboard contract (tipoOperacion, saldoInicio...).
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from flota_admin.schemas.fuel_card import FuelCardRead
from flota_admin.schemas.vehicle import VehicleRead


# --- Entrada / Input ---

class FuelDistributionCreate(BaseModel):
    """Reparto a un vehiculo / Allocation to one vehicle.

    Sin validacion de litros > 0 ni de existencia del vehiculo.
    No check that liters > 0 or that the vehicle exists.
    """
    model_config = ConfigDict(populate_by_name=True)

    vehicle_id: int = Field(alias="vehicleId")
    # Numeric(12, 3)
    liters: Decimal = Field(max_digits=12, decimal_places=3)


class FuelOperationCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # str y no OperationType: un tipo desconocido responde 400, no 422
    operation_type: str = Field(alias="tipoOperacion")
    date: str = Field(alias="fecha")
    # Numeric(14, 2)
    amount: Decimal = Field(alias="valorOperacionDinero", max_digits=14, decimal_places=2)
    fuel_card_id: int = Field(alias="fuelCardId")
    distributions: list[FuelDistributionCreate] | None = Field(default=None, alias="fuelDistributions")


# --- Salida / Output ---

class FuelOperationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    operation_type: str = Field(serialization_alias="tipoOperacion")
    date: str = Field(serialization_alias="fecha")
    fuel_card_id: int = Field(serialization_alias="fuelCardId")
    opening_balance: float = Field(serialization_alias="saldoInicio")
    amount: float = Field(serialization_alias="valorOperacionDinero")
    amount_liters: float = Field(serialization_alias="valorOperacionLitros")
    closing_balance: float = Field(serialization_alias="saldoFinal")
    closing_balance_liters: float = Field(serialization_alias="saldoFinalLitros")
    created_at: str | None = Field(default=None, serialization_alias="createdAt")


class FuelDistributionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    fuel_operation_id: int = Field(serialization_alias="fuelOperationId")
    vehicle_id: int = Field(serialization_alias="vehicleId")
    liters: float
    vehicle: VehicleRead | None = None


class FuelOperationDetail(FuelOperationRead):
    fuel_card: FuelCardRead = Field(serialization_alias="fuelCard")
    distributions: list[FuelDistributionRead] = Field(default=[], serialization_alias="fuelDistributions")


class FuelOperationPage(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    data: list[FuelOperationDetail]
    total: int
    page: int
    limit: int
