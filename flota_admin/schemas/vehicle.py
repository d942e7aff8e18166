"""Schemas Vehiculo / Vehicle schemas."""

from pydantic import BaseModel, ConfigDict, Field


class VehicleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    license_plate: str = Field(serialization_alias="matricula")
    brand: str | None = Field(default=None, serialization_alias="marca")
    model: str | None = Field(default=None, serialization_alias="modelo")
