"""Modelo Vehiculo / Vehicle model.

Entidad externa al libro de combustible: solo la matricula se usa en las busquedas.
External to the fuel ledger: only the plate is used by searches.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from flota_admin.database import Base


class Vehicle(Base):
    """Vehiculo de la flota / Fleet vehicle."""
    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    license_plate: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    brand: Mapped[str | None] = mapped_column(String(50))
    model: Mapped[str | None] = mapped_column(String(50))

    def __repr__(self) -> str:
        return f"<Vehicle {self.license_plate}>"
