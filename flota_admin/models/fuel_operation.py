"""Modelos del libro de combustible / Fuel ledger models.

Una fila por operacion, encadenada por tarjeta: saldo_inicio = saldo_final anterior.
One row per operation, chained per card: opening balance = previous closing balance.
"""

import enum
from decimal import Decimal

from sqlalchemy import ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from flota_admin.database import Base


class OperationType(str, enum.Enum):
    """Tipo de operacion / Operation kind."""
    CARGA = "Carga"  # Load
    CONSUMO = "Consumo"  # Consumption


class FuelOperation(Base):
    """Operacion de combustible / Fuel operation (ledger row)."""
    __tablename__ = "fuel_operations"
    __table_args__ = (
        Index("ix_fuel_operations_card_date", "fuel_card_id", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    operation_type: Mapped[str] = mapped_column(String(20), nullable=False)
    date: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601 UTC
    fuel_card_id: Mapped[int] = mapped_column(ForeignKey("fuel_cards.id"), nullable=False)

    opening_balance: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    amount_liters: Mapped[Decimal] = mapped_column(Numeric(14, 3), nullable=False)
    closing_balance: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    closing_balance_liters: Mapped[Decimal] = mapped_column(Numeric(14, 3), nullable=False)

    created_at: Mapped[str | None] = mapped_column(String(32))

    # Relaciones / Relations
    fuel_card: Mapped["FuelCard"] = relationship(back_populates="operations")
    distributions: Mapped[list["FuelDistribution"]] = relationship(
        back_populates="fuel_operation",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<FuelOperation {self.operation_type} {self.date} card {self.fuel_card_id} -> {self.closing_balance}>"


class FuelDistribution(Base):
    """Reparto de litros consumidos a un vehiculo / Consumed liters allocated to a vehicle."""
    __tablename__ = "fuel_distributions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    fuel_operation_id: Mapped[int] = mapped_column(
        ForeignKey("fuel_operations.id", ondelete="CASCADE"), nullable=False
    )
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id"), nullable=False)
    liters: Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False)

    # Relaciones / Relations
    fuel_operation: Mapped["FuelOperation"] = relationship(back_populates="distributions")
    vehicle: Mapped["Vehicle"] = relationship()

    def __repr__(self) -> str:
        return f"<FuelDistribution {self.liters}L -> vehicle {self.vehicle_id}>"
