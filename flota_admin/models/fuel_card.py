"""Modelo Tarjeta de combustible / Fuel card model."""

from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from flota_admin.database import Base


class FuelCard(Base):
    """Tarjeta de combustible con precio vigente / Fuel card with its current fuel price."""
    __tablename__ = "fuel_cards"
    __table_args__ = (
        CheckConstraint("fuel_price > 0", name="ck_fuel_cards_fuel_price_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    card_number: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    card_type: Mapped[str | None] = mapped_column(String(20))  # Credito|Debito|Prepago
    fuel_type: Mapped[str | None] = mapped_column(String(20))  # Gasolina|Diesel|Electrico
    fuel_price: Mapped[Decimal] = mapped_column(Numeric(10, 4), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="CUP")
    expiry_date: Mapped[str | None] = mapped_column(String(10))  # YYYY-MM-DD
    is_reservoir: Mapped[bool] = mapped_column(Boolean, default=False)

    # Relaciones / Relations
    operations: Mapped[list["FuelOperation"]] = relationship(back_populates="fuel_card")

    def __repr__(self) -> str:
        return f"<FuelCard {self.card_number} @ {self.fuel_price} {self.currency}>"
