"""
Modelos SQLAlchemy / SQLAlchemy models.
Importar todos los modelos aqui para que create_all los detecte.
Import all models here so create_all can detect them.
"""

from flota_admin.models.vehicle import Vehicle
from flota_admin.models.fuel_card import FuelCard
from flota_admin.models.fuel_operation import FuelDistribution, FuelOperation, OperationType
from flota_admin.models.audit import AuditLog

__all__ = [
    "Vehicle",
    "FuelCard",
    "FuelOperation",
    "FuelDistribution",
    "OperationType",
    "AuditLog",
]
