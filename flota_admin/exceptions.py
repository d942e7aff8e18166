"""
Errores de dominio / Domain errors.
Cada error lleva el codigo HTTP con el que se responde al cliente.
Each error carries the HTTP status it is rendered with.
"""


class FleetError(Exception):
    """Error base / Base error (500)."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(FleetError):
    status_code = 404


class InvalidArgumentError(FleetError):
    status_code = 400


class FuelCardNotFound(NotFoundError):
    def __init__(self, card_id: int):
        super().__init__("Fuel card not found")
        self.card_id = card_id


class FuelOperationNotFound(NotFoundError):
    def __init__(self, operation_id: int):
        super().__init__("Fuel operation not found")
        self.operation_id = operation_id


class InvalidOperationType(InvalidArgumentError):
    def __init__(self, operation_type):
        super().__init__("Invalid tipoOperacion")
        self.operation_type = operation_type


class InvalidOperationDate(InvalidArgumentError):
    def __init__(self, value):
        super().__init__(f"Invalid fecha: {value!r}")
        self.value = value


class OutOfOrderOperation(InvalidArgumentError):
    """Operacion anterior a la ultima del libro / Operation dated before the card's latest one."""

    def __init__(self, date: str, latest_date: str):
        super().__init__(f"fecha {date} is earlier than the latest operation on this card ({latest_date})")
        self.date = date
        self.latest_date = latest_date


class InvalidSortField(InvalidArgumentError):
    def __init__(self, field: str, allowed: list[str]):
        super().__init__(f"Invalid orderBy '{field}'. Allowed: {allowed}")
        self.field = field


class InvalidFuelPrice(InvalidArgumentError):
    def __init__(self, card_id: int):
        super().__init__("Fuel card has no valid fuel price")
        self.card_id = card_id


class LedgerStorageError(FleetError):
    """Fallo interno (persistencia u otro) / Internal failure, wraps the underlying error."""

    def __init__(self, message: str, cause: Exception):
        super().__init__(message)
        self.cause = cause
