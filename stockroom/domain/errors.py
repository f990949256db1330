# stockroom/domain/errors.py


class InventoryError(Exception):
    """Blad domenowy ze stalym rodzajem (kind), routery mapuja go na status HTTP."""

    kind = "inventory_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryError):
    kind = "validation"


class ConflictError(InventoryError):
    kind = "conflict"


class ReferentialError(InventoryError):
    kind = "referential"

    def __init__(self, message: str, count: int):
        super().__init__(message)
        self.count = count


class NotFoundError(InventoryError):
    kind = "not_found"
