# stockroom/api/errors.py
from fastapi import HTTPException

from stockroom.domain.errors import (
    InventoryError,
    ValidationError,
    ConflictError,
    ReferentialError,
    NotFoundError,
)

_STATUS = {
    ValidationError: 400,
    ConflictError: 409,
    ReferentialError: 409,
    NotFoundError: 404,
}


def to_http(e: InventoryError) -> HTTPException:
    status = _STATUS.get(type(e), 400)
    detail = {"kind": e.kind, "message": e.message}
    if isinstance(e, ReferentialError):
        detail["count"] = e.count
    return HTTPException(status_code=status, detail=detail)
