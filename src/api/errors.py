from fastapi import HTTPException
from src.core.errors import (
    ConstraintViolationError,
    InsufficientStockError,
    NotFoundError,
    OrderManagementError,
)


def to_http_exception(error: OrderManagementError) -> HTTPException:
    """Map a business error onto the HTTP status the routes report it with"""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, (ConstraintViolationError, InsufficientStockError)):
        return HTTPException(status_code=409, detail=str(error))
    # Refund rule failures and anything else the caller can correct
    return HTTPException(status_code=400, detail=str(error))
