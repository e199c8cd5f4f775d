# marketfresh/api/errors.py
from typing import Dict, Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from marketfresh.domain.errors import Reason, ShopError

# every Reason must have an entry, checked at import time below
ERROR_RESPONSES: Dict[Reason, Tuple[int, str]] = {
    Reason.CART_NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Cart not found"),
    Reason.CART_NOT_OPEN: (status.HTTP_409_CONFLICT, "Cart can no longer be modified"),
    Reason.CART_EMPTY: (status.HTTP_409_CONFLICT, "Cart is empty"),
    Reason.PRODUCT_NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Product not found"),
    Reason.INSUFFICIENT_STOCK: (status.HTTP_409_CONFLICT, "Insufficient stock"),
    Reason.ORDER_NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Order not found"),
    Reason.ORDER_NOT_PAYABLE: (status.HTTP_409_CONFLICT, "Order cannot be paid"),
    Reason.PAYMENT_INTENT_NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Payment intent not found"),
    Reason.PAYMENT_INTENT_NOT_CONFIRMABLE: (status.HTTP_409_CONFLICT, "Payment intent cannot be confirmed"),
}

_unmapped = set(Reason) - set(ERROR_RESPONSES)
if _unmapped:
    raise RuntimeError(f"Unmapped failure reasons: {sorted(r.value for r in _unmapped)}")

_VALIDATION_CODES = {
    "path": "INVALID_PARAMS",
    "query": "INVALID_QUERY",
    "body": "INVALID_BODY",
}


def error_body(code: str, message: str | None = None) -> dict:
    return {"error": code, "message": message}


async def shop_error_handler(request: Request, exc: ShopError) -> JSONResponse:
    status_code, message = ERROR_RESPONSES[exc.reason]
    return JSONResponse(status_code=status_code, content=error_body(exc.reason.value, message))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    location = errors[0]["loc"][0] if errors and errors[0].get("loc") else "body"
    code = _VALIDATION_CODES.get(location, "INVALID_REQUEST")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(code, "Invalid request"),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(status_code=404, content=error_body("NOT_FOUND"))
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body("HTTP_ERROR", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # the server logs the traceback once when ServerErrorMiddleware re-raises, the body stays generic
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_ERROR", "Internal server error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShopError, shop_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
