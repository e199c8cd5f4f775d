# marketfresh/domain/errors.py
from enum import Enum


class Reason(str, Enum):
    """Expected, recoverable business failures surfaced to the client."""

    CART_NOT_FOUND = "CART_NOT_FOUND"
    CART_NOT_OPEN = "CART_NOT_OPEN"
    CART_EMPTY = "CART_EMPTY"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    ORDER_NOT_PAYABLE = "ORDER_NOT_PAYABLE"
    PAYMENT_INTENT_NOT_FOUND = "PAYMENT_INTENT_NOT_FOUND"
    PAYMENT_INTENT_NOT_CONFIRMABLE = "PAYMENT_INTENT_NOT_CONFIRMABLE"


class ShopError(Exception):
    """
    Raised by services for a business precondition that does not hold.
    Anything else raised from a service is an unexpected fault.
    """

    def __init__(self, reason: Reason, detail: str | None = None):
        self.reason = reason
        self.detail = detail
        super().__init__(detail or reason.value)


class CartError(ShopError):
    pass


class OrderError(ShopError):
    pass


class PaymentError(ShopError):
    pass
