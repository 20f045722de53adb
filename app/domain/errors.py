# app/domain/errors.py
from decimal import Decimal

from app.utils.formatters import format_price


class StorefrontError(Exception):
    """Base class for errors raised by the storefront services."""


class CheckoutValidationError(StorefrontError):
    pass


class CouponError(StorefrontError):
    pass


class EmptyCodeError(CouponError):
    def __init__(self):
        super().__init__("Please enter a coupon code")


class InvalidCodeError(CouponError):
    def __init__(self, code: str):
        self.code = code
        super().__init__("Invalid coupon code")


class MinimumNotMetError(CouponError):
    def __init__(self, required_amount: Decimal):
        self.required_amount = required_amount
        super().__init__(f"Minimum order amount of {format_price(required_amount)} required")


class DownstreamWriteError(StorefrontError):
    """Customer, order or order line could not be written."""


class NotFoundError(StorefrontError):
    pass


class CatalogError(StorefrontError):
    """Catalog service unreachable or returned an unexpected payload."""
