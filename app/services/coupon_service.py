# app/services/coupon_service.py
from decimal import Decimal
from typing import Iterable

from app.domain.entities import AppliedCoupon, Promotion
from app.domain.errors import EmptyCodeError, InvalidCodeError, MinimumNotMetError
from app.utils.logging import get_logger

logger = get_logger(__name__)


def find_promotion(code: str, promotions: Iterable[Promotion]) -> Promotion | None:
    """First promotion whose name or code matches, ignoring case."""
    wanted = code.strip().upper()
    for promotion in promotions:
        if promotion.name.upper() == wanted:
            return promotion
        if promotion.code and promotion.code.upper() == wanted:
            return promotion
    return None


def compute_discount(promotion: Promotion, subtotal: Decimal) -> Decimal:
    if promotion.kind == "percentage":
        return subtotal * (promotion.value / Decimal("100"))
    return promotion.value


def apply_coupon(code: str, promotions: Iterable[Promotion], subtotal: Decimal) -> AppliedCoupon:
    """
    Resolve a user-entered code against the active promotions.

    Raises EmptyCodeError, InvalidCodeError or MinimumNotMetError. The caller
    decides what happens to a previously applied coupon.
    """
    if not code or not code.strip():
        raise EmptyCodeError()

    promotion = find_promotion(code, promotions)
    if not promotion:
        logger.info(f"Coupon {code!r} did not match any active promotion")
        raise InvalidCodeError(code)

    if subtotal < promotion.min_order_amount:
        logger.info(
            f"Coupon {code!r} needs {promotion.min_order_amount}, subtotal is {subtotal}"
        )
        raise MinimumNotMetError(promotion.min_order_amount)

    discount = compute_discount(promotion, subtotal)
    logger.info(f"Coupon {promotion.name} applied, discount {discount}")
    return AppliedCoupon(promotion=promotion, discount_amount=discount)
