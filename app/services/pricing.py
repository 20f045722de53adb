# app/services/pricing.py
from decimal import Decimal

from app.domain.entities import AppliedCoupon, Pricing

ZERO = Decimal("0")


def calculate_pricing(subtotal: Decimal, coupon: AppliedCoupon | None = None) -> Pricing:
    discount = coupon.discount_amount if coupon else ZERO
    # a fixed coupon can exceed a cart that shrank after it was applied
    final_total = max(subtotal - discount, ZERO)
    return Pricing(subtotal=subtotal, discount_amount=discount, final_total=final_total)
