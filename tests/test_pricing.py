from decimal import Decimal

from conftest import make_promotion

from app.domain.entities import AppliedCoupon
from app.services.pricing import calculate_pricing


def test_no_coupon_means_no_discount():
    pricing = calculate_pricing(Decimal("10000"))
    assert pricing.subtotal == Decimal("10000")
    assert pricing.discount_amount == Decimal("0")
    assert pricing.final_total == Decimal("10000")


def test_discount_is_taken_from_applied_coupon():
    coupon = AppliedCoupon(promotion=make_promotion(), discount_amount=Decimal("1000"))
    pricing = calculate_pricing(Decimal("10000"), coupon)
    assert pricing.discount_amount == Decimal("1000")
    assert pricing.final_total == Decimal("9000")


def test_final_total_never_goes_negative():
    coupon = AppliedCoupon(
        promotion=make_promotion("FLAT", kind="fixed", value="5000"),
        discount_amount=Decimal("5000"),
    )
    pricing = calculate_pricing(Decimal("3000"), coupon)
    assert pricing.discount_amount == Decimal("5000")
    assert pricing.final_total == Decimal("0")
