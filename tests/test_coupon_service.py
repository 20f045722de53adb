from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from conftest import make_promotion

from app.domain.errors import EmptyCodeError, InvalidCodeError, MinimumNotMetError
from app.services.coupon_service import apply_coupon, find_promotion


@pytest.mark.parametrize("code", ["", "   ", "\t"])
def test_blank_code_rejected(promotions, code):
    with pytest.raises(EmptyCodeError):
        apply_coupon(code, promotions, Decimal("10000"))


def test_unknown_code_rejected(promotions):
    with pytest.raises(InvalidCodeError):
        apply_coupon("NOPE", promotions, Decimal("10000"))


def test_match_is_case_insensitive_on_name_and_code(promotions):
    assert find_promotion("save10", promotions).name == "SAVE10"
    assert find_promotion("welcome", promotions).name == "Welcome"
    assert find_promotion(" bigspender ", promotions).name == "BIGSPENDER"


def test_first_match_in_fetch_order_wins():
    first = make_promotion("DEAL", value="5", id="one")
    second = make_promotion("Other", value="50", code="deal", id="two")
    assert find_promotion("DEAL", [first, second]).id == "one"
    assert find_promotion("DEAL", [second, first]).id == "two"


def test_percentage_coupon_discount():
    promo = make_promotion("TEN", value="10", min_order="0")
    coupon = apply_coupon("TEN", [promo], Decimal("10000"))
    assert coupon.discount_amount == Decimal("1000")
    assert coupon.promotion == promo


def test_fixed_coupon_passes_value_through():
    promo = make_promotion("FLAT", kind="fixed", value="7000")
    coupon = apply_coupon("flat", [promo], Decimal("5000"))
    assert coupon.discount_amount == Decimal("7000")


def test_minimum_not_met_reports_required_amount(promotions):
    with pytest.raises(MinimumNotMetError) as exc:
        apply_coupon("BIGSPENDER", promotions, Decimal("49999"))
    assert exc.value.required_amount == Decimal("50000")
    assert "50,000 RWF" in str(exc.value)


def test_minimum_is_inclusive(promotions):
    coupon = apply_coupon("SAVE10", promotions, Decimal("5000"))
    assert coupon.discount_amount == Decimal("500")


def test_promotion_validity_window():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    open_ended = make_promotion("A")
    expired = make_promotion("B", valid_until=now - timedelta(seconds=1))
    running = make_promotion("C", valid_until=now + timedelta(days=1))
    inactive = make_promotion("D", is_active=False)

    assert open_ended.is_valid_at(now)
    assert not expired.is_valid_at(now)
    assert running.is_valid_at(now)
    assert not inactive.is_valid_at(now)


def test_naive_end_date_is_read_as_utc():
    promo = make_promotion("A", valid_until=datetime(2026, 1, 1))
    assert promo.valid_until.tzinfo == timezone.utc
