# app/utils/formatters.py
from decimal import Decimal, ROUND_HALF_UP

from app.utils.settings import CURRENCY_LABEL


def format_price(amount: Decimal | int | float, currency: str | None = None) -> str:
    """15000 -> '15,000 RWF'. Fractions are rounded to whole currency units."""
    whole = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{int(whole):,} {currency or CURRENCY_LABEL}"
