# app/domain/entities.py
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    ON_THE_WAY = "on_the_way"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    OrderStatus.PENDING: "Pending",
    OrderStatus.CONFIRMED: "Confirmed",
    OrderStatus.PREPARING: "Preparing",
    OrderStatus.READY: "Ready",
    OrderStatus.ON_THE_WAY: "On the Way",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.CANCELLED: "Cancelled",
}


class CartLine(BaseModel):
    """One distinct menu item in the cart."""

    item_id: str
    name: str
    unit_price: Decimal = Field(..., ge=0)
    quantity: int = Field(1, ge=1)
    category: str = ""
    image_ref: str = ""

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class Category(BaseModel):
    id: str
    name: str
    sort_order: int = 0
    is_active: bool = True


class MenuItem(BaseModel):
    """Menu item as returned by the catalog service."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str | None = None
    price: Decimal = Field(..., ge=0)
    category: str | None = None
    image_url: str | None = None
    is_available: bool = True

    def to_cart_line(self) -> CartLine:
        return CartLine(
            item_id=self.id,
            name=self.name,
            unit_price=self.price,
            quantity=1,
            category=self.category or "Uncategorized",
            image_ref=self.image_url or "",
        )


class Promotion(BaseModel):
    """
    Discount rule from the catalog. `kind` and `valid_until` are read from
    the catalog's `type` and `end_date` columns.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    description: str | None = None
    kind: Literal["percentage", "fixed"] = Field(..., alias="type")
    value: Decimal = Field(..., ge=0)
    code: str | None = None
    min_order_amount: Decimal = Field(Decimal("0"), ge=0)
    is_active: bool = True
    valid_until: datetime | None = Field(None, alias="end_date")

    @field_validator("valid_until")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def is_valid_at(self, now: datetime) -> bool:
        if not self.is_active:
            return False
        return self.valid_until is None or self.valid_until > now


class AppliedCoupon(BaseModel):
    model_config = ConfigDict(frozen=True)

    promotion: Promotion
    discount_amount: Decimal


class Pricing(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: Decimal
    discount_amount: Decimal
    final_total: Decimal


class CustomerInfo(BaseModel):
    name: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    email: str | None = None
    notes: str | None = None

    @property
    def delivery_address(self) -> str:
        return f"{self.address}, {self.city}"


class OrderDraft(BaseModel):
    """Snapshot of everything that goes into a single order submission."""

    model_config = ConfigDict(frozen=True)

    customer: CustomerInfo
    lines: List[CartLine]
    subtotal: Decimal
    discount_amount: Decimal
    final_total: Decimal
