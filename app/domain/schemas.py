# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime

from app.domain.entities import CartLine, CustomerInfo


class AddItemIn(BaseModel):
    """Add a menu item to the cart, `quantity` times."""

    item_id: str = Field(..., min_length=1)
    quantity: int = Field(1, gt=0)


class QuantityIn(BaseModel):
    # 0 or less removes the line
    quantity: int


class CouponIn(BaseModel):
    code: str = ""


class CustomerIn(BaseModel):
    """Delivery details entered at checkout. Blank required fields are rejected by the service."""

    name: str = ""
    email: str | None = None
    phone: str = ""
    address: str = ""
    city: str = ""
    notes: str | None = None

    def to_customer(self) -> CustomerInfo:
        return CustomerInfo(**self.model_dump(include=set(CustomerInfo.model_fields)))


class CheckoutLineIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    category: str = ""
    image: str = ""

    def to_cart_line(self) -> CartLine:
        return CartLine(
            item_id=self.id,
            name=self.name,
            unit_price=self.price,
            quantity=self.quantity,
            category=self.category,
            image_ref=self.image,
        )


class CheckoutIn(CustomerIn):
    """Checkout body sent by the storefront page with its own cart snapshot."""

    model_config = ConfigDict(populate_by_name=True)

    cart: List[CheckoutLineIn] = Field(default_factory=list)
    subtotal: Decimal = Decimal("0")
    discount_amount: Decimal = Field(Decimal("0"), ge=0, alias="discountAmount")
    final_total: Decimal = Field(Decimal("0"), ge=0, alias="finalTotal")


class CheckoutOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    order_id: int = Field(..., serialization_alias="orderId")


class CartItemOut(BaseModel):
    item_id: str
    name: str
    unit_price: Decimal
    quantity: int
    category: str
    image_ref: str
    line_total: Decimal


class AppliedCouponOut(BaseModel):
    name: str
    code: str | None = None
    description: str | None = None
    discount_amount: Decimal


class CartOut(BaseModel):
    session_id: str
    items: List[CartItemOut]
    total_items: int
    coupon: AppliedCouponOut | None = None
    subtotal: Decimal
    discount_amount: Decimal
    final_total: Decimal
    final_total_display: str


class OrderItemOut(BaseModel):
    id: int
    menu_item_id: str | None = None
    name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class OrderCustomerOut(BaseModel):
    name: str
    phone: str
    email: str | None = None


class OrderOut(BaseModel):
    id: int
    status: str
    status_label: str
    subtotal: Decimal
    discount_amount: Decimal
    total: Decimal
    total_display: str
    delivery_address: str | None = None
    notes: str | None = None
    created_at: datetime
    customer: OrderCustomerOut | None = None
    order_items: List[OrderItemOut]

    model_config = ConfigDict(from_attributes=True)


class OrderEnvelopeOut(BaseModel):
    data: OrderOut


class OrderListOut(BaseModel):
    orders: List[OrderOut]
