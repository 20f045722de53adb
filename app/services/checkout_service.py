# app/services/checkout_service.py
from decimal import Decimal
from typing import Any, Dict, List, Protocol

from sqlalchemy.exc import SQLAlchemyError

from app.domain.entities import CartLine, CustomerInfo, OrderDraft, OrderStatus, Pricing
from app.domain.errors import CheckoutValidationError, DownstreamWriteError
from app.utils.logging import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS = ("name", "phone", "address", "city")


class OrderStore(Protocol):
    def find_customer_by_email(self, email: str) -> Any: ...

    def create_customer(self, email: str, name: str, phone: str, address: str) -> int: ...

    def update_customer(self, customer_id: int, name: str, phone: str, address: str) -> None: ...

    def create_order(self, fields: Dict[str, Any]) -> int: ...

    def create_order_lines(self, order_id: int, lines: List[Dict[str, Any]]) -> None: ...

    def delete_order(self, order_id: int) -> None: ...


def validate_customer(customer: CustomerInfo) -> None:
    missing = [f for f in REQUIRED_FIELDS if not (getattr(customer, f) or "").strip()]
    if missing:
        logger.info(f"Checkout rejected, missing fields: {', '.join(missing)}")
        raise CheckoutValidationError("Please fill in all required fields")


def build_draft(customer: CustomerInfo, lines: List[CartLine], pricing: Pricing) -> OrderDraft:
    """Validate everything up front; nothing is written if this raises."""
    validate_customer(customer)

    if not lines:
        raise CheckoutValidationError("Your cart is empty")

    lines_total = sum((line.line_total for line in lines), Decimal("0"))
    if lines_total != pricing.subtotal:
        logger.info(f"Checkout rejected, subtotal {pricing.subtotal} != line total {lines_total}")
        raise CheckoutValidationError("Cart total does not match subtotal")

    if pricing.discount_amount < 0:
        raise CheckoutValidationError("Discount cannot be negative")

    expected_total = max(pricing.subtotal - pricing.discount_amount, Decimal("0"))
    if pricing.final_total != expected_total:
        logger.info(f"Checkout rejected, final total {pricing.final_total} != {expected_total}")
        raise CheckoutValidationError("Order total does not match subtotal and discount")

    return OrderDraft(
        customer=customer,
        lines=[line.model_copy() for line in lines],
        subtotal=pricing.subtotal,
        discount_amount=pricing.discount_amount,
        final_total=pricing.final_total,
    )


class CheckoutService:
    """
    Turns an order draft into customer, order and order line records.

    The three writes are separate calls to the order store. If the order lines
    cannot be written the order created just before is deleted again, so a
    failed checkout never leaves an order without lines.
    """

    def __init__(self, store: OrderStore):
        self.store = store

    def submit(self, customer: CustomerInfo, lines: List[CartLine], pricing: Pricing) -> int:
        draft = build_draft(customer, lines, pricing)

        customer_id = self._resolve_customer(draft.customer)
        order_id = self._create_order(draft, customer_id)
        self._create_lines(order_id, draft.lines)

        logger.info(f"Order {order_id} created, {len(draft.lines)} lines, total {draft.final_total}")
        return order_id

    def _resolve_customer(self, customer: CustomerInfo) -> int | None:
        email = (customer.email or "").strip()
        if not email:
            logger.info("No email given, placing guest order")
            return None

        try:
            existing = self.store.find_customer_by_email(email)
            if existing:
                self.store.update_customer(
                    existing.id,
                    name=customer.name,
                    phone=customer.phone,
                    address=customer.address,
                )
                return existing.id

            return self.store.create_customer(
                email=email,
                name=customer.name,
                phone=customer.phone,
                address=customer.address,
            )
        except SQLAlchemyError as e:
            logger.error(f"Error creating customer: {e}")
            raise DownstreamWriteError("Failed to create customer") from e

    def _create_order(self, draft: OrderDraft, customer_id: int | None) -> int:
        customer = draft.customer
        fields = {
            "customer_id": customer_id,
            "customer_name": customer.name,
            "customer_phone": customer.phone,
            "customer_address": customer.address,
            "status": OrderStatus.PENDING.value,
            "subtotal": draft.subtotal,
            "discount_amount": draft.discount_amount,
            "total": draft.final_total,
            "notes": customer.notes,
            "delivery_address": customer.delivery_address,
        }

        try:
            return self.store.create_order(fields)
        except SQLAlchemyError as e:
            logger.error(f"Error creating order: {e}")
            raise DownstreamWriteError("Failed to create order") from e

    def _create_lines(self, order_id: int, lines: List[CartLine]) -> None:
        rows = [
            {
                "menu_item_id": line.item_id,
                "name": line.name,
                "quantity": line.quantity,
                "unit_price": line.unit_price,
                "total_price": line.unit_price * line.quantity,
            }
            for line in lines
        ]

        try:
            self.store.create_order_lines(order_id, rows)
        except SQLAlchemyError as e:
            logger.error(f"Error creating order items for order {order_id}: {e}")
            self._discard_order(order_id)
            raise DownstreamWriteError("Failed to create order items") from e

    def _discard_order(self, order_id: int) -> None:
        try:
            self.store.delete_order(order_id)
            logger.info(f"Order {order_id} deleted after failed line write")
        except SQLAlchemyError as e:
            # _create_lines still raises its DownstreamWriteError
            logger.error(f"Could not delete incomplete order {order_id}: {e}")
