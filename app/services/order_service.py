# app/services/order_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.data.models.order import OrderModel
from app.domain.entities import OrderStatus
from app.domain.errors import NotFoundError
from app.repos.order_repo import OrderRepo
from app.utils.formatters import format_price
from app.utils.logging import get_logger

logger = get_logger(__name__)


def status_label(status: str) -> str:
    try:
        return OrderStatus(status).label
    except ValueError:
        return status.replace("_", " ").title()


class OrderService:
    """
    Read side of orders: confirmation view and order history.
    Orders are only created through CheckoutService.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)

    def get_order(self, order_id: int) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)

        if not order:
            logger.info(f"Order {order_id} not found")
            raise NotFoundError("Order not found")

        return self._to_dict(order, with_customer=True)

    def list_customer_orders(self, email: str) -> List[Dict[str, Any]]:
        customer = self.repo.find_customer_by_email(email)
        if not customer:
            return []

        orders = self.repo.list_orders_for_customer(customer.id)
        logger.info(f"Fetched {len(orders)} orders for customer {customer.id}")
        return [self._to_dict(o) for o in orders]

    def _to_dict(self, order: OrderModel, with_customer: bool = False) -> Dict[str, Any]:
        data = {
            "id": order.id,
            "status": order.status,
            "status_label": status_label(order.status),
            "subtotal": order.subtotal,
            "discount_amount": order.discount_amount,
            "total": order.total,
            "total_display": format_price(order.total),
            "delivery_address": order.delivery_address,
            "notes": order.notes,
            "created_at": order.created_at,
            "order_items": [
                {
                    "id": i.id,
                    "menu_item_id": i.menu_item_id,
                    "name": i.name,
                    "quantity": i.quantity,
                    "unit_price": i.unit_price,
                    "total_price": i.total_price,
                }
                for i in order.items
            ],
        }

        if with_customer:
            customer = order.customer
            data["customer"] = (
                {"name": customer.name, "phone": customer.phone, "email": customer.email}
                if customer
                else {"name": order.customer_name, "phone": order.customer_phone, "email": None}
            )

        return data
