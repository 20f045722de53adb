# app/repos/order_repo.py
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.data.models.customer import CustomerModel
from app.data.models.order import OrderModel
from app.data.models.order_item import OrderItemModel


class OrderRepo:
    """Order store: customers, orders and order lines."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    # customers
    def find_customer_by_email(self, email: str) -> CustomerModel | None:
        return self.db.execute(
            select(CustomerModel).where(CustomerModel.email == email)
        ).scalar_one_or_none()

    def create_customer(self, email: str, name: str, phone: str, address: str) -> int:
        customer = CustomerModel(email=email, name=name, phone=phone, address=address)
        self.db.add(customer)
        self._commit()
        self.db.refresh(customer)
        return customer.id

    def update_customer(self, customer_id: int, name: str, phone: str, address: str) -> None:
        customer = self.db.get(CustomerModel, customer_id)
        if customer is None:
            return
        customer.name = name
        customer.phone = phone
        customer.address = address
        self._commit()

    # orders
    def create_order(self, fields: Dict[str, Any]) -> int:
        order = OrderModel(**fields)
        self.db.add(order)
        self._commit()
        self.db.refresh(order)
        return order.id

    def create_order_lines(self, order_id: int, lines: List[Dict[str, Any]]) -> None:
        self.db.add_all(OrderItemModel(order_id=order_id, **line) for line in lines)
        self._commit()

    def delete_order(self, order_id: int) -> None:
        order = self.db.get(OrderModel, order_id)
        if order is None:
            return
        self.db.delete(order)
        self._commit()

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .options(selectinload(OrderModel.items), selectinload(OrderModel.customer))
        ).scalar_one_or_none()

    def list_orders_for_customer(self, customer_id: int) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.customer_id == customer_id)
                .options(selectinload(OrderModel.items))
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars().all()
        )
