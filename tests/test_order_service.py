from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.data.models.customer import CustomerModel
from app.data.models.order import OrderModel
from app.data.models.order_item import OrderItemModel
from app.domain.entities import OrderStatus
from app.domain.errors import NotFoundError
from app.services.order_service import OrderService, status_label


def add_order(db, customer=None, created_at=None, status="pending", total="9000"):
    order = OrderModel(
        customer=customer,
        customer_name="Aline",
        customer_phone="0788000000",
        customer_address="KG 11 Ave",
        status=status,
        subtotal=Decimal("10000"),
        discount_amount=Decimal("1000"),
        total=Decimal(total),
        delivery_address="KG 11 Ave, Kigali",
        created_at=created_at or datetime.now(timezone.utc),
    )
    order.items = [
        OrderItemModel(menu_item_id="a", name="Goat Brochette", quantity=2,
                       unit_price=Decimal("5000"), total_price=Decimal("10000")),
    ]
    db.add(order)
    db.commit()
    return order.id


@pytest.fixture
def customer(db_session):
    c = CustomerModel(email="aline@example.com", name="Aline", phone="0788000000", address="KG 11 Ave")
    db_session.add(c)
    db_session.commit()
    return c


def test_get_order_includes_customer_and_items(db_session, customer):
    order_id = add_order(db_session, customer)

    data = OrderService(db_session).get_order(order_id)

    assert data["status"] == "pending"
    assert data["status_label"] == "Pending"
    assert data["total_display"] == "9,000 RWF"
    assert data["customer"] == {"name": "Aline", "phone": "0788000000", "email": "aline@example.com"}
    assert data["order_items"][0]["name"] == "Goat Brochette"
    assert data["order_items"][0]["quantity"] == 2


def test_guest_order_uses_contact_from_order(db_session):
    order_id = add_order(db_session)
    data = OrderService(db_session).get_order(order_id)
    assert data["customer"]["email"] is None
    assert data["customer"]["name"] == "Aline"


def test_get_order_twice_returns_same_data(db_session, customer):
    order_id = add_order(db_session, customer)
    svc = OrderService(db_session)
    assert svc.get_order(order_id) == svc.get_order(order_id)


def test_missing_order_raises_not_found(db_session):
    with pytest.raises(NotFoundError, match="Order not found"):
        OrderService(db_session).get_order(999)


def test_history_is_newest_first(db_session, customer):
    now = datetime.now(timezone.utc)
    old = add_order(db_session, customer, created_at=now - timedelta(days=2))
    new = add_order(db_session, customer, created_at=now, status="on_the_way")
    add_order(db_session)  # guest order, not in anyone's history

    orders = OrderService(db_session).list_customer_orders("aline@example.com")

    assert [o["id"] for o in orders] == [new, old]
    assert orders[0]["status_label"] == "On the Way"


def test_history_for_unknown_email_is_empty(db_session):
    assert OrderService(db_session).list_customer_orders("nobody@example.com") == []


def test_every_status_has_a_label():
    assert [s.label for s in OrderStatus] == [
        "Pending", "Confirmed", "Preparing", "Ready", "On the Way", "Delivered", "Cancelled",
    ]
    assert status_label("refunded") == "Refunded"
