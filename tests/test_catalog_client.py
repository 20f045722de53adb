from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from app.domain.errors import CatalogError
from app.services.catalog_client import CatalogClient

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def response(payload, status=200):
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error", response=resp)
    return resp


def client_returning(*responses):
    session = MagicMock()
    session.get.side_effect = list(responses)
    return CatalogClient(base_url="http://catalog.test/", timeout=1, session=session), session


def test_promotions_keep_fetch_order_and_drop_expired():
    payload = [
        {"id": "1", "name": "SAVE10", "type": "percentage", "value": 10, "code": "SAVE10",
         "min_order_amount": 5000, "is_active": True, "end_date": None},
        {"id": "2", "name": "OLD", "type": "fixed", "value": 500, "min_order_amount": 0,
         "is_active": True, "end_date": "2026-01-01T00:00:00Z"},
        {"id": "3", "name": "Welcome", "type": "fixed", "value": "1000", "min_order_amount": 0,
         "is_active": True, "end_date": "2027-01-01T00:00:00"},
    ]
    catalog, session = client_returning(response(payload))

    promotions = catalog.fetch_active_promotions(NOW)

    assert [p.name for p in promotions] == ["SAVE10", "Welcome"]
    assert promotions[0].kind == "percentage"
    assert promotions[0].min_order_amount == Decimal("5000")
    assert promotions[1].value == Decimal("1000")
    assert session.get.call_args.args[0] == "http://catalog.test/promotions"


def test_malformed_promotion_payload_raises_catalog_error():
    catalog, _ = client_returning(response([{"id": "1", "name": "X", "type": "bogo", "value": 1}]))
    with pytest.raises(CatalogError):
        catalog.fetch_active_promotions(NOW)


def test_menu_item_not_found_returns_none():
    catalog, _ = client_returning(response({"detail": "Menu item not found"}, status=404))
    assert catalog.fetch_menu_item("nope") is None


def test_menu_item_parsed():
    catalog, session = client_returning(
        response({"id": "a", "name": "Goat Brochette", "price": 5000, "category": "Mains"})
    )
    item = catalog.fetch_menu_item("a")

    assert item.price == Decimal("5000")
    assert item.to_cart_line().category == "Mains"
    assert session.get.call_args.args[0] == "http://catalog.test/menu-items/a"


def test_menu_filters_and_sorts():
    categories = [
        {"id": "d", "name": "Drinks", "sort_order": 2},
        {"id": "m", "name": "Mains", "sort_order": 1},
        {"id": "s", "name": "Seasonal", "sort_order": 0, "is_active": False},
    ]
    items = [
        {"id": "a", "name": "Goat Brochette", "price": 5000},
        {"id": "t", "name": "Tilapia", "price": 9000, "is_available": False},
    ]
    catalog, _ = client_returning(response(categories), response(items))

    menu = catalog.fetch_menu()

    assert [c.name for c in menu["categories"]] == ["Mains", "Drinks"]
    assert [i.id for i in menu["menu_items"]] == ["a"]


def test_transport_errors_retried_then_reported(monkeypatch):
    monkeypatch.setattr(CatalogClient._get.retry, "sleep", lambda _: None)
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("down")
    catalog = CatalogClient(base_url="http://catalog.test", session=session)

    with pytest.raises(CatalogError):
        catalog.fetch_active_promotions(NOW)

    assert session.get.call_count == 3


def test_server_errors_are_retried(monkeypatch):
    monkeypatch.setattr(CatalogClient._get.retry, "sleep", lambda _: None)
    item = {"id": "a", "name": "Goat Brochette", "price": 5000}
    catalog, session = client_returning(response({}, status=503), response(item))

    assert catalog.fetch_menu_item("a").name == "Goat Brochette"
    assert session.get.call_count == 2


def test_client_errors_are_not_retried(monkeypatch):
    monkeypatch.setattr(CatalogClient._get.retry, "sleep", lambda _: None)
    catalog, session = client_returning(response({}, status=400), response([]))

    with pytest.raises(CatalogError):
        catalog.fetch_active_promotions(NOW)

    assert session.get.call_count == 1
