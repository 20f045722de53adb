import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import create_app
from app.data.database import Base, get_db
from app.data.models import CustomerModel, OrderModel, OrderItemModel  # noqa: F401
from app.domain.entities import MenuItem, Promotion
from app.services.cart_storage import InMemoryCartStorage


class StubCatalog:
    """Catalog client double serving a fixed menu and promotion list."""

    def __init__(self, items=None, promotions=None):
        self.items = {i.id: i for i in (items or [])}
        self.promotions = list(promotions or [])
        self.promotion_fetches = 0

    def fetch_menu_item(self, item_id):
        return self.items.get(item_id)

    def fetch_active_promotions(self, now=None):
        self.promotion_fetches += 1
        return list(self.promotions)

    def fetch_menu(self):
        return {"categories": [], "menu_items": list(self.items.values())}


def make_promotion(name="SAVE10", kind="percentage", value="10", min_order="0", code=None, **extra):
    return Promotion(
        id=extra.pop("id", name.lower()),
        name=name,
        description=extra.pop("description", None),
        kind=kind,
        value=Decimal(value),
        code=code,
        min_order_amount=Decimal(min_order),
        **extra,
    )


@pytest.fixture
def menu_items():
    return [
        MenuItem(id="a", name="Goat Brochette", price=Decimal("5000"), category="Mains"),
        MenuItem(id="b", name="Isombe", price=Decimal("4000"), category="Mains"),
        MenuItem(id="c", name="Passion Juice", price=Decimal("1500"), category="Drinks"),
    ]


@pytest.fixture
def promotions():
    return [
        make_promotion("SAVE10", value="10", min_order="5000", code="SAVE10"),
        make_promotion("Welcome", kind="fixed", value="1000", code="WELCOME"),
        make_promotion("BIGSPENDER", value="20", min_order="50000"),
    ]


@pytest.fixture
def catalog(menu_items, promotions):
    return StubCatalog(menu_items, promotions)


@pytest.fixture
def storage():
    return InMemoryCartStorage()


@pytest.fixture
def engine():
    """In-memory SQLite DB for fast testing."""
    _engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(_engine)
    yield _engine
    Base.metadata.drop_all(_engine)


@pytest.fixture
def db_session(engine):
    TestSession = sessionmaker(bind=engine)
    s = TestSession()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def app(engine, storage, catalog):
    TestSession = sessionmaker(bind=engine)

    def override_get_db():
        s = TestSession()
        try:
            yield s
        finally:
            s.close()

    _app = create_app(cart_storage=storage, catalog=catalog)
    _app.dependency_overrides[get_db] = override_get_db
    return _app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
