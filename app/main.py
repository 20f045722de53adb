# app/main.py
from app.api import create_app
from app.data.database import Base, engine
from app.services.cart_storage import InMemoryCartStorage, RedisCartStorage
from app.services.catalog_client import CatalogClient
from app.utils.settings import CART_BACKEND
from app.utils.logging import get_logger
import uvicorn

# import all models before create_all so they are registered in Base.metadata
from app.data.models import CustomerModel, OrderModel, OrderItemModel  # noqa: F401

logger = get_logger(__name__)


def init_db() -> None:
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise


def build_cart_storage():
    if CART_BACKEND == "memory":
        logger.info("Using in-memory cart storage")
        return InMemoryCartStorage()
    return RedisCartStorage()


init_db()
app = create_app(cart_storage=build_cart_storage(), catalog=CatalogClient())

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
