# app/api/__init__.py
from fastapi import FastAPI

from app.api.routers import carts, checkout, menu, orders
from app.api.routers.health import router as health_router
from app.services.cart_storage import CartStorage
from app.services.catalog_client import CatalogClient


def create_app(cart_storage: CartStorage, catalog: CatalogClient) -> FastAPI:
    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
    )

    # shared clients, handed to the routers through app.api.deps
    app.state.cart_storage = cart_storage
    app.state.catalog = catalog

    app.include_router(health_router)
    app.include_router(menu.router)
    app.include_router(carts.router)
    app.include_router(checkout.router)
    app.include_router(orders.router)
    return app
