# app/api/deps.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.repos.order_repo import OrderRepo
from app.services.cart_service import CartService
from app.services.cart_storage import CartStorage
from app.services.catalog_client import CatalogClient
from app.services.checkout_service import CheckoutService
from app.services.order_service import OrderService


# cart storage and catalog client are created once in create_app
def get_cart_storage(request: Request) -> CartStorage:
    return request.app.state.cart_storage


def get_catalog(request: Request) -> CatalogClient:
    return request.app.state.catalog


def get_cart_service(
    storage: CartStorage = Depends(get_cart_storage),
    catalog: CatalogClient = Depends(get_catalog),
) -> CartService:
    return CartService(storage=storage, catalog=catalog)


def get_checkout_service(db: Session = Depends(get_db)) -> CheckoutService:
    return CheckoutService(OrderRepo(db))


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)
