# app/api/routers/orders.py
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.deps import get_cart_service, get_order_service
from app.domain.errors import NotFoundError
from app.domain.schemas import CartOut, OrderEnvelopeOut, OrderListOut
from app.services.cart_service import CartService
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("/", response_model=OrderListOut)
def list_orders(
    email: str = Query(..., min_length=1),
    svc: OrderService = Depends(get_order_service),
):
    """
    Order history of a customer, newest first.
    """
    return {"orders": svc.list_customer_orders(email)}


@router.get("/{order_id}", response_model=OrderEnvelopeOut)
def get_order(
    order_id: int,
    svc: OrderService = Depends(get_order_service),
):
    """
    Order details for the confirmation view.
    """
    try:
        return {"data": svc.get_order(order_id)}
    except NotFoundError as e:
        return JSONResponse(status_code=404, content={"error": str(e)})


@router.post("/{order_id}/reorder", response_model=CartOut)
def reorder(
    order_id: int,
    session_id: str = Query(..., min_length=1),
    orders: OrderService = Depends(get_order_service),
    carts: CartService = Depends(get_cart_service),
):
    try:
        order = orders.get_order(order_id)
    except NotFoundError as e:
        return JSONResponse(status_code=404, content={"error": str(e)})

    return carts.reorder(session_id, order["order_items"])
