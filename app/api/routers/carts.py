#app/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_cart_service, get_checkout_service
from app.domain.errors import (
    CatalogError,
    CheckoutValidationError,
    CouponError,
    DownstreamWriteError,
    NotFoundError,
)
from app.domain.schemas import (
    AddItemIn,
    CartOut,
    CheckoutOut,
    CouponIn,
    CustomerIn,
    QuantityIn,
)
from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/carts", tags=["carts"])


@router.get("/{session_id}", response_model=CartOut)
def get_cart(session_id: str, svc: CartService = Depends(get_cart_service)):
    return svc.get_cart(session_id)


@router.post("/{session_id}/items", response_model=CartOut)
def add_item(
    session_id: str,
    payload: AddItemIn,
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.add_item(session_id, payload.item_id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CatalogError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{session_id}/items/{item_id}", response_model=CartOut)
def set_quantity(
    session_id: str,
    item_id: str,
    payload: QuantityIn,
    svc: CartService = Depends(get_cart_service),
):
    return svc.set_quantity(session_id, item_id, payload.quantity)


@router.delete("/{session_id}/items/{item_id}", response_model=CartOut)
def remove_item(
    session_id: str,
    item_id: str,
    svc: CartService = Depends(get_cart_service),
):
    return svc.remove_item(session_id, item_id)


@router.delete("/{session_id}", response_model=CartOut)
def clear_cart(session_id: str, svc: CartService = Depends(get_cart_service)):
    return svc.clear_cart(session_id)


@router.post("/{session_id}/coupon", response_model=CartOut)
def apply_coupon(
    session_id: str,
    payload: CouponIn,
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.apply_coupon(session_id, payload.code)
    except CouponError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CatalogError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.delete("/{session_id}/coupon", response_model=CartOut)
def remove_coupon(session_id: str, svc: CartService = Depends(get_cart_service)):
    return svc.remove_coupon(session_id)


@router.post("/{session_id}/checkout", response_model=CheckoutOut)
def checkout_cart(
    session_id: str,
    payload: CustomerIn,
    svc: CartService = Depends(get_cart_service),
    checkout: CheckoutService = Depends(get_checkout_service),
):
    """Place an order from the stored cart; the cart is emptied only on success."""
    try:
        order_id = svc.checkout(session_id, payload.to_customer(), checkout)
    except CheckoutValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DownstreamWriteError as e:
        logger.error(f"Checkout of cart {session_id} failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to process checkout")

    return CheckoutOut(order_id=order_id)
