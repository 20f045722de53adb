# app/api/routers/checkout.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_checkout_service
from app.domain.entities import Pricing
from app.domain.errors import CheckoutValidationError, DownstreamWriteError
from app.domain.schemas import CheckoutIn, CheckoutOut
from app.services.checkout_service import CheckoutService
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.post("/", response_model=CheckoutOut)
def checkout(
    payload: CheckoutIn,
    svc: CheckoutService = Depends(get_checkout_service),
):
    """
    Place an order from a cart snapshot sent by the client.
    Errors come back as {"error": message}, 400 for bad input, 500 when a write fails.
    """
    pricing = Pricing(
        subtotal=payload.subtotal,
        discount_amount=payload.discount_amount,
        final_total=payload.final_total,
    )
    lines = [line.to_cart_line() for line in payload.cart]

    try:
        order_id = svc.submit(payload.to_customer(), lines, pricing)
    except CheckoutValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except DownstreamWriteError as e:
        logger.error(f"Checkout failed: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})

    return CheckoutOut(order_id=order_id)
