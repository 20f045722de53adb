# app/services/cart_service.py
from typing import Any, Dict, Iterable

from app.domain.entities import CartLine, CustomerInfo
from app.domain.errors import CheckoutValidationError, InvalidCodeError, NotFoundError
from app.services.cart_storage import CartStorage
from app.services.cart_store import CartStore
from app.services.catalog_client import CatalogClient
from app.services.checkout_service import CheckoutService
from app.services.coupon_service import apply_coupon
from app.services.pricing import calculate_pricing
from app.utils.formatters import format_price
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use cases of a cart session.
    Commands (add, set quantity, remove, clear, coupon, checkout) change the
    stored cart, get_cart only reads it. Pricing is derived on every call.
    """

    def __init__(self, storage: CartStorage, catalog: CatalogClient):
        self.storage = storage
        self.catalog = catalog

    def _store(self, session_id: str) -> CartStore:
        return CartStore(self.storage, session_id)

    # query
    def get_cart(self, session_id: str) -> Dict[str, Any]:
        return self._view(self._store(session_id))

    def _view(self, cart: CartStore) -> Dict[str, Any]:
        coupon = self.storage.load_coupon(cart.session_id)
        pricing = calculate_pricing(cart.total_price, coupon)

        return {
            "session_id": cart.session_id,
            "items": [
                {
                    "item_id": line.item_id,
                    "name": line.name,
                    "unit_price": line.unit_price,
                    "quantity": line.quantity,
                    "category": line.category,
                    "image_ref": line.image_ref,
                    "line_total": line.line_total,
                }
                for line in cart.lines
            ],
            "total_items": cart.total_items,
            "coupon": (
                {
                    "name": coupon.promotion.name,
                    "code": coupon.promotion.code,
                    "description": coupon.promotion.description,
                    "discount_amount": coupon.discount_amount,
                }
                if coupon
                else None
            ),
            "subtotal": pricing.subtotal,
            "discount_amount": pricing.discount_amount,
            "final_total": pricing.final_total,
            "final_total_display": format_price(pricing.final_total),
        }

    # commands
    def add_item(self, session_id: str, item_id: str, quantity: int = 1) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        item = self.catalog.fetch_menu_item(item_id)
        if not item:
            raise NotFoundError("Menu item not found")

        cart = self._store(session_id)
        cart.add(item.to_cart_line(), times=quantity)

        return self._view(cart)

    def set_quantity(self, session_id: str, item_id: str, quantity: int) -> Dict[str, Any]:
        cart = self._store(session_id)
        cart.set_quantity(item_id, quantity)
        return self._view(cart)

    def remove_item(self, session_id: str, item_id: str) -> Dict[str, Any]:
        cart = self._store(session_id)
        cart.remove(item_id)
        return self._view(cart)

    def clear_cart(self, session_id: str) -> Dict[str, Any]:
        cart = self._store(session_id)
        cart.clear()
        self.storage.delete_coupon(session_id)
        return self._view(cart)

    def apply_coupon(self, session_id: str, code: str) -> Dict[str, Any]:
        cart = self._store(session_id)
        promotions = self.catalog.fetch_active_promotions() if code and code.strip() else []

        try:
            coupon = apply_coupon(code, promotions, cart.total_price)
        except InvalidCodeError:
            # an unknown code drops whatever was applied before
            self.storage.delete_coupon(session_id)
            raise

        self.storage.save_coupon(session_id, coupon)
        return self._view(cart)

    def remove_coupon(self, session_id: str) -> Dict[str, Any]:
        self.storage.delete_coupon(session_id)
        logger.info(f"Coupon removed from cart {session_id}")
        return self.get_cart(session_id)

    def checkout(self, session_id: str, customer: CustomerInfo, checkout: CheckoutService) -> int:
        cart = self._store(session_id)
        if cart.is_empty():
            raise CheckoutValidationError("Your cart is empty")

        pricing = calculate_pricing(cart.total_price, self.storage.load_coupon(session_id))
        order_id = checkout.submit(customer, cart.lines, pricing)

        cart.clear()
        self.storage.delete_coupon(session_id)
        return order_id

    def reorder(self, session_id: str, order_items: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
        """Put the lines of a past order back into the cart at their recorded price."""
        cart = self._store(session_id)

        for row in order_items:
            if not row.get("menu_item_id"):
                continue
            line = CartLine(
                item_id=row["menu_item_id"],
                name=row["name"],
                unit_price=row["unit_price"],
            )
            cart.add(line, times=row["quantity"])

        logger.info(f"Reordered into cart {session_id}, {cart.total_items} items")
        return self._view(cart)

