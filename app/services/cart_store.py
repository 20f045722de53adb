# app/services/cart_store.py
from decimal import Decimal
from typing import List

from app.domain.entities import CartLine
from app.services.cart_storage import CartStorage
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartStore:
    """
    Cart of a single client session.

    Lines are keyed by item_id and kept in insertion order. Every mutation is
    written straight back to the storage backend; totals are derived on read.
    """

    def __init__(self, storage: CartStorage, session_id: str):
        self.storage = storage
        self.session_id = session_id
        self._lines: List[CartLine] = storage.load(session_id)

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines)

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines)

    @property
    def total_price(self) -> Decimal:
        return sum((line.unit_price * line.quantity for line in self._lines), Decimal("0"))

    def is_empty(self) -> bool:
        return not self._lines

    def get(self, item_id: str) -> CartLine | None:
        for line in self._lines:
            if line.item_id == item_id:
                return line
        return None

    def add(self, item: CartLine, times: int = 1) -> CartLine:
        """Add `times` units of item, written to storage once."""
        if times <= 0:
            raise ValueError("Quantity must be greater than 0")

        existing = self.get(item.item_id)

        if existing:
            existing.quantity += times
            logger.info(
                f"Item {item.item_id} already in cart {self.session_id}, "
                f"quantity {existing.quantity - times} -> {existing.quantity}"
            )
            line = existing
        else:
            line = item.model_copy(update={"quantity": times})
            self._lines.append(line)
            logger.info(f"Item {item.item_id} added to cart {self.session_id}, quantity {times}")

        self._persist()
        return line

    def remove(self, item_id: str) -> None:
        before = len(self._lines)
        self._lines = [line for line in self._lines if line.item_id != item_id]

        if len(self._lines) != before:
            logger.info(f"Item {item_id} removed from cart {self.session_id}")
            self._persist()

    def set_quantity(self, item_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove(item_id)
            return

        line = self.get(item_id)
        if not line:
            return

        line.quantity = quantity
        self._persist()

    def clear(self) -> None:
        self._lines = []
        self.storage.delete(self.session_id)
        logger.info(f"Cart {self.session_id} cleared")

    def _persist(self) -> None:
        self.storage.save(self.session_id, self._lines)
