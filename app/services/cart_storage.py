# app/services/cart_storage.py
import json
from typing import Dict, List, Protocol

import redis

from app.domain.entities import AppliedCoupon, CartLine
from app.utils.retry import redis_retry
from app.utils.settings import REDIS_URL, CART_TTL_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartStorage(Protocol):
    def load(self, session_id: str) -> List[CartLine]: ...

    def save(self, session_id: str, lines: List[CartLine]) -> None: ...

    def delete(self, session_id: str) -> None: ...

    def load_coupon(self, session_id: str) -> AppliedCoupon | None: ...

    def save_coupon(self, session_id: str, coupon: AppliedCoupon) -> None: ...

    def delete_coupon(self, session_id: str) -> None: ...


def _cart_key(session_id: str) -> str:
    return f"cart:{session_id}"


def _coupon_key(session_id: str) -> str:
    return f"cart:{session_id}:coupon"


class RedisCartStorage:
    """
    Cart kept as a JSON list under cart:{session_id}.
    Every write refreshes the TTL so an active cart never expires mid-session.
    """

    def __init__(self, url: str | None = None, ttl: int = CART_TTL_SECONDS, client=None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @redis_retry()
    def load(self, session_id: str) -> List[CartLine]:
        raw = self.redis.get(_cart_key(session_id))
        if not raw:
            return []
        return [CartLine.model_validate(row) for row in json.loads(raw)]

    @redis_retry()
    def save(self, session_id: str, lines: List[CartLine]) -> None:
        payload = json.dumps([line.model_dump(mode="json") for line in lines])
        self.redis.set(name=_cart_key(session_id), value=payload, ex=self.ttl)

    @redis_retry()
    def delete(self, session_id: str) -> None:
        logger.info(f"Delete cart {session_id}")
        self.redis.delete(_cart_key(session_id))

    @redis_retry()
    def load_coupon(self, session_id: str) -> AppliedCoupon | None:
        raw = self.redis.get(_coupon_key(session_id))
        if not raw:
            return None
        return AppliedCoupon.model_validate_json(raw)

    @redis_retry()
    def save_coupon(self, session_id: str, coupon: AppliedCoupon) -> None:
        self.redis.set(
            name=_coupon_key(session_id),
            value=coupon.model_dump_json(),
            ex=self.ttl,
        )

    @redis_retry()
    def delete_coupon(self, session_id: str) -> None:
        self.redis.delete(_coupon_key(session_id))


class InMemoryCartStorage:
    """Process-local storage, used for tests and CART_BACKEND=memory."""

    def __init__(self):
        self._carts: Dict[str, str] = {}
        self._coupons: Dict[str, str] = {}

    def load(self, session_id: str) -> List[CartLine]:
        raw = self._carts.get(session_id)
        if raw is None:
            return []
        return [CartLine.model_validate(row) for row in json.loads(raw)]

    def save(self, session_id: str, lines: List[CartLine]) -> None:
        self._carts[session_id] = json.dumps([line.model_dump(mode="json") for line in lines])

    def delete(self, session_id: str) -> None:
        self._carts.pop(session_id, None)

    def load_coupon(self, session_id: str) -> AppliedCoupon | None:
        raw = self._coupons.get(session_id)
        return AppliedCoupon.model_validate_json(raw) if raw else None

    def save_coupon(self, session_id: str, coupon: AppliedCoupon) -> None:
        self._coupons[session_id] = coupon.model_dump_json()

    def delete_coupon(self, session_id: str) -> None:
        self._coupons.pop(session_id, None)
