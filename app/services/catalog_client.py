# app/services/catalog_client.py
from datetime import datetime, timezone
from typing import Any, Dict, List

import requests
from pydantic import TypeAdapter, ValidationError

from app.domain.entities import Category, MenuItem, Promotion
from app.domain.errors import CatalogError
from app.utils.retry import http_retry
from app.utils.settings import CATALOG_SERVICE_URL, CATALOG_TIMEOUT_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)

_categories = TypeAdapter(List[Category])
_menu_items = TypeAdapter(List[MenuItem])
_promotions = TypeAdapter(List[Promotion])


class CatalogClient:
    """
    Read-only client for the catalog service (menu and promotions).
    Payloads are validated into domain entities before they leave this class.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = CATALOG_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.base_url = (base_url or CATALOG_SERVICE_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @http_retry()
    def _get(
        self,
        path: str,
        params: Dict[str, Any] | None = None,
        allow_missing: bool = False,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.info(f"CatalogClient GET {url}")

        resp = self.session.get(url, params=params, timeout=self.timeout)
        if allow_missing and resp.status_code == 404:
            return resp
        # 5xx is retried by http_retry, 4xx is not
        resp.raise_for_status()
        return resp

    def _get_json(self, path: str, params: Dict[str, Any] | None = None) -> Any:
        try:
            resp = self._get(path, params=params)
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Catalog request {path} failed: {e}")
            raise CatalogError("Catalog service unavailable") from e

    def fetch_categories(self) -> List[Category]:
        try:
            categories = _categories.validate_python(self._get_json("/categories"))
        except ValidationError as e:
            logger.error(f"Unexpected categories payload: {e}")
            raise CatalogError("Failed to fetch categories") from e

        return sorted((c for c in categories if c.is_active), key=lambda c: c.sort_order)

    def fetch_menu_items(self) -> List[MenuItem]:
        try:
            items = _menu_items.validate_python(self._get_json("/menu-items"))
        except ValidationError as e:
            logger.error(f"Unexpected menu items payload: {e}")
            raise CatalogError("Failed to fetch menu items") from e

        return [i for i in items if i.is_available]

    def fetch_menu(self) -> Dict[str, list]:
        categories = self.fetch_categories()
        items = self.fetch_menu_items()
        logger.info(f"Fetched {len(categories)} categories and {len(items)} menu items")
        return {"categories": categories, "menu_items": items}

    def fetch_menu_item(self, item_id: str) -> MenuItem | None:
        try:
            resp = self._get(f"/menu-items/{item_id}", allow_missing=True)
        except requests.RequestException as e:
            logger.error(f"Catalog request for item {item_id} failed: {e}")
            raise CatalogError("Catalog service unavailable") from e

        if resp.status_code == 404:
            return None

        try:
            return MenuItem.model_validate(resp.json())
        except ValueError as e:
            logger.error(f"Failed to load item {item_id}: {e}")
            raise CatalogError("Failed to load item details") from e

    def fetch_active_promotions(self, now: datetime | None = None) -> List[Promotion]:
        """
        Promotions that are active and not past their end date, in the order
        the catalog returned them. Coupon matching relies on that order.
        """
        now = now or datetime.now(timezone.utc)
        payload = self._get_json(
            "/promotions",
            params={"is_active": "true", "valid_at": now.isoformat()},
        )

        try:
            promotions = _promotions.validate_python(payload)
        except ValidationError as e:
            logger.error(f"Unexpected promotions payload: {e}")
            raise CatalogError("Failed to fetch promotions") from e

        return [p for p in promotions if p.is_valid_at(now)]
