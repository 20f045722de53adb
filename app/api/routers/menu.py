# app/api/routers/menu.py
from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_catalog
from app.domain.errors import CatalogError
from app.services.catalog_client import CatalogClient

router = APIRouter(prefix="/menu", tags=["menu"])


@router.get("/")
def get_menu(catalog: CatalogClient = Depends(get_catalog)):
    """Active categories and available menu items."""
    try:
        menu = catalog.fetch_menu()
    except CatalogError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return {
        "categories": [c.model_dump() for c in menu["categories"]],
        "menuItems": [i.model_dump(mode="json") for i in menu["menu_items"]],
    }
