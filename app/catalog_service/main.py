# catalog_service/main.py
from fastapi import FastAPI, HTTPException

app = FastAPI(title="Catalog Service (dev mock)")


CATEGORIES = [
    {"id": "mains", "name": "Mains", "sort_order": 1, "is_active": True},
    {"id": "drinks", "name": "Drinks", "sort_order": 2, "is_active": True},
    {"id": "seasonal", "name": "Seasonal", "sort_order": 3, "is_active": False},
]

MENU_ITEMS = {
    "brochette": {"id": "brochette", "name": "Goat Brochette", "description": "Grilled, with plantain",
                  "price": 5000, "category": "Mains", "image_url": "/img/brochette.jpg", "is_available": True},
    "isombe": {"id": "isombe", "name": "Isombe", "description": "Cassava leaves stew",
               "price": 4000, "category": "Mains", "image_url": "/img/isombe.jpg", "is_available": True},
    "juice": {"id": "juice", "name": "Passion Juice", "description": None,
              "price": 1500, "category": "Drinks", "image_url": None, "is_available": True},
    "tilapia": {"id": "tilapia", "name": "Whole Tilapia", "description": "Sold out today",
                "price": 9000, "category": "Mains", "image_url": None, "is_available": False},
}

PROMOTIONS = [
    {"id": "p1", "name": "SAVE10", "description": "10% off", "type": "percentage", "value": 10,
     "code": "SAVE10", "min_order_amount": 5000, "is_active": True, "end_date": None},
    {"id": "p2", "name": "Welcome", "description": "1,000 RWF off your first order", "type": "fixed",
     "value": 1000, "code": "WELCOME", "min_order_amount": 0, "is_active": True, "end_date": None},
]


@app.get("/categories")
def get_categories():
    return CATEGORIES


@app.get("/menu-items")
def get_menu_items():
    return list(MENU_ITEMS.values())


@app.get("/menu-items/{item_id}")
def get_menu_item(item_id: str):
    item = MENU_ITEMS.get(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


@app.get("/promotions")
def get_promotions():
    return [p for p in PROMOTIONS if p["is_active"]]
