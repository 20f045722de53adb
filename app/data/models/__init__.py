# import all models so SQLAlchemy registers them in Base.metadata

from app.data.models.customer import CustomerModel
from app.data.models.order import OrderModel
from app.data.models.order_item import OrderItemModel

__all__ = ["CustomerModel", "OrderModel", "OrderItemModel"]
