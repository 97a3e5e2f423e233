# Central models file: importing it registers every table on Base.metadata

from .core import Base
from ..orders.models import Order, OrderStatus

__all__ = [
    "Base",
    "Order",
    "OrderStatus",
]
