from .models import Order, OrderStatus

__all__ = ["Order", "OrderStatus"]
