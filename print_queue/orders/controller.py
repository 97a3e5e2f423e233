from typing import Any, List, Optional

from fastapi import APIRouter, Body, Query, status

from ..core.exceptions import OrderNotFoundError
from ..database.core import DbSession
from ..schemas.orders import OrderResponse
from .service import OrderService

router = APIRouter(prefix="/orders")


@router.get("", response_model=List[OrderResponse])
def list_orders(
    db: DbSession,
    status_filter: Optional[str] = Query(None, alias="status"),
):
    """List orders, soonest ship-by date first. ``status=all`` disables filtering."""
    return OrderService.list_orders(db, status_filter)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(db: DbSession, payload: Any = Body(None)):
    """Create a new print order; it always starts as pending."""
    return OrderService.create_order(db, payload)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: str, db: DbSession):
    order = OrderService.get_order(db, order_id)
    if not order:
        raise OrderNotFoundError(order_id)
    return order


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(order_id: str, db: DbSession, payload: Any = Body(None)):
    """Move an order to pending, completed or archived."""
    new_status = payload.get("status") if isinstance(payload, dict) else None
    order = OrderService.update_order_status(db, order_id, new_status)
    if not order:
        raise OrderNotFoundError(order_id)
    return order


@router.delete("/{order_id}", response_model=OrderResponse)
def delete_order(order_id: str, db: DbSession):
    """Delete an order and return the deleted record."""
    order = OrderService.delete_order(db, order_id)
    if not order:
        raise OrderNotFoundError(order_id)
    return order
