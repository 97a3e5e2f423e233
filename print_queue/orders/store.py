# print_queue/orders/store.py

from typing import Any, Dict, List, Optional
import logging
import uuid

from sqlalchemy import case, func, update
from sqlalchemy.orm import Session

from .models import Order, OrderStatus
from .query_policy import UnknownStatusFilter, apply_listing_policy, resolve_status_filter
from ..utils.timestamps import utc_now_iso

logger = logging.getLogger(__name__)


class OrderStore:
    """
    Durable persistence of order records.

    Wraps one SQLAlchemy session. Every write commits before returning and
    is rolled back if the commit fails, so a write either fully applies or
    not at all. Lookups that match nothing return None rather than raising.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_orders(self, status_filter: Optional[str] = None) -> List[Order]:
        """All orders, or only those whose status matches ``status_filter``."""
        try:
            status = resolve_status_filter(status_filter)
        except UnknownStatusFilter:
            return []
        return apply_listing_policy(self.db.query(Order), status).all()

    def get_by_id(self, order_id: str) -> Optional[Order]:
        return self.db.get(Order, order_id)

    def count(self) -> int:
        return self.db.query(func.count(Order.id)).scalar() or 0

    def create(self, fields: Dict[str, Any]) -> Order:
        """Persist a new order; ``created_at`` and ``updated_at`` get the same value."""
        timestamp = utc_now_iso()
        order = Order(
            id=fields.get("id") or str(uuid.uuid4()),
            order_number=fields["order_number"],
            item_name=fields["item_name"],
            filament_type=fields["filament_type"],
            filament_color=fields["filament_color"],
            quantity=fields["quantity"],
            ship_by=fields.get("ship_by"),
            notes=fields.get("notes") or "",
            status=fields.get("status") or OrderStatus.PENDING,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self.db.add(order)
        self._commit()
        self.db.refresh(order)
        return order

    def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        # Single UPDATE statement: status and updated_at change together or not at all.
        # A clock reading behind created_at is clamped so updated_at never precedes it.
        now = utc_now_iso()
        result = self.db.execute(
            update(Order)
            .where(Order.id == order_id)
            .values(
                status=status,
                updated_at=case((Order.created_at > now, Order.created_at), else_=now),
            )
            .execution_options(synchronize_session=False)
        )
        if not result.rowcount:
            self.db.rollback()
            return None
        self._commit()

        order = self.get_by_id(order_id)
        if order is not None:
            self.db.refresh(order)
        return order

    def delete(self, order_id: str) -> Optional[Order]:
        """Remove an order and return its state as it was before deletion."""
        order = self.get_by_id(order_id)
        if order is None:
            return None
        snapshot = self._snapshot(order)
        self.db.delete(order)
        self._commit()
        return snapshot

    @staticmethod
    def _snapshot(order: Order) -> Order:
        # Transient copy; the persistent instance is unusable once the delete commits
        return Order(**{column.key: getattr(order, column.key) for column in Order.__table__.columns})

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
