# print_queue/orders/models.py

import enum
import uuid

from sqlalchemy import CheckConstraint, Column, Enum, Index, Integer, String, Text

from ..database.core import Base


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    ARCHIVED = "archived"

    @classmethod
    def values(cls):
        return [member.value for member in cls]


class Order(Base):
    """
    A single print job tracked through pending -> completed/archived.

    Timestamps are stored as canonical ISO-8601 UTC strings (see
    ``utils.timestamps.to_iso``) so that ordering by the raw column is
    chronological.
    """
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_number = Column(String, nullable=False)
    item_name = Column(String, nullable=False)
    filament_type = Column(String, nullable=False)
    filament_color = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    ship_by = Column(String, nullable=True)
    notes = Column(Text, nullable=False, default="")
    status = Column(
        Enum(
            OrderStatus,
            name="order_status",
            native_enum=False,
            create_constraint=True,
            validate_strings=True,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=OrderStatus.PENDING,
    )
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_orders_quantity_positive"),
        Index("idx_orders_status", "status"),
        Index("idx_orders_ship_by", "ship_by"),
    )

    def __repr__(self):
        return f"<Order {self.id} {self.order_number!r} status={self.status}>"
