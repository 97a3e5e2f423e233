# print_queue/orders/service.py

from typing import Any, Dict, List, Optional
import logging
import math

from sqlalchemy.orm import Session

from .models import Order, OrderStatus
from .store import OrderStore
from ..core.exceptions import ErrorCode, OrderValidationError
from ..schemas.orders import OrderResponse
from ..utils.timestamps import normalize_timestamp

logger = logging.getLogger(__name__)

# (payload key, column) for the free-form fields every order must carry
REQUIRED_TEXT_FIELDS = [
    ("orderNumber", "order_number"),
    ("itemName", "item_name"),
    ("filamentType", "filament_type"),
    ("filamentColor", "filament_color"),
]


# SQLite INTEGER is a signed 64-bit value
MAX_QUANTITY = 2 ** 63 - 1


def js_string(value: Any) -> str:
    """Render a JSON scalar as browser clients print it: ``true`` and ``1``, not ``True`` and ``1.0``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
    return str(value)


def coerce_text(value: Any) -> Optional[str]:
    """Coerce a scalar to a non-empty string; None if missing, empty or not a scalar."""
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return None
    text = js_string(value)
    return text or None


def coerce_quantity(value: Any) -> Optional[int]:
    """Coerce to a positive whole number that fits the column, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    else:
        if isinstance(value, str):
            value = value.strip()
        try:
            as_float = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(as_float) or not as_float.is_integer():
            return None
        number = int(as_float)
    if number <= 0 or number > MAX_QUANTITY:
        return None
    return number


def coerce_notes(value: Any) -> str:
    # Falsy scalars (None, False, 0, NaN, "") mean "no notes"
    if isinstance(value, (dict, list)) or not value:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return js_string(value)


class OrderService:

    @staticmethod
    def validate_new_order(payload: Any) -> Dict[str, Any]:
        """
        Validate and normalize an untyped creation payload.

        Every failing field is collected before raising, so the caller sees the
        complete list in one response. Any ``status`` in the payload is ignored;
        new orders always start as pending.

        Raises:
            OrderValidationError: if any required field is missing or invalid
        """
        if not isinstance(payload, dict):
            payload = {}

        fields: Dict[str, Any] = {}
        invalid: List[str] = []

        for key, column in REQUIRED_TEXT_FIELDS:
            text = coerce_text(payload.get(key))
            if text is None:
                invalid.append(key)
            else:
                fields[column] = text

        quantity = coerce_quantity(payload.get("quantity"))
        if quantity is None:
            invalid.append("quantity")
        else:
            fields["quantity"] = quantity

        if invalid:
            raise OrderValidationError(invalid)

        fields["ship_by"] = normalize_timestamp(payload.get("shipBy"))
        fields["notes"] = coerce_notes(payload.get("notes"))
        fields["status"] = OrderStatus.PENDING
        return fields

    @staticmethod
    def parse_status(value: Any) -> OrderStatus:
        """Exact match against the status enum; anything else is rejected."""
        if isinstance(value, str) and value in OrderStatus.values():
            return OrderStatus(value)
        raise OrderValidationError(
            ["status"],
            user_message=f"status must be one of: {', '.join(OrderStatus.values())}",
            code=ErrorCode.INVALID_STATUS,
        )

    @staticmethod
    def to_response(order: Order) -> OrderResponse:
        return OrderResponse.model_validate(order)

    @staticmethod
    def list_orders(db: Session, status_filter: Optional[str] = None) -> List[OrderResponse]:
        """List orders sorted for the queue view; ``all`` or no filter returns everything."""
        orders = OrderStore(db).list_orders(status_filter)
        return [OrderService.to_response(order) for order in orders]

    @staticmethod
    def get_order(db: Session, order_id: str) -> Optional[OrderResponse]:
        order = OrderStore(db).get_by_id(order_id)
        return OrderService.to_response(order) if order else None

    @staticmethod
    def create_order(db: Session, payload: Any) -> OrderResponse:
        fields = OrderService.validate_new_order(payload)
        order = OrderStore(db).create(fields)
        logger.info(f"Created order {order.id} ({order.order_number}, qty {order.quantity})")
        return OrderService.to_response(order)

    @staticmethod
    def update_order_status(db: Session, order_id: str, status: Any) -> Optional[OrderResponse]:
        """Returns None when the order doesn't exist. The status is checked first."""
        new_status = OrderService.parse_status(status)
        order = OrderStore(db).update_status(order_id, new_status)
        if order is None:
            return None
        logger.info(f"Order {order_id} moved to {new_status.value}")
        return OrderService.to_response(order)

    @staticmethod
    def delete_order(db: Session, order_id: str) -> Optional[OrderResponse]:
        order = OrderStore(db).delete(order_id)
        if order is None:
            return None
        logger.info(f"Deleted order {order_id}")
        return OrderService.to_response(order)
