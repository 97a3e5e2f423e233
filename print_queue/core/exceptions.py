# print_queue/core/exceptions.py

from enum import Enum
from typing import Optional, Dict, Any, List


class ErrorCode(Enum):
    """Error codes raised by the order service."""

    INVALID_FIELDS = "INVALID_FIELDS"
    INVALID_STATUS = "INVALID_STATUS"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"


class PrintQueueError(Exception):
    """Base exception for all print queue application errors."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.user_message = user_message
        self.technical_details = technical_details
        self.context = context or {}
        super().__init__(self.user_message)

    def to_response(self) -> Dict[str, Any]:
        """Convert to API response format."""
        return {"error": self.user_message}


class OrderValidationError(PrintQueueError):
    """One or more fields of a request failed validation.

    Always user-correctable. ``fields`` lists every failing field name, not
    just the first one encountered.
    """

    def __init__(
        self,
        fields: List[str],
        user_message: Optional[str] = None,
        code: ErrorCode = ErrorCode.INVALID_FIELDS,
    ):
        self.fields = list(fields)
        if user_message is None:
            user_message = f"Missing or invalid fields: {', '.join(self.fields)}"
        super().__init__(code, user_message, context={"fields": self.fields})


class OrderNotFoundError(PrintQueueError):
    """No order exists with the requested id."""

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(
            ErrorCode.ORDER_NOT_FOUND,
            "Order not found",
            context={"order_id": order_id},
        )
