from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional

from ..orders.models import OrderStatus


class OrderResponse(BaseModel):
    """External shape of an order; only these fields ever leave the service."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    order_number: str
    item_name: str
    filament_type: str
    filament_color: str
    quantity: int
    ship_by: Optional[str] = None
    notes: str = ""
    status: OrderStatus
    created_at: str
    updated_at: str


class HealthResponse(BaseModel):
    ok: bool
    timestamp: str
