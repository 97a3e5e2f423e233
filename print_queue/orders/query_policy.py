# print_queue/orders/query_policy.py
# Filtering and ordering rules shared by every order listing

from typing import Optional

from sqlalchemy import case
from sqlalchemy.orm import Query

from .models import Order, OrderStatus

ALL_STATUSES = "all"


class UnknownStatusFilter(Exception):
    """The requested status filter names no known status; nothing can match."""


def resolve_status_filter(status_filter: Optional[str]) -> Optional[OrderStatus]:
    """
    Map a raw ``?status=`` value to the status to filter on.

    Returns None when no filtering applies (absent, blank or ``all``).
    Matching is case-insensitive.
    """
    if status_filter is None:
        return None
    normalized = str(status_filter).strip().lower()
    if not normalized or normalized == ALL_STATUSES:
        return None
    try:
        return OrderStatus(normalized)
    except ValueError:
        raise UnknownStatusFilter(normalized)


def listing_order_by():
    """
    ORDER BY clauses for a listing.

    Orders with a ship-by date come first, earliest date first; orders without
    one follow. Ties fall back to creation time and finally to id so the
    ordering is total.
    """
    return (
        case((Order.ship_by.is_(None), 1), else_=0),
        Order.ship_by.asc(),
        Order.created_at.asc(),
        Order.id.asc(),
    )


def apply_listing_policy(query: Query, status: Optional[OrderStatus]) -> Query:
    if status is not None:
        query = query.filter(Order.status == status)
    return query.order_by(*listing_order_by())
