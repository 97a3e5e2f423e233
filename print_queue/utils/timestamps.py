# print_queue/utils/timestamps.py

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Optional
import logging
import math

from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

_datetime_adapter = TypeAdapter(datetime)
_date_adapter = TypeAdapter(date)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_iso(value: datetime) -> str:
    """
    Format a datetime as ISO-8601 UTC with millisecond precision.

    The fixed width and ``Z`` suffix keep the strings lexicographically
    sortable, which the listing order relies on.

    Example: ``2024-01-10T08:30:00.000Z``
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    return to_iso(datetime.now(timezone.utc))


def _from_epoch_millis(value) -> Optional[datetime]:
    if not value or (isinstance(value, float) and not math.isfinite(value)):
        return None
    try:
        return _EPOCH + timedelta(milliseconds=value)
    except (OverflowError, ValueError):
        return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a client supplied date-time, returning None when it is absent or invalid.

    Accepts datetime/date objects, ISO-8601 strings (with or without time and
    offset) and numbers, which count milliseconds since the epoch as browser
    clients send them. Zero counts as absent. Naive values are taken as UTC;
    date-only values mean midnight UTC.
    """
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _from_epoch_millis(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        parsed = _datetime_adapter.validate_python(value)
    except ValidationError:
        try:
            day = _date_adapter.validate_python(value)
        except ValidationError:
            logger.debug(f"Ignoring unparseable timestamp: {value!r}")
            return None
        parsed = datetime.combine(day, time.min)
    except (OverflowError, ValueError):
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_timestamp(value: Any) -> Optional[str]:
    """Parse ``value`` and return it in canonical ISO form, or None."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    try:
        return to_iso(parsed)
    except (OverflowError, ValueError):
        return None
