"""
One-time import of the legacy flat-file order store.

Before the database existed, orders lived in a JSON array on disk. On startup
the array is copied into the database if, and only if, the database holds no
orders yet and the file exists. A successful import renames the file with a
backup suffix. The import is best effort: any failure is logged, the
transaction rolled back, and startup carries on.
"""

import json
import logging
import os
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..orders.models import Order, OrderStatus
from ..orders.service import coerce_notes, coerce_quantity, coerce_text
from ..orders.store import OrderStore
from ..utils.timestamps import normalize_timestamp, utc_now_iso

logger = logging.getLogger(__name__)


def normalize_legacy_entry(entry: Dict[str, Any], now: str) -> Dict[str, Any]:
    """Fill in defaults for whatever a legacy record is missing."""
    status = str(entry.get("status") or OrderStatus.PENDING.value).lower()
    if status not in OrderStatus.values():
        status = OrderStatus.PENDING.value

    created_at = normalize_timestamp(entry.get("createdAt")) or now
    updated_at = normalize_timestamp(entry.get("updatedAt")) or now
    if updated_at < created_at:
        updated_at = created_at

    return {
        "id": coerce_text(entry.get("id")) or str(uuid.uuid4()),
        "order_number": coerce_text(entry.get("orderNumber")) or "UNKNOWN",
        "item_name": coerce_text(entry.get("itemName")) or "UNKNOWN ITEM",
        "filament_type": coerce_text(entry.get("filamentType")) or "unknown",
        "filament_color": coerce_text(entry.get("filamentColor")) or "unknown",
        "quantity": coerce_quantity(entry.get("quantity")) or 1,
        "ship_by": normalize_timestamp(entry.get("shipBy")),
        "notes": coerce_notes(entry.get("notes")),
        "status": OrderStatus(status),
        "created_at": created_at,
        "updated_at": updated_at,
    }


def import_legacy_orders(db: Session, legacy_file: Optional[str] = None, backup_suffix: Optional[str] = None) -> int:
    """
    Import legacy orders into an empty store.

    Returns:
        Number of orders imported (0 when skipped or on failure)
    """
    legacy_file = legacy_file or settings.LEGACY_ORDERS_FILE
    backup_suffix = backup_suffix or settings.LEGACY_BACKUP_SUFFIX

    if not os.path.exists(legacy_file):
        return 0

    try:
        if OrderStore(db).count() > 0:
            logger.debug("Order store already populated, skipping legacy import")
            return 0

        with open(legacy_file, "r", encoding="utf-8") as fh:
            payload = json.load(fh)

        if not isinstance(payload, list) or not payload:
            logger.info(f"Legacy file {legacy_file} holds no orders, nothing to import")
            return 0

        now = utc_now_iso()
        rows: List[Order] = [
            Order(**normalize_legacy_entry(entry if isinstance(entry, dict) else {}, now))
            for entry in payload
        ]

        db.add_all(rows)
        db.commit()

        backup_path = f"{legacy_file}{backup_suffix}"
        os.replace(legacy_file, backup_path)
        logger.info(
            f"Migrated {len(rows)} legacy orders to the database. "
            f"Backup saved to {os.path.basename(backup_path)}"
        )
        return len(rows)

    except Exception as e:
        db.rollback()
        logger.error(f"Failed to import legacy orders from {legacy_file}: {e}", exc_info=True)
        return 0
