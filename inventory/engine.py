"""Stock level invariants: availability clamp, status derivation, totals.

All item-level aggregates are computed here. The functions accept any
iterable of objects exposing ``current_stock``, ``reserved_stock`` and
``minimum_level`` so they work on unsaved ``StockLevel`` instances as well as
querysets.
"""

import logging
from typing import Iterable, NamedTuple

from common.choices import StockStatus
from django.db import transaction

logger = logging.getLogger("solarstock.inventory")


class StockTotals(NamedTuple):
    total_stock: int
    total_reserved: int
    total_available: int


def _as_count(value) -> int:
    try:
        value = int(value or 0)
    except (TypeError, ValueError):
        return 0
    return max(0, value)


def recompute_availability(levels):
    """Set ``available_stock = max(0, current - reserved)`` on every level.

    Missing or negative counts are read as zero. Returns the same levels.
    """
    for level in levels:
        level.current_stock = _as_count(getattr(level, "current_stock", 0))
        level.reserved_stock = _as_count(getattr(level, "reserved_stock", 0))
        level.available_stock = max(0, level.current_stock - level.reserved_stock)
    return levels


def stock_totals(levels: Iterable) -> StockTotals:
    stock = reserved = available = 0
    for level in levels:
        current = _as_count(getattr(level, "current_stock", 0))
        held = _as_count(getattr(level, "reserved_stock", 0))
        stock += current
        reserved += held
        available += max(0, current - held)
    return StockTotals(stock, reserved, available)


def derive_stock_status(levels: Iterable) -> str:
    """OUT_OF_STOCK at zero, LOW_STOCK at or under the smallest minimum level."""
    levels = list(levels)
    total = stock_totals(levels).total_stock
    if total == 0:
        return StockStatus.OUT_OF_STOCK
    minimum = min(_as_count(getattr(level, "minimum_level", 0)) for level in levels)
    if total <= minimum:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def reconciliation_sweep() -> int:
    """Re-derive every item's status and write only the ones that drifted.

    Rows locked by an in-flight ledger write are skipped; the next run picks
    them up. Returns the number of items updated.
    """
    from .models import Item

    updated = skipped = 0
    item_ids = list(Item.objects.order_by("id").values_list("id", flat=True))
    for item_id in item_ids:
        with transaction.atomic():
            item = Item.objects.select_for_update(skip_locked=True).filter(pk=item_id).first()
            if item is None:
                skipped += 1
                continue
            derived = derive_stock_status(item.stock_levels.all())
            if item.stock_status == derived:
                continue
            item.stock_status = derived
            item.save(update_fields=["stock_status", "updated_at"])
            updated += 1
    logger.info(
        "inventory.reconciled",
        extra={"event": "inventory.reconciled", "scanned": len(item_ids), "updated": updated, "skipped": skipped},
    )
    return updated


# EOF
