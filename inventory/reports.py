"""Stock, movement and valuation reports plus the dashboard summary.

Reports only read. Totals per item come from ``engine.stock_totals`` so they
match what the ledger writes.
"""

from decimal import Decimal

from common.choices import StockStatus, TransactionType
from django.db.models import Count, F, Q
from django.utils import timezone

from . import engine
from .models import StockLevel, Transaction
from .selectors import item_queryset

MAX_TOP_CATEGORIES = 5
MAX_STOCK_ALERTS = 10


def _money(value) -> Decimal:
    return Decimal(value or 0).quantize(Decimal("0.01"))


def _level_row(level: StockLevel) -> dict:
    return {
        "location": level.location_id,
        "location_name": level.location.name,
        "current_stock": level.current_stock,
        "reserved_stock": level.reserved_stock,
        "available_stock": level.available_stock,
        "minimum_level": level.minimum_level,
        "maximum_level": level.maximum_level,
        "reorder_point": level.reorder_point,
    }


def stock_report(*, category=None, location_id=None, low_stock_only=False, include_valuation=False) -> dict:
    qs = item_queryset().filter(is_active=True).order_by("item_code", "id")
    if category:
        qs = qs.filter(category=category)
    if location_id:
        qs = qs.filter(stock_levels__location_id=location_id).distinct()

    rows = []
    for item in qs:
        levels = list(item.stock_levels.all())
        totals = engine.stock_totals(levels)
        is_low = any(level.current_stock <= level.minimum_level for level in levels)
        if low_stock_only and not is_low:
            continue
        row = {
            "id": item.id,
            "item_code": item.item_code,
            "item_name": item.item_name,
            "category": item.category,
            "stock_status": item.stock_status,
            "stock_levels": [_level_row(level) for level in levels],
            "total_stock": totals.total_stock,
            "total_reserved": totals.total_reserved,
            "total_available": totals.total_available,
            "is_low_stock": is_low,
        }
        if include_valuation:
            row["total_value"] = _money(totals.total_stock * item.standard_cost)
        rows.append(row)

    total_value = sum((row["total_value"] for row in rows), Decimal("0.00")) if include_valuation else Decimal("0.00")
    return {
        "items": rows,
        "summary": {
            "total_items": len(rows),
            "total_value": _money(total_value),
            "low_stock_items": sum(1 for row in rows if row["is_low_stock"]),
        },
    }


def movement_report(*, start_date, end_date, item_id=None, location_id=None) -> dict:
    """Transactions dated within ``[start_date, end_date]``, newest first."""

    qs = Transaction.objects.select_related("item", "from_location", "to_location").filter(
        transaction_date__gte=start_date, transaction_date__lte=end_date
    )
    if item_id:
        qs = qs.filter(item_id=item_id)
    if location_id:
        qs = qs.filter(Q(from_location_id=location_id) | Q(to_location_id=location_id))
    qs = qs.order_by("-transaction_date", "-id")

    movements = []
    by_type: dict[str, dict] = {}
    total_quantity = 0
    for txn in qs:
        movements.append(
            {
                "id": txn.id,
                "transaction_ref": txn.transaction_ref,
                "transaction_type": txn.transaction_type,
                "transaction_date": txn.transaction_date,
                "quantity": txn.quantity,
                "document_ref": txn.document_ref,
                "notes": txn.notes,
                "item": {"id": txn.item_id, "item_code": txn.item.item_code, "item_name": txn.item.item_name},
                "from_location": (
                    {"id": txn.from_location_id, "name": txn.from_location.name} if txn.from_location_id else None
                ),
                "to_location": {"id": txn.to_location_id, "name": txn.to_location.name} if txn.to_location_id else None,
                "stock_before": txn.stock_before,
                "stock_after": txn.stock_after,
            }
        )
        total_quantity += txn.quantity
        bucket = by_type.setdefault(TransactionType(txn.transaction_type).label, {"count": 0, "quantity": 0})
        bucket["count"] += 1
        bucket["quantity"] += txn.quantity

    return {
        "movements": movements,
        "summary": {"total_movements": len(movements), "total_quantity": total_quantity, "by_type": by_type},
    }


def inventory_valuation() -> list:
    """Active items holding stock, most valuable first."""

    rows = []
    for item in item_queryset().filter(is_active=True):
        stock = engine.stock_totals(item.stock_levels.all()).total_stock
        if stock <= 0:
            continue
        rows.append(
            {
                "item": {
                    "id": item.id,
                    "item_code": item.item_code,
                    "item_name": item.item_name,
                    "category": item.category,
                },
                "current_stock": stock,
                "standard_cost": item.standard_cost,
                "last_purchase_price": item.last_purchase_price,
                "total_value": _money(stock * item.standard_cost),
                "last_purchase_value": _money(stock * item.last_purchase_price),
            }
        )
    rows.sort(key=lambda row: (-row["total_value"], row["item"]["item_code"]))
    return rows


def _stock_alerts() -> list:
    levels = (
        StockLevel.objects.select_related("item", "location")
        .filter(item__is_active=True)
        .filter(
            Q(current_stock=0)
            | Q(current_stock__lte=F("minimum_level"))
            | Q(maximum_level__isnull=False, current_stock__gt=F("maximum_level"))
        )
        .order_by("current_stock", "item__item_code", "id")[:MAX_STOCK_ALERTS]
    )
    alerts = []
    for level in levels:
        if level.current_stock == 0:
            kind = "out_of_stock"
        elif level.current_stock <= level.minimum_level:
            kind = "low_stock"
        else:
            kind = "overstock"
        alerts.append(
            {
                "item_id": level.item_id,
                "item_code": level.item.item_code,
                "item_name": level.item.item_name,
                "location": level.location_id,
                "location_name": level.location.name,
                "current_stock": level.current_stock,
                "minimum_level": level.minimum_level,
                "maximum_level": level.maximum_level,
                "alert": kind,
            }
        )
    return alerts


def dashboard_stats(now=None) -> dict:
    now = now or timezone.now()
    month_start = timezone.localtime(now).replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    items = list(item_queryset().filter(is_active=True))
    total_value = sum(
        (engine.stock_totals(item.stock_levels.all()).total_stock * item.standard_cost for item in items),
        Decimal("0.00"),
    )
    monthly = Transaction.objects.filter(transaction_date__gte=month_start, transaction_date__lte=now)
    top_categories = (
        monthly.values("item__category").annotate(transactions=Count("id")).order_by("-transactions", "item__category")
    )
    return {
        "total_items": len(items),
        "total_value": _money(total_value),
        "low_stock_items": sum(1 for item in items if item.stock_status == StockStatus.LOW_STOCK),
        "out_of_stock_items": sum(1 for item in items if item.stock_status == StockStatus.OUT_OF_STOCK),
        "transactions_this_month": monthly.count(),
        "top_categories": [
            {"category": row["item__category"], "transactions": row["transactions"]}
            for row in top_categories[:MAX_TOP_CATEGORIES]
        ],
        "stock_alerts": _stock_alerts(),
    }


# EOF
