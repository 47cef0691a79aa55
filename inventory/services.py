"""Inventory services (multi-location): catalog writes and the stock ledger.

Every stock mutation follows the same shape: lock the item row, validate,
compute the new levels in memory, then write the levels, the derived item
status and the audit ``Transaction`` together inside one atomic block. A
rejected request leaves neither a stock change nor a transaction row.
"""

import logging
from dataclasses import dataclass

from common.choices import BulkOperation, ReservedStockAction, TransactionType
from common.exceptions import BadRequest, Conflict, InsufficientStock, InventoryError, NotFound
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction
from locations.models import StockLocation
from locations.services import location_exists

from . import engine
from .events import log_stock_event
from .models import Item, StockLevel, Supplier, Transaction
from .selectors import get_item, get_supplier

INBOUND_TYPES = (TransactionType.PURCHASE, TransactionType.RETURN, TransactionType.ADJUSTMENT_IN)
OUTBOUND_TYPES = (
    TransactionType.SALE,
    TransactionType.CONSUMPTION,
    TransactionType.DAMAGE,
    TransactionType.MAINTENANCE,
    TransactionType.ADJUSTMENT_OUT,
)

LEVEL_FIELDS = ("current_stock", "reserved_stock", "minimum_level", "maximum_level", "reorder_point")

logger = logging.getLogger("solarstock.inventory")


def _lock_item(item_id) -> Item:
    try:
        return Item.objects.select_for_update().get(pk=item_id)
    except (Item.DoesNotExist, ValueError, TypeError):
        raise NotFound("Inventory item not found")


def _location_id(value):
    if isinstance(value, StockLocation):
        return value.pk
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BadRequest(f"Invalid location reference: {value}")


def _validate_stock_level_locations(stock_levels) -> list:
    ids = [_location_id(entry.get("location")) for entry in stock_levels]
    if len(set(ids)) != len(ids):
        raise BadRequest("Each location may appear only once in stock levels")
    if ids and StockLocation.objects.filter(pk__in=ids).count() != len(ids):
        raise BadRequest("One or more stock locations do not exist")
    return ids


def _build_levels(item: Item, stock_levels) -> list:
    levels = []
    for position, entry in enumerate(stock_levels):
        level = StockLevel(item=item, location_id=_location_id(entry.get("location")), position=position)
        for field in LEVEL_FIELDS:
            if entry.get(field) is not None:
                setattr(level, field, entry[field])
        levels.append(level)
    return engine.recompute_availability(levels)


def _full_clean(instance, **kwargs) -> None:
    try:
        instance.full_clean(**kwargs)
    except ValidationError as exc:
        raise BadRequest("; ".join(exc.messages))


# Catalog


@transaction.atomic
def create_item(*, data: dict, stock_levels=None) -> Item:
    """Register an item together with its per-location stock levels."""

    stock_levels = list(stock_levels or [])
    code = (data.get("item_code") or "").strip()
    if Item.objects.filter(item_code=code).exists():
        raise Conflict(f"Item with code {code} already exists")
    _validate_stock_level_locations(stock_levels)

    fields = {**data, "item_code": code}
    fields.setdefault("currency", settings.INVENTORY_DEFAULT_CURRENCY)
    item = Item(**fields)
    levels = _build_levels(item, stock_levels)
    item.stock_status = engine.derive_stock_status(levels)
    _full_clean(item, validate_unique=False)
    item.save()
    for level in levels:
        level.item = item
    StockLevel.objects.bulk_create(levels)
    log_stock_event("inventory.item_created", item_id=item.id, item_code=item.item_code, levels=len(levels))
    return item


@transaction.atomic
def update_item(*, item_id, data: dict, stock_levels=None) -> Item:
    """Edit catalog fields; replaces the stock levels when ``stock_levels`` is given."""

    item = _lock_item(item_id)
    code = data.get("item_code")
    if code is not None:
        code = code.strip()
        if Item.objects.filter(item_code=code).exclude(pk=item.pk).exists():
            raise Conflict(f"Item with code {code} already exists")
        data = {**data, "item_code": code}
    for attr, value in data.items():
        setattr(item, attr, value)

    if stock_levels is not None:
        stock_levels = list(stock_levels)
        _validate_stock_level_locations(stock_levels)
        levels = _build_levels(item, stock_levels)
    else:
        levels = list(item.stock_levels.all())
    item.stock_status = engine.derive_stock_status(levels)
    _full_clean(item, validate_unique=False)
    item.save()
    if stock_levels is not None:
        item.stock_levels.all().delete()
        StockLevel.objects.bulk_create(levels)
    log_stock_event("inventory.item_updated", item_id=item.id, levels_replaced=stock_levels is not None)
    return item


@transaction.atomic
def delete_item(*, item_id) -> str:
    """Deactivate items with ledger history; hard-delete the rest."""

    item = _lock_item(item_id)
    if item.transactions.exists():
        item.is_active = False
        item.save(update_fields=["is_active", "updated_at"])
        log_stock_event("inventory.item_deactivated", item_id=item.id)
        return "deactivated"
    item.delete()
    log_stock_event("inventory.item_deleted", item_id=item_id)
    return "deleted"


@transaction.atomic
def create_supplier(*, company_name: str, supplier_type: str, **fields) -> Supplier:
    company_name = (company_name or "").strip()
    if Supplier.objects.filter(company_name=company_name).exists():
        raise Conflict(f"Supplier with name {company_name} already exists")
    if not fields.get("country"):
        fields["country"] = settings.INVENTORY_DEFAULT_SUPPLIER_COUNTRY
    supplier = Supplier(company_name=company_name, supplier_type=supplier_type, **fields)
    _full_clean(supplier, validate_unique=False)
    supplier.save()
    log_stock_event("inventory.supplier_created", supplier_id=supplier.id)
    return supplier


@transaction.atomic
def update_supplier(*, supplier_id, **fields) -> Supplier:
    supplier = get_supplier(supplier_id)
    name = fields.get("company_name")
    if name is not None:
        name = name.strip()
        if Supplier.objects.filter(company_name=name).exclude(pk=supplier.pk).exists():
            raise Conflict(f"Supplier with name {name} already exists")
        fields["company_name"] = name
    for attr, value in fields.items():
        setattr(supplier, attr, value)
    _full_clean(supplier, validate_unique=False)
    supplier.save()
    log_stock_event("inventory.supplier_updated", supplier_id=supplier.id)
    return supplier


@transaction.atomic
def delete_supplier(*, supplier_id) -> None:
    supplier = get_supplier(supplier_id)
    if supplier.transactions.exists():
        raise BadRequest("Cannot delete supplier with existing transactions")
    supplier.delete()
    log_stock_event("inventory.supplier_deleted", supplier_id=supplier_id)


# Ledger


@dataclass(frozen=True)
class StockDelta:
    """One signed change to a single counter of one location's stock level."""

    location_id: int
    field: str
    amount: int
    role: str


def plan_mutation(transaction_type, quantity: int, *, from_location_id=None, to_location_id=None) -> list:
    """Translate a transaction type into the stock deltas it implies."""

    if transaction_type in INBOUND_TYPES:
        if not to_location_id:
            raise BadRequest("to_location required")
        return [StockDelta(to_location_id, "current_stock", quantity, "Destination")]
    if transaction_type in OUTBOUND_TYPES:
        if not from_location_id:
            raise BadRequest("from_location required")
        return [StockDelta(from_location_id, "current_stock", -quantity, "Source")]
    if transaction_type == TransactionType.TRANSFER:
        if not from_location_id or not to_location_id:
            raise BadRequest("Both from_location and to_location required")
        if int(from_location_id) == int(to_location_id):
            raise BadRequest("Transfer source and destination must be different locations")
        return [
            StockDelta(from_location_id, "current_stock", -quantity, "Source"),
            StockDelta(to_location_id, "current_stock", quantity, "Destination"),
        ]
    if transaction_type == TransactionType.ALLOCATION:
        if not from_location_id:
            raise BadRequest("from_location required")
        return [StockDelta(from_location_id, "reserved_stock", quantity, "Source")]
    raise BadRequest(f"Unsupported transaction type: {transaction_type}")


def apply_deltas(levels, deltas) -> list:
    """Apply ``deltas`` to in-memory levels, checking presence before sufficiency.

    Returns the touched levels. Nothing is written.
    """

    by_location = {level.location_id: level for level in levels}
    resolved = []
    for delta in deltas:
        level = by_location.get(int(delta.location_id))
        if level is None:
            raise NotFound(f"{delta.role} location not found in stock levels")
        resolved.append((delta, level))

    for delta, level in resolved:
        if delta.amount >= 0 and delta.field == "reserved_stock":
            free = int(level.current_stock) - int(level.reserved_stock or 0)
            if free < delta.amount:
                raise InsufficientStock(
                    f"Insufficient available stock at source location. Available: {free}, Requested: {delta.amount}"
                )
        elif delta.amount < 0 and int(level.current_stock) < -delta.amount:
            raise InsufficientStock(
                "Insufficient stock at source location. "
                f"Available: {level.current_stock}, Requested: {-delta.amount}"
            )

    for delta, level in resolved:
        setattr(level, delta.field, int(getattr(level, delta.field) or 0) + delta.amount)
    engine.recompute_availability(levels)
    return [level for _, level in resolved]


def _resolve_performer(performed_by):
    User = get_user_model()
    if isinstance(performed_by, User):
        return performed_by
    user = User.objects.filter(pk=performed_by).first() if performed_by else None
    if user is None:
        raise NotFound(f"User with ID {performed_by} not found")
    return user


def _validate_transaction_locations(*location_ids) -> None:
    if not all(location_exists(pk) for pk in location_ids if pk):
        raise BadRequest("One or more provided stock locations do not exist")


def _persist(item: Item, levels, touched) -> None:
    StockLevel.objects.bulk_update(touched, ["current_stock", "reserved_stock", "available_stock"])
    item.stock_status = engine.derive_stock_status(levels)
    item.save(update_fields=["stock_status", "updated_at"])


def _with_summaries(txn: Transaction) -> Transaction:
    return Transaction.objects.select_related("item", "from_location", "to_location", "supplier", "performed_by").get(
        pk=txn.pk
    )


def create_transaction(
    *,
    item_id,
    transaction_type: str,
    quantity: int,
    performed_by,
    from_location_id=None,
    to_location_id=None,
    supplier_id=None,
    unit_price=None,
    total_value=None,
    project: str = "",
    transaction_date=None,
    notes: str = "",
    document_ref: str = "",
    transaction_ref: str = "",
) -> Transaction:
    """Validate and apply one stock movement, recording it in the ledger.

    Raises NotFound for an unknown item, supplier, performer or a location
    missing from the item's stock levels, and BadRequest for invalid input
    or insufficient stock.
    """

    try:
        with transaction.atomic():
            item = _lock_item(item_id)
            _validate_transaction_locations(from_location_id, to_location_id)
            supplier = get_supplier(supplier_id) if supplier_id else None
            user = _resolve_performer(performed_by)
            if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
                raise BadRequest("Quantity must be a positive integer")

            levels = list(item.stock_levels.select_for_update())
            stock_before = engine.stock_totals(levels).total_stock
            deltas = plan_mutation(
                transaction_type, quantity, from_location_id=from_location_id, to_location_id=to_location_id
            )
            touched = apply_deltas(levels, deltas)
            stock_after = engine.stock_totals(levels).total_stock

            _persist(item, levels, touched)
            extra = {"transaction_date": transaction_date} if transaction_date else {}
            txn = Transaction.objects.create(
                transaction_ref=transaction_ref,
                item=item,
                transaction_type=transaction_type,
                quantity=quantity,
                unit_price=unit_price,
                total_value=total_value,
                from_location_id=from_location_id or None,
                to_location_id=to_location_id or None,
                project=project or "",
                supplier=supplier,
                performed_by=user,
                stock_before=stock_before,
                stock_after=stock_after,
                notes=notes or "",
                document_ref=document_ref or "",
                **extra,
            )
    except InventoryError as exc:
        log_stock_event(
            "inventory.transaction_rejected",
            level=logging.WARNING,
            item_id=item_id,
            transaction_type=str(transaction_type),
            quantity=quantity,
            reason=exc.detail,
        )
        raise
    except Exception:
        logger.exception(
            "inventory.transaction_failed",
            extra={
                "event": "inventory.transaction_failed",
                "item_id": item_id,
                "transaction_type": str(transaction_type),
            },
        )
        raise

    log_stock_event(
        "inventory.transaction_recorded",
        transaction_ref=txn.transaction_ref,
        item_id=item.id,
        transaction_type=str(transaction_type),
        quantity=quantity,
        stock_before=stock_before,
        stock_after=stock_after,
    )
    return _with_summaries(txn)


@transaction.atomic
def update_reserved_stock(
    *, item_id, location_id, action: str, performed_by, quantity=None, notes: str = "", project: str = ""
) -> Item:
    """Move reserved stock at one location and append the matching audit record.

    Reservations never change current stock, so both snapshots equal the
    item's total current stock.
    """

    if action in (ReservedStockAction.INCREASE, ReservedStockAction.DECREASE) and not quantity:
        raise BadRequest("Quantity is required for increase/decrease actions")
    if quantity is not None and quantity < 0:
        raise BadRequest("Quantity must be a positive integer")

    item = _lock_item(item_id)
    user = _resolve_performer(performed_by)
    levels = list(item.stock_levels.select_for_update())
    location_id = _location_id(location_id)
    level = next((lvl for lvl in levels if lvl.location_id == location_id), None)
    if level is None:
        raise NotFound("Location not found in item stock levels")

    reserved = int(level.reserved_stock or 0)
    if action == ReservedStockAction.INCREASE:
        free = int(level.current_stock) - reserved
        if free < quantity:
            raise InsufficientStock(
                f"Cannot reserve more than available stock. Available: {free}, Requested: {quantity}"
            )
        level.reserved_stock = reserved + quantity
        effective, record_type = quantity, TransactionType.ALLOCATION
    elif action == ReservedStockAction.DECREASE:
        if reserved < quantity:
            raise BadRequest(f"Cannot unreserve more than what's reserved. Reserved: {reserved}, Requested: {quantity}")
        level.reserved_stock = reserved - quantity
        effective, record_type = quantity, TransactionType.RETURN
    elif action == ReservedStockAction.UNRESERVE_ALL:
        level.reserved_stock = 0
        effective, record_type = reserved, TransactionType.RETURN
    else:
        raise BadRequest(f"Unsupported action: {action}")

    engine.recompute_availability(levels)
    _persist(item, levels, [level])
    if effective:
        total = engine.stock_totals(levels).total_stock
        Transaction.objects.create(
            item=item,
            transaction_type=record_type,
            quantity=effective,
            from_location_id=location_id,
            project=project or "",
            performed_by=user,
            stock_before=total,
            stock_after=total,
            notes=notes or f"Reserved stock {ReservedStockAction(action).value} operation",
        )
    log_stock_event(
        "inventory.reserved_updated",
        item_id=item.id,
        location_id=location_id,
        action=str(action),
        quantity=effective,
        reserved_stock=level.reserved_stock,
    )
    return get_item(item.id)


def adjust_stock(
    *, item_id, location_id, adjustment_quantity: int, performed_by, reason: str = "", document_ref: str = ""
) -> Transaction:
    """Signed adjustment: positive adds to the location, negative removes from it."""

    if not adjustment_quantity:
        raise BadRequest("Adjustment quantity cannot be zero")
    if adjustment_quantity > 0:
        return create_transaction(
            item_id=item_id,
            transaction_type=TransactionType.ADJUSTMENT_IN,
            quantity=adjustment_quantity,
            to_location_id=location_id,
            performed_by=performed_by,
            notes=reason,
            document_ref=document_ref,
        )
    return create_transaction(
        item_id=item_id,
        transaction_type=TransactionType.ADJUSTMENT_OUT,
        quantity=abs(adjustment_quantity),
        from_location_id=location_id,
        performed_by=performed_by,
        notes=reason,
        document_ref=document_ref,
    )


def bulk_update_stock(*, updates, performed_by, reason: str = "") -> list:
    """Apply add/subtract/set updates one by one.

    Each update commits on its own. The first failure stops the batch and
    propagates; earlier updates stay committed.
    """

    notes = reason or "Bulk stock update"
    results = []
    for entry in updates:
        item_id = entry["item"]
        location_id = _location_id(entry["location"])
        quantity = int(entry["quantity"])
        operation = entry["operation"]

        if operation == BulkOperation.ADD:
            transaction_type, amount = TransactionType.ADJUSTMENT_IN, quantity
        elif operation == BulkOperation.SUBTRACT:
            transaction_type, amount = TransactionType.ADJUSTMENT_OUT, quantity
        elif operation == BulkOperation.SET:
            item = get_item(item_id)
            level = item.stock_levels.filter(location_id=location_id).first()
            if level is None:
                transaction_type, amount = TransactionType.ADJUSTMENT_IN, quantity
            else:
                difference = quantity - int(level.current_stock)
                transaction_type = TransactionType.ADJUSTMENT_IN if difference > 0 else TransactionType.ADJUSTMENT_OUT
                amount = abs(difference)
        else:
            raise BadRequest(f"Unsupported bulk operation: {operation}")

        if amount == 0:
            results.append({"item": item_id, "location": location_id, "status": "unchanged"})
            continue

        location_kwargs = (
            {"to_location_id": location_id}
            if transaction_type == TransactionType.ADJUSTMENT_IN
            else {"from_location_id": location_id}
        )
        txn = create_transaction(
            item_id=item_id,
            transaction_type=transaction_type,
            quantity=amount,
            performed_by=performed_by,
            notes=notes,
            **location_kwargs,
        )
        results.append(
            {"item": item_id, "location": location_id, "status": "applied", "transaction_ref": txn.transaction_ref}
        )
    log_stock_event("inventory.bulk_updated", updates=len(results))
    return results


# EOF
