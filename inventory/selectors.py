"""Read-side queries for the inventory domain (multi-location)."""

from common.exceptions import NotFound
from django.db.models import Prefetch

from .models import Item, StockLevel, Supplier, Transaction


def item_queryset():
    levels = StockLevel.objects.select_related("location").order_by("position", "id")
    return Item.objects.prefetch_related(Prefetch("stock_levels", queryset=levels))


def get_item(item_id) -> Item:
    try:
        return item_queryset().get(pk=item_id)
    except (Item.DoesNotExist, ValueError, TypeError):
        raise NotFound(f"Inventory item with ID {item_id} not found")


def stock_level_for(*, item_id, location_id) -> StockLevel | None:
    return StockLevel.objects.filter(item_id=item_id, location_id=location_id).first()


def transaction_queryset():
    return Transaction.objects.select_related("item", "from_location", "to_location", "supplier", "performed_by")


def get_transaction(transaction_id) -> Transaction:
    try:
        return transaction_queryset().get(pk=transaction_id)
    except (Transaction.DoesNotExist, ValueError, TypeError):
        raise NotFound(f"Transaction with ID {transaction_id} not found")


def supplier_queryset():
    return Supplier.objects.order_by("company_name", "id")


def get_supplier(supplier_id) -> Supplier:
    try:
        return Supplier.objects.get(pk=supplier_id)
    except (Supplier.DoesNotExist, ValueError, TypeError):
        raise NotFound(f"Supplier with ID {supplier_id} not found")


# EOF
