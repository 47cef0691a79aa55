import pytest
from common.choices import BulkOperation, TransactionType
from common.exceptions import BadRequest, InsufficientStock, NotFound
from inventory.models import StockLevel, Transaction
from inventory.services import adjust_stock, bulk_update_stock
from inventory.tests.factories import UserFactory, create_stocked_item
from locations.tests.factories import StockLocationFactory


def _current(item, location) -> int:
    return StockLevel.objects.get(item=item, location=location).current_stock


@pytest.mark.django_db
def test_adjust_stock_maps_sign_to_adjustment_type():
    user = UserFactory()
    wh = StockLocationFactory()
    item = create_stocked_item((wh, 10, 0, 0))

    txn = adjust_stock(item_id=item.id, location_id=wh.id, adjustment_quantity=4, performed_by=user, reason="Recount")
    assert txn.transaction_type == TransactionType.ADJUSTMENT_IN
    assert txn.to_location_id == wh.id
    assert txn.notes == "Recount"
    assert _current(item, wh) == 14

    txn = adjust_stock(item_id=item.id, location_id=wh.id, adjustment_quantity=-6, performed_by=user)
    assert txn.transaction_type == TransactionType.ADJUSTMENT_OUT
    assert txn.quantity == 6
    assert txn.from_location_id == wh.id
    assert _current(item, wh) == 8


@pytest.mark.django_db
def test_adjust_stock_rejects_zero_and_overdraw():
    user = UserFactory()
    wh = StockLocationFactory()
    item = create_stocked_item((wh, 3, 0, 0))

    with pytest.raises(BadRequest) as exc:
        adjust_stock(item_id=item.id, location_id=wh.id, adjustment_quantity=0, performed_by=user)
    assert exc.value.detail == "Adjustment quantity cannot be zero"
    with pytest.raises(InsufficientStock):
        adjust_stock(item_id=item.id, location_id=wh.id, adjustment_quantity=-4, performed_by=user)
    assert _current(item, wh) == 3
    assert not Transaction.objects.exists()


@pytest.mark.django_db
def test_bulk_update_applies_each_operation():
    user = UserFactory()
    a = StockLocationFactory()
    b = StockLocationFactory()
    item = create_stocked_item((a, 10, 0, 0), (b, 5, 0, 0))

    results = bulk_update_stock(
        updates=[
            {"item": item.id, "location": a.id, "quantity": 5, "operation": BulkOperation.ADD},
            {"item": item.id, "location": b.id, "quantity": 2, "operation": BulkOperation.SUBTRACT},
            {"item": item.id, "location": a.id, "quantity": 7, "operation": BulkOperation.SET},
            {"item": item.id, "location": b.id, "quantity": 3, "operation": BulkOperation.SET},
        ],
        performed_by=user,
    )
    assert [r["status"] for r in results] == ["applied", "applied", "applied", "unchanged"]
    assert _current(item, a) == 7
    assert _current(item, b) == 3

    types = list(Transaction.objects.filter(item=item).order_by("id").values_list("transaction_type", flat=True))
    assert types == [TransactionType.ADJUSTMENT_IN, TransactionType.ADJUSTMENT_OUT, TransactionType.ADJUSTMENT_OUT]
    assert set(Transaction.objects.values_list("notes", flat=True)) == {"Bulk stock update"}


@pytest.mark.django_db
def test_bulk_set_on_unstocked_location_is_not_found():
    user = UserFactory()
    wh = StockLocationFactory()
    elsewhere = StockLocationFactory()
    item = create_stocked_item((wh, 10, 0, 0))

    with pytest.raises(NotFound):
        bulk_update_stock(
            updates=[{"item": item.id, "location": elsewhere.id, "quantity": 4, "operation": BulkOperation.SET}],
            performed_by=user,
        )
    assert not Transaction.objects.exists()


@pytest.mark.django_db
def test_bulk_update_stops_at_first_failure_keeping_earlier_updates():
    user = UserFactory()
    wh = StockLocationFactory()
    item = create_stocked_item((wh, 10, 0, 0))

    with pytest.raises(InsufficientStock):
        bulk_update_stock(
            updates=[
                {"item": item.id, "location": wh.id, "quantity": 2, "operation": BulkOperation.ADD},
                {"item": item.id, "location": wh.id, "quantity": 50, "operation": BulkOperation.SUBTRACT},
                {"item": item.id, "location": wh.id, "quantity": 1, "operation": BulkOperation.ADD},
            ],
            performed_by=user,
            reason="Quarterly count",
        )
    assert _current(item, wh) == 12
    txn = Transaction.objects.get(item=item)
    assert txn.notes == "Quarterly count"


@pytest.mark.django_db
def test_bulk_update_skips_zero_quantity_entries():
    user = UserFactory()
    wh = StockLocationFactory()
    first = create_stocked_item((wh, 3, 0, 0))
    second = create_stocked_item((wh, 5, 0, 0))

    results = bulk_update_stock(
        updates=[
            {"item": first.id, "location": wh.id, "quantity": 0, "operation": BulkOperation.ADD},
            {"item": first.id, "location": wh.id, "quantity": 0, "operation": BulkOperation.SUBTRACT},
            {"item": second.id, "location": wh.id, "quantity": 5, "operation": BulkOperation.ADD},
        ],
        performed_by=user,
    )
    assert [r["status"] for r in results] == ["unchanged", "unchanged", "applied"]
    assert _current(first, wh) == 3
    assert _current(second, wh) == 10
    assert not Transaction.objects.filter(item=first).exists()
    assert Transaction.objects.filter(item=second).count() == 1
