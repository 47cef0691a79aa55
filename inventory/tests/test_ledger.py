import re

import pytest
from common.choices import ReservedStockAction, StockStatus, TransactionType
from common.exceptions import BadRequest, InsufficientStock, NotFound
from django.core.exceptions import ValidationError
from inventory.models import StockLevel, Transaction, generate_transaction_ref
from inventory.services import create_transaction, update_reserved_stock
from inventory.tests.factories import SupplierFactory, UserFactory, create_stocked_item
from locations.tests.factories import StockLocationFactory


def _level(item, location) -> StockLevel:
    return StockLevel.objects.get(item=item, location=location)


@pytest.mark.django_db
def test_breaker_purchase_sale_and_rejected_oversell():
    user = UserFactory()
    wh1 = StockLocationFactory(name="WH1")
    item = create_stocked_item((wh1, 100, 0, 20), item_code="BRK-001")

    # Purchase 50 into WH1
    txn = create_transaction(
        item_id=item.id,
        transaction_type=TransactionType.PURCHASE,
        quantity=50,
        to_location_id=wh1.id,
        performed_by=user,
    )
    level = _level(item, wh1)
    item.refresh_from_db()
    assert level.current_stock == 150
    assert level.available_stock == 150
    assert item.stock_status == StockStatus.IN_STOCK
    assert (txn.stock_before, txn.stock_after) == (100, 150)

    # Sell 140 from WH1 -> 10 left, at or under the minimum of 20
    txn = create_transaction(
        item_id=item.id, transaction_type=TransactionType.SALE, quantity=140, from_location_id=wh1.id, performed_by=user
    )
    item.refresh_from_db()
    assert _level(item, wh1).current_stock == 10
    assert item.stock_status == StockStatus.LOW_STOCK
    assert (txn.stock_before, txn.stock_after) == (150, 10)

    # Selling 20 with only 10 on hand is rejected without side effects
    with pytest.raises(InsufficientStock) as exc:
        create_transaction(
            item_id=item.id,
            transaction_type=TransactionType.SALE,
            quantity=20,
            from_location_id=wh1.id,
            performed_by=user,
        )
    assert "Available: 10, Requested: 20" in exc.value.detail
    assert _level(item, wh1).current_stock == 10
    assert Transaction.objects.filter(item=item).count() == 2


@pytest.mark.django_db
def test_allocation_then_unreserve_all():
    user = UserFactory()
    wh1 = StockLocationFactory()
    item = create_stocked_item((wh1, 10, 0, 0))

    create_transaction(
        item_id=item.id,
        transaction_type=TransactionType.ALLOCATION,
        quantity=5,
        from_location_id=wh1.id,
        performed_by=user,
    )
    level = _level(item, wh1)
    assert (level.current_stock, level.reserved_stock, level.available_stock) == (10, 5, 5)

    update_reserved_stock(
        item_id=item.id, location_id=wh1.id, action=ReservedStockAction.UNRESERVE_ALL, performed_by=user
    )
    level = _level(item, wh1)
    assert (level.reserved_stock, level.available_stock) == (0, 10)
    release = Transaction.objects.filter(item=item).order_by("-id").first()
    assert release.transaction_type == TransactionType.RETURN
    assert release.quantity == 5


@pytest.mark.django_db
def test_transfer_conserves_stock_across_locations():
    user = UserFactory()
    a = StockLocationFactory()
    b = StockLocationFactory()
    item = create_stocked_item((a, 30, 0, 0), (b, 5, 0, 0))

    txn = create_transaction(
        item_id=item.id,
        transaction_type=TransactionType.TRANSFER,
        quantity=12,
        from_location_id=a.id,
        to_location_id=b.id,
        performed_by=user,
    )
    assert _level(item, a).current_stock == 18
    assert _level(item, b).current_stock == 17
    assert txn.stock_before == txn.stock_after == 35
    assert txn.from_location.name == a.name
    assert txn.to_location.name == b.name


@pytest.mark.django_db
@pytest.mark.parametrize(
    "transaction_type",
    [
        TransactionType.SALE,
        TransactionType.ADJUSTMENT_OUT,
        TransactionType.CONSUMPTION,
        TransactionType.DAMAGE,
        TransactionType.MAINTENANCE,
    ],
)
def test_outbound_types_cannot_overdraw(transaction_type):
    user = UserFactory()
    wh = StockLocationFactory()
    item = create_stocked_item((wh, 4, 0, 0))

    with pytest.raises(InsufficientStock):
        create_transaction(
            item_id=item.id, transaction_type=transaction_type, quantity=5, from_location_id=wh.id, performed_by=user
        )
    assert _level(item, wh).current_stock == 4
    assert not Transaction.objects.filter(item=item).exists()


@pytest.mark.django_db
def test_allocation_guard_uses_unreserved_stock():
    user = UserFactory()
    wh = StockLocationFactory()
    item = create_stocked_item((wh, 10, 7, 0))

    with pytest.raises(InsufficientStock) as exc:
        create_transaction(
            item_id=item.id,
            transaction_type=TransactionType.ALLOCATION,
            quantity=4,
            from_location_id=wh.id,
            performed_by=user,
        )
    assert "Insufficient available stock" in exc.value.detail
    assert _level(item, wh).reserved_stock == 7
    assert not Transaction.objects.filter(item=item).exists()


@pytest.mark.django_db
@pytest.mark.parametrize(
    "transaction_type, with_source, message",
    [
        (TransactionType.PURCHASE, False, "to_location required"),
        (TransactionType.SALE, False, "from_location required"),
        (TransactionType.ALLOCATION, False, "from_location required"),
        (TransactionType.TRANSFER, True, "Both from_location and to_location required"),
    ],
)
def test_missing_required_location_leaves_no_transaction(transaction_type, with_source, message):
    user = UserFactory()
    wh = StockLocationFactory()
    item = create_stocked_item((wh, 10, 0, 0))
    kwargs = {"from_location_id": wh.id} if with_source else {}

    with pytest.raises(BadRequest) as exc:
        create_transaction(item_id=item.id, transaction_type=transaction_type, quantity=1, performed_by=user, **kwargs)
    assert exc.value.detail == message
    assert not Transaction.objects.exists()


@pytest.mark.django_db
def test_purchase_into_location_without_stock_level_is_not_found():
    user = UserFactory()
    stocked = StockLocationFactory()
    elsewhere = StockLocationFactory()
    item = create_stocked_item((stocked, 10, 0, 0))

    with pytest.raises(NotFound) as exc:
        create_transaction(
            item_id=item.id,
            transaction_type=TransactionType.PURCHASE,
            quantity=5,
            to_location_id=elsewhere.id,
            performed_by=user,
        )
    assert exc.value.detail == "Destination location not found in stock levels"
    assert not Transaction.objects.exists()


@pytest.mark.django_db
def test_unknown_references_are_rejected():
    user = UserFactory()
    wh = StockLocationFactory()
    item = create_stocked_item((wh, 10, 0, 0))

    with pytest.raises(NotFound):
        create_transaction(
            item_id=999999,
            transaction_type=TransactionType.PURCHASE,
            quantity=1,
            to_location_id=wh.id,
            performed_by=user,
        )
    with pytest.raises(BadRequest) as exc:
        create_transaction(
            item_id=item.id,
            transaction_type=TransactionType.PURCHASE,
            quantity=1,
            to_location_id=999999,
            performed_by=user,
        )
    assert exc.value.detail == "One or more provided stock locations do not exist"
    with pytest.raises(NotFound):
        create_transaction(
            item_id=item.id,
            transaction_type=TransactionType.PURCHASE,
            quantity=1,
            to_location_id=wh.id,
            supplier_id=999999,
            performed_by=user,
        )
    assert not Transaction.objects.exists()


@pytest.mark.django_db
def test_quantity_and_type_validation():
    user = UserFactory()
    a = StockLocationFactory()
    b = StockLocationFactory()
    item = create_stocked_item((a, 10, 0, 0), (b, 0, 0, 0))

    for quantity in (0, -3):
        with pytest.raises(BadRequest):
            create_transaction(
                item_id=item.id,
                transaction_type=TransactionType.PURCHASE,
                quantity=quantity,
                to_location_id=a.id,
                performed_by=user,
            )
    with pytest.raises(BadRequest):
        create_transaction(
            item_id=item.id,
            transaction_type=TransactionType.TRANSFER,
            quantity=1,
            from_location_id=a.id,
            to_location_id=a.id,
            performed_by=user,
        )
    with pytest.raises(BadRequest) as exc:
        create_transaction(
            item_id=item.id, transaction_type="barter", quantity=1, to_location_id=a.id, performed_by=user
        )
    assert exc.value.detail == "Unsupported transaction type: barter"
    assert not Transaction.objects.exists()


@pytest.mark.django_db
def test_inactive_items_still_accept_transactions():
    user = UserFactory()
    wh = StockLocationFactory()
    item = create_stocked_item((wh, 0, 0, 0), is_active=False)

    create_transaction(
        item_id=item.id, transaction_type=TransactionType.RETURN, quantity=2, to_location_id=wh.id, performed_by=user
    )
    item.refresh_from_db()
    assert item.stock_status == StockStatus.IN_STOCK
    assert _level(item, wh).current_stock == 2


@pytest.mark.django_db
def test_purchase_records_supplier_performer_and_reference():
    user = UserFactory()
    supplier = SupplierFactory(company_name="Sunpower Distributors")
    wh = StockLocationFactory()
    item = create_stocked_item((wh, 0, 0, 0))

    txn = create_transaction(
        item_id=item.id,
        transaction_type=TransactionType.PURCHASE,
        quantity=3,
        to_location_id=wh.id,
        supplier_id=supplier.id,
        performed_by=user.id,
        project="PRJ-007",
        document_ref="GRN-1001",
    )
    assert txn.supplier.company_name == "Sunpower Distributors"
    assert txn.performed_by == user
    assert txn.project == "PRJ-007"
    assert re.fullmatch(r"TXN-PUR-\d{8}-[A-Z0-9]{8}", txn.transaction_ref)


def test_transaction_ref_uses_type_label_prefix():
    assert generate_transaction_ref(TransactionType.ALLOCATION).startswith("TXN-PRO-")
    assert generate_transaction_ref(TransactionType.DAMAGE).startswith("TXN-DAM-")
    assert generate_transaction_ref(TransactionType.ADJUSTMENT_OUT).startswith("TXN-ADJ-")


@pytest.mark.django_db
def test_transactions_are_append_only():
    user = UserFactory()
    wh = StockLocationFactory()
    item = create_stocked_item((wh, 0, 0, 0))
    txn = create_transaction(
        item_id=item.id, transaction_type=TransactionType.PURCHASE, quantity=1, to_location_id=wh.id, performed_by=user
    )

    txn.notes = "edited"
    with pytest.raises(ValidationError):
        txn.save()
    with pytest.raises(ValidationError):
        txn.delete()
    assert Transaction.objects.get(pk=txn.pk).notes == ""
