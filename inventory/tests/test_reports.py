from datetime import timedelta
from decimal import Decimal

import pytest
from common.choices import TransactionType
from django.utils import timezone
from inventory import reports, services
from inventory.tests.factories import UserFactory, create_stocked_item
from locations.tests.factories import StockLocationFactory


@pytest.fixture
def stocked(db):
    wh = StockLocationFactory(name="Main")
    site = StockLocationFactory(name="Site A")
    cable = create_stocked_item(
        (wh, 100, 10, 20), (site, 5, 0, 10), item_code="CBL-016", category="power_cable", standard_cost=Decimal("250")
    )
    panel = create_stocked_item(
        (wh, 4, 0, 0), item_code="PNL-450", category="solar_panel", standard_cost=Decimal("9000")
    )
    empty = create_stocked_item((wh, 0, 0, 0), item_code="BRK-063")
    create_stocked_item((wh, 50, 0, 0), item_code="OLD-001", is_active=False)
    return {"wh": wh, "site": site, "cable": cable, "panel": panel, "empty": empty}


def test_stock_report_rows_and_valuation(stocked):
    report = reports.stock_report(include_valuation=True)

    assert [row["item_code"] for row in report["items"]] == ["BRK-063", "CBL-016", "PNL-450"]
    cable = report["items"][1]
    assert (cable["total_stock"], cable["total_reserved"], cable["total_available"]) == (105, 10, 95)
    assert cable["is_low_stock"] is True
    assert cable["total_value"] == Decimal("26250.00")
    assert [level["location_name"] for level in cable["stock_levels"]] == ["Main", "Site A"]
    assert report["summary"] == {"total_items": 3, "total_value": Decimal("62250.00"), "low_stock_items": 2}


def test_stock_report_filters(stocked):
    assert [row["item_code"] for row in reports.stock_report(category="solar_panel")["items"]] == ["PNL-450"]
    by_site = reports.stock_report(location_id=stocked["site"].id)
    assert [row["item_code"] for row in by_site["items"]] == ["CBL-016"]
    low = reports.stock_report(low_stock_only=True)
    assert [row["item_code"] for row in low["items"]] == ["BRK-063", "CBL-016"]
    assert "total_value" not in low["items"][0]


def test_movement_report_groups_by_type_label(stocked):
    user = UserFactory()
    wh, site, cable = stocked["wh"], stocked["site"], stocked["cable"]
    services.create_transaction(
        item_id=cable.id,
        transaction_type=TransactionType.PURCHASE,
        quantity=30,
        to_location_id=wh.id,
        performed_by=user,
    )
    services.create_transaction(
        item_id=cable.id,
        transaction_type=TransactionType.TRANSFER,
        quantity=10,
        from_location_id=wh.id,
        to_location_id=site.id,
        performed_by=user,
    )
    services.create_transaction(
        item_id=cable.id,
        transaction_type=TransactionType.DAMAGE,
        quantity=2,
        from_location_id=site.id,
        performed_by=user,
    )
    now = timezone.now()

    report = reports.movement_report(start_date=now - timedelta(days=1), end_date=now + timedelta(days=1))
    assert report["summary"]["total_movements"] == 3
    assert report["summary"]["total_quantity"] == 42
    assert report["summary"]["by_type"]["Damage/Loss"] == {"count": 1, "quantity": 2}
    assert report["movements"][0]["transaction_type"] == TransactionType.DAMAGE

    at_site = reports.movement_report(
        start_date=now - timedelta(days=1), end_date=now + timedelta(days=1), location_id=site.id
    )
    assert at_site["summary"]["total_movements"] == 2

    past = reports.movement_report(start_date=now - timedelta(days=10), end_date=now - timedelta(days=5))
    assert past["movements"] == []


def test_inventory_valuation_orders_by_value(stocked):
    rows = reports.inventory_valuation()
    assert [row["item"]["item_code"] for row in rows] == ["PNL-450", "CBL-016"]
    assert rows[0]["total_value"] == Decimal("36000.00")
    assert rows[1]["current_stock"] == 105


def test_dashboard_stats(stocked):
    user = UserFactory()
    services.create_transaction(
        item_id=stocked["panel"].id,
        transaction_type=TransactionType.SALE,
        quantity=1,
        from_location_id=stocked["wh"].id,
        performed_by=user,
    )

    stats = reports.dashboard_stats()
    assert stats["total_items"] == 3
    assert stats["out_of_stock_items"] == 1
    assert stats["transactions_this_month"] == 1
    assert stats["top_categories"] == [{"category": "solar_panel", "transactions": 1}]
    alerts = {(alert["item_code"], alert["location_name"]): alert["alert"] for alert in stats["stock_alerts"]}
    assert alerts[("BRK-063", "Main")] == "out_of_stock"
    assert alerts[("CBL-016", "Site A")] == "low_stock"
    assert ("OLD-001", "Main") not in alerts
