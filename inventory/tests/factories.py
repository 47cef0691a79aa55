import itertools
from decimal import Decimal

import factory
from common.choices import ItemCategory, StockStatus, SupplierType, UnitOfMeasure
from django.contrib.auth import get_user_model
from factory.django import DjangoModelFactory
from inventory import services
from inventory.models import Item, StockLevel, Supplier


class UserFactory(DjangoModelFactory):
    class Meta:
        model = get_user_model()

    username = factory.Sequence(lambda n: f"storekeeper{n}")
    email = factory.Faker("email")
    password = factory.django.Password("pass")


class SupplierFactory(DjangoModelFactory):
    class Meta:
        model = Supplier

    company_name = factory.Sequence(lambda n: f"Supplier {n} Ltd")
    supplier_type = SupplierType.DISTRIBUTOR
    country = "Kenya"


class ItemFactory(DjangoModelFactory):
    class Meta:
        model = Item

    item_code = factory.Sequence(lambda n: f"ITM-{n:04d}")
    item_name = factory.Faker("word")
    category = ItemCategory.BREAKER
    unit_of_measure = UnitOfMeasure.PIECES
    standard_cost = Decimal("100.00")
    last_purchase_price = Decimal("90.00")
    stock_status = StockStatus.OUT_OF_STOCK


class StockLevelFactory(DjangoModelFactory):
    class Meta:
        model = StockLevel

    item = factory.SubFactory(ItemFactory)
    location = factory.SubFactory("locations.tests.factories.StockLocationFactory")
    current_stock = 10
    reserved_stock = 0
    minimum_level = 0
    reorder_point = 0


_codes = itertools.count(1)


def create_stocked_item(*levels, **fields) -> Item:
    """Register an item through the catalog service.

    Each level is ``(location, current_stock, reserved_stock, minimum_level)``.
    """
    data = {
        "item_code": f"STK-{next(_codes):04d}",
        "item_name": "Test item",
        "category": ItemCategory.BREAKER,
        "unit_of_measure": UnitOfMeasure.PIECES,
        "standard_cost": Decimal("100.00"),
        "last_purchase_price": Decimal("90.00"),
        **fields,
    }
    stock_levels = [
        {"location": location.id, "current_stock": current, "reserved_stock": reserved, "minimum_level": minimum}
        for location, current, reserved, minimum in levels
    ]
    return services.create_item(data=data, stock_levels=stock_levels)
