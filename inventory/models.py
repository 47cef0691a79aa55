"""Inventory models (multi-location).

Items carry one ``StockLevel`` per location. Every stock-affecting event is
recorded as an append-only ``Transaction`` with before/after snapshots of the
item's total current stock.
"""

import secrets
from decimal import Decimal

from common.choices import ItemCategory, ItemCondition, StockStatus, SupplierType, TransactionType, UnitOfMeasure
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from . import engine

REF_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"


def validate_string_mapping(value) -> None:
    """Additional specs are a flat ``{str: str}`` mapping."""
    if value in (None, ""):
        return
    if not isinstance(value, dict):
        raise ValidationError("Additional specs must be an object of string values.")
    for key, val in value.items():
        if not isinstance(key, str) or not isinstance(val, str):
            raise ValidationError(f"Additional spec '{key}' must map a string to a string.")


def validate_string_list(value) -> None:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError("Expected a list of strings.")


def generate_transaction_ref(transaction_type: str, when=None) -> str:
    """Build ``TXN-<TYP>-<yyyymmdd>-<8 random chars>`` from the type label."""
    when = when or timezone.now()
    label = TransactionType(transaction_type).label
    suffix = "".join(secrets.choice(REF_ALPHABET) for _ in range(8))
    return f"TXN-{label[:3].upper()}-{when:%Y%m%d}-{suffix}"


class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Supplier(TimeStampedModel):
    TYPE_CHOICES = SupplierType.choices

    company_name = models.CharField(max_length=200, unique=True)
    supplier_type = models.CharField(max_length=32, choices=TYPE_CHOICES)
    contact_person = models.CharField(max_length=120, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=32, blank=True)
    alternate_phone = models.CharField(max_length=32, blank=True)
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=120, blank=True)
    country = models.CharField(max_length=120, blank=True)
    payment_terms = models.CharField(max_length=120, blank=True)
    rating = models.PositiveSmallIntegerField(
        null=True, blank=True, validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ["company_name", "id"]
        constraints = [
            models.CheckConstraint(
                name="supplier_rating_range",
                condition=models.Q(rating__isnull=True) | models.Q(rating__gte=1, rating__lte=5),
            ),
        ]

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    def __str__(self) -> str:  # pragma: no cover
        return self.company_name


class Item(TimeStampedModel):
    """A trackable good or service with stock held at one or more locations."""

    STATUS_CHOICES = StockStatus.choices

    item_code = models.CharField(max_length=64, unique=True)
    item_name = models.CharField(max_length=200)
    alternative_codes = models.JSONField(default=list, blank=True, validators=[validate_string_list])
    description = models.TextField(blank=True)
    category = models.CharField(max_length=32, choices=ItemCategory.choices, db_index=True)
    unit_of_measure = models.CharField(max_length=16, choices=UnitOfMeasure.choices)
    manufacturer = models.CharField(max_length=120, blank=True)
    model_number = models.CharField(max_length=120, blank=True)
    serial_number = models.CharField(max_length=120, blank=True)
    batch_number = models.CharField(max_length=120, blank=True)
    condition = models.CharField(max_length=16, choices=ItemCondition.choices, default=ItemCondition.NEW)
    # Free-text supplier name, distinct from Transaction.supplier
    supplier = models.CharField(max_length=200, blank=True)

    # Pricing
    standard_cost = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    last_purchase_price = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    selling_price = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=8, default="KES")

    # Technical specifications
    power_rating = models.CharField(max_length=64, blank=True)
    voltage = models.CharField(max_length=64, blank=True)
    current = models.CharField(max_length=64, blank=True)
    frequency = models.CharField(max_length=64, blank=True)
    dimensions = models.CharField(max_length=120, blank=True)
    weight = models.CharField(max_length=64, blank=True)
    temperature_range = models.CharField(max_length=64, blank=True)
    ip_rating = models.CharField(max_length=16, blank=True)
    efficiency = models.CharField(max_length=64, blank=True)
    cross_section = models.CharField(max_length=64, blank=True)
    material = models.CharField(max_length=120, blank=True)
    color = models.CharField(max_length=64, blank=True)
    additional_specs = models.JSONField(default=dict, blank=True, validators=[validate_string_mapping])

    stock_status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=StockStatus.IN_STOCK, db_index=True)
    is_active = models.BooleanField(default=True, db_index=True)
    is_serialized = models.BooleanField(default=False)
    is_service = models.BooleanField(default=False)
    is_consumable = models.BooleanField(default=False)
    shelf_life_days = models.PositiveIntegerField(null=True, blank=True)
    warranty_months = models.PositiveIntegerField(null=True, blank=True)
    storage_requirements = models.TextField(blank=True)
    safety_info = models.TextField(blank=True)
    image_urls = models.JSONField(default=list, blank=True, validators=[validate_string_list])
    attachments = models.JSONField(default=list, blank=True, validators=[validate_string_list])
    qr_code = models.CharField(max_length=255, blank=True)
    barcode = models.CharField(max_length=64, blank=True)
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ["-created_at", "id"]
        constraints = [
            models.CheckConstraint(name="item_standard_cost_non_negative", condition=models.Q(standard_cost__gte=0)),
            models.CheckConstraint(
                name="item_last_purchase_price_non_negative", condition=models.Q(last_purchase_price__gte=0)
            ),
        ]
        indexes = [
            models.Index(fields=["is_active", "category"], name="item_active_category_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.item_code} {self.item_name}"

    @property
    def totals(self) -> engine.StockTotals:
        return engine.stock_totals(self.stock_levels.all())

    @property
    def total_stock(self) -> int:
        return self.totals.total_stock

    @property
    def total_reserved(self) -> int:
        return self.totals.total_reserved

    @property
    def total_available(self) -> int:
        return self.totals.total_available


class StockLevel(models.Model):
    """Per-location stock for one item. Only reachable through its item."""

    item = models.ForeignKey(Item, on_delete=models.CASCADE, related_name="stock_levels")
    location = models.ForeignKey("locations.StockLocation", on_delete=models.PROTECT, related_name="stock_levels")
    position = models.PositiveIntegerField(default=0)
    current_stock = models.IntegerField(default=0)
    reserved_stock = models.IntegerField(default=0)
    available_stock = models.IntegerField(default=0)
    minimum_level = models.IntegerField(default=0)
    maximum_level = models.IntegerField(null=True, blank=True)
    reorder_point = models.IntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]
        constraints = [
            models.CheckConstraint(name="level_current_non_negative", condition=models.Q(current_stock__gte=0)),
            models.CheckConstraint(name="level_reserved_non_negative", condition=models.Q(reserved_stock__gte=0)),
            models.CheckConstraint(name="level_available_non_negative", condition=models.Q(available_stock__gte=0)),
            models.CheckConstraint(name="level_minimum_non_negative", condition=models.Q(minimum_level__gte=0)),
            models.CheckConstraint(name="level_reorder_non_negative", condition=models.Q(reorder_point__gte=0)),
            models.UniqueConstraint(fields=["item", "location"], name="unique_stock_level_per_location"),
        ]

    def save(self, *args, **kwargs):
        engine.recompute_availability([self])
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "available_stock" not in update_fields:
            kwargs["update_fields"] = [*update_fields, "available_stock"]
        super().save(*args, **kwargs)

    def __str__(self) -> str:  # pragma: no cover
        return f"StockLevel<{self.item_id}@{self.location_id}> c={self.current_stock} r={self.reserved_stock}"


class Transaction(TimeStampedModel):
    """Append-only audit record of a single stock-affecting event."""

    TYPE_CHOICES = TransactionType.choices

    transaction_ref = models.CharField(max_length=40, blank=True, db_index=True)
    item = models.ForeignKey(Item, on_delete=models.PROTECT, related_name="transactions")
    transaction_type = models.CharField(max_length=16, choices=TYPE_CHOICES, db_index=True)
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    total_value = models.DecimalField(max_digits=16, decimal_places=2, null=True, blank=True)
    from_location = models.ForeignKey(
        "locations.StockLocation",
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="outgoing_transactions",
    )
    to_location = models.ForeignKey(
        "locations.StockLocation",
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="incoming_transactions",
    )
    # External project reference; projects live outside this service
    project = models.CharField(max_length=64, blank=True)
    supplier = models.ForeignKey(
        Supplier, null=True, blank=True, on_delete=models.PROTECT, related_name="transactions"
    )
    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="inventory_transactions"
    )
    transaction_date = models.DateTimeField(default=timezone.now, db_index=True)
    stock_before = models.IntegerField(null=True, blank=True)
    stock_after = models.IntegerField(null=True, blank=True)
    notes = models.TextField(blank=True)
    document_ref = models.CharField(max_length=120, blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(name="transaction_quantity_positive", condition=models.Q(quantity__gt=0)),
            models.CheckConstraint(
                name="transaction_unit_price_non_negative",
                condition=models.Q(unit_price__isnull=True) | models.Q(unit_price__gte=0),
            ),
            models.CheckConstraint(
                name="transaction_total_value_non_negative",
                condition=models.Q(total_value__isnull=True) | models.Q(total_value__gte=0),
            ),
        ]
        indexes = [
            models.Index(fields=["item", "transaction_date"], name="transaction_item_date_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Inventory transactions are append-only.")
        if not self.transaction_ref:
            self.transaction_ref = generate_transaction_ref(self.transaction_type)
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Inventory transactions cannot be deleted.")

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.transaction_ref} {self.transaction_type} {self.quantity} of {self.item_id}"


# EOF
