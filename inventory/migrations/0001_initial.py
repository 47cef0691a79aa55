from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import inventory.models
from django.conf import settings
from django.db import migrations, models

STOCK_STATUS_CHOICES = [
    ("in_stock", "In Stock"),
    ("low_stock", "Low Stock"),
    ("out_of_stock", "Out of Stock"),
    ("on_order", "On Order"),
    ("discontinued", "Discontinued"),
    ("quarantined", "Quarantined"),
]

TRANSACTION_TYPE_CHOICES = [
    ("purchase", "Purchase"),
    ("sale", "Sale"),
    ("transfer", "Transfer"),
    ("adjustment_in", "Adjustment In"),
    ("adjustment_out", "Adjustment Out"),
    ("return", "Return"),
    ("allocation", "Project Allocation"),
    ("consumption", "Consumption"),
    ("damage", "Damage/Loss"),
    ("maintenance", "Maintenance Use"),
]

SUPPLIER_TYPE_CHOICES = [
    ("manufacturer", "Manufacturer"),
    ("distributor", "Distributor"),
    ("local_supplier", "Local Supplier"),
    ("international", "International Supplier"),
    ("service_provider", "Service Provider"),
]

CONDITION_CHOICES = [
    ("new", "New"),
    ("refurbished", "Refurbished"),
    ("used_good", "Used - Good"),
    ("used_fair", "Used - Fair"),
    ("damaged", "Damaged"),
    ("for_repair", "For Repair"),
]

CATEGORY_CHOICES = [
    ("generator", "Generator"),
    ("rectifier", "Rectifier System"),
    ("inverter", "Inverter"),
    ("battery", "Battery"),
    ("battery_cabinet", "Battery Cabinet"),
    ("solar_panel", "Solar Panel"),
    ("pv_controller", "PV Controller"),
    ("solar_structure", "Solar Structure"),
    ("solar_system", "Solar PV System"),
    ("power_cable", "Power Cable"),
    ("control_cable", "Control Cable"),
    ("flex_cable", "Flex Cable"),
    ("earthing_cable", "Earthing Cable"),
    ("conduit", "Conduit"),
    ("cable_tray", "Cable Tray"),
    ("ducting", "Ducting"),
    ("earthing_rod", "Earthing Rod"),
    ("connector", "Connector"),
    ("breaker", "Circuit Breaker"),
    ("cable_lug", "Cable Lug"),
    ("insulation", "Insulation Material"),
    ("mounting_hardware", "Mounting Hardware"),
    ("concrete", "Concrete"),
    ("excavation", "Excavation Work"),
    ("slab_work", "Slab Work"),
    ("installation_tool", "Installation Tool"),
    ("testing_equipment", "Testing Equipment"),
    ("installation_service", "Installation Service"),
    ("commissioning_service", "Commissioning Service"),
    ("maintenance_service", "Maintenance Service"),
    ("spare_part", "Spare Part"),
    ("consumable", "Consumable"),
    ("other", "Other"),
]

UNIT_CHOICES = [
    ("pcs", "Pcs"),
    ("sets", "Sets"),
    ("units", "Units"),
    ("m", "Meters"),
    ("km", "Kilometers"),
    ("ft", "Feet"),
    ("m2", "M²"),
    ("ft2", "Ft²"),
    ("m3", "M³"),
    ("ft3", "Ft³"),
    ("l", "Liters"),
    ("kg", "Kg"),
    ("t", "Tonnes"),
    ("lbs", "Lbs"),
    ("kw", "kW"),
    ("kwp", "KWp"),
    ("kva", "kVA"),
    ("ah", "AH"),
    ("w", "W"),
    ("v", "V"),
    ("hours", "Hours"),
    ("days", "Days"),
    ("man_hours", "Man-hours"),
    ("rolls", "Rolls"),
    ("boxes", "Boxes"),
    ("packets", "Packets"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("locations", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Supplier",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("company_name", models.CharField(max_length=200, unique=True)),
                ("supplier_type", models.CharField(choices=SUPPLIER_TYPE_CHOICES, max_length=32)),
                ("contact_person", models.CharField(blank=True, max_length=120)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("phone", models.CharField(blank=True, max_length=32)),
                ("alternate_phone", models.CharField(blank=True, max_length=32)),
                ("address", models.CharField(blank=True, max_length=255)),
                ("city", models.CharField(blank=True, max_length=120)),
                ("country", models.CharField(blank=True, max_length=120)),
                ("payment_terms", models.CharField(blank=True, max_length=120)),
                (
                    "rating",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(5),
                        ],
                    ),
                ),
                ("notes", models.TextField(blank=True)),
            ],
            options={
                "ordering": ["company_name", "id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("rating__isnull", True),
                            models.Q(("rating__gte", 1), ("rating__lte", 5)),
                            _connector="OR",
                        ),
                        name="supplier_rating_range",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Item",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("item_code", models.CharField(max_length=64, unique=True)),
                ("item_name", models.CharField(max_length=200)),
                (
                    "alternative_codes",
                    models.JSONField(blank=True, default=list, validators=[inventory.models.validate_string_list]),
                ),
                ("description", models.TextField(blank=True)),
                ("category", models.CharField(choices=CATEGORY_CHOICES, db_index=True, max_length=32)),
                ("unit_of_measure", models.CharField(choices=UNIT_CHOICES, max_length=16)),
                ("manufacturer", models.CharField(blank=True, max_length=120)),
                ("model_number", models.CharField(blank=True, max_length=120)),
                ("serial_number", models.CharField(blank=True, max_length=120)),
                ("batch_number", models.CharField(blank=True, max_length=120)),
                ("condition", models.CharField(choices=CONDITION_CHOICES, default="new", max_length=16)),
                ("supplier", models.CharField(blank=True, max_length=200)),
                ("standard_cost", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("last_purchase_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("selling_price", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("currency", models.CharField(default="KES", max_length=8)),
                ("power_rating", models.CharField(blank=True, max_length=64)),
                ("voltage", models.CharField(blank=True, max_length=64)),
                ("current", models.CharField(blank=True, max_length=64)),
                ("frequency", models.CharField(blank=True, max_length=64)),
                ("dimensions", models.CharField(blank=True, max_length=120)),
                ("weight", models.CharField(blank=True, max_length=64)),
                ("temperature_range", models.CharField(blank=True, max_length=64)),
                ("ip_rating", models.CharField(blank=True, max_length=16)),
                ("efficiency", models.CharField(blank=True, max_length=64)),
                ("cross_section", models.CharField(blank=True, max_length=64)),
                ("material", models.CharField(blank=True, max_length=120)),
                ("color", models.CharField(blank=True, max_length=64)),
                (
                    "additional_specs",
                    models.JSONField(blank=True, default=dict, validators=[inventory.models.validate_string_mapping]),
                ),
                (
                    "stock_status",
                    models.CharField(choices=STOCK_STATUS_CHOICES, db_index=True, default="in_stock", max_length=16),
                ),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("is_serialized", models.BooleanField(default=False)),
                ("is_service", models.BooleanField(default=False)),
                ("is_consumable", models.BooleanField(default=False)),
                ("shelf_life_days", models.PositiveIntegerField(blank=True, null=True)),
                ("warranty_months", models.PositiveIntegerField(blank=True, null=True)),
                ("storage_requirements", models.TextField(blank=True)),
                ("safety_info", models.TextField(blank=True)),
                (
                    "image_urls",
                    models.JSONField(blank=True, default=list, validators=[inventory.models.validate_string_list]),
                ),
                (
                    "attachments",
                    models.JSONField(blank=True, default=list, validators=[inventory.models.validate_string_list]),
                ),
                ("qr_code", models.CharField(blank=True, max_length=255)),
                ("barcode", models.CharField(blank=True, max_length=64)),
                ("notes", models.TextField(blank=True)),
            ],
            options={
                "ordering": ["-created_at", "id"],
                "indexes": [models.Index(fields=["is_active", "category"], name="item_active_category_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("standard_cost__gte", 0)), name="item_standard_cost_non_negative"
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("last_purchase_price__gte", 0)),
                        name="item_last_purchase_price_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="StockLevel",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveIntegerField(default=0)),
                ("current_stock", models.IntegerField(default=0)),
                ("reserved_stock", models.IntegerField(default=0)),
                ("available_stock", models.IntegerField(default=0)),
                ("minimum_level", models.IntegerField(default=0)),
                ("maximum_level", models.IntegerField(blank=True, null=True)),
                ("reorder_point", models.IntegerField(default=0)),
                (
                    "item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="stock_levels",
                        to="inventory.item",
                    ),
                ),
                (
                    "location",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="stock_levels",
                        to="locations.stocklocation",
                    ),
                ),
            ],
            options={
                "ordering": ["position", "id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("current_stock__gte", 0)), name="level_current_non_negative"
                    ),

                    models.CheckConstraint(
                        condition=models.Q(("reserved_stock__gte", 0)), name="level_reserved_non_negative"
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("available_stock__gte", 0)), name="level_available_non_negative"
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("minimum_level__gte", 0)), name="level_minimum_non_negative"
                    ),

                    models.CheckConstraint(
                        condition=models.Q(("reorder_point__gte", 0)), name="level_reorder_non_negative"
                    ),

                    models.UniqueConstraint(fields=("item", "location"), name="unique_stock_level_per_location"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Transaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("transaction_ref", models.CharField(blank=True, db_index=True, max_length=40)),
                ("transaction_type", models.CharField(choices=TRANSACTION_TYPE_CHOICES, db_index=True, max_length=16)),
                ("quantity", models.PositiveIntegerField()),
                ("unit_price", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("total_value", models.DecimalField(blank=True, decimal_places=2, max_digits=16, null=True)),
                ("project", models.CharField(blank=True, max_length=64)),
                ("transaction_date", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("stock_before", models.IntegerField(blank=True, null=True)),
                ("stock_after", models.IntegerField(blank=True, null=True)),
                ("notes", models.TextField(blank=True)),
                ("document_ref", models.CharField(blank=True, max_length=120)),
                (
                    "item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="transactions",
                        to="inventory.item",
                    ),
                ),
                (
                    "from_location",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="outgoing_transactions",
                        to="locations.stocklocation",
                    ),
                ),
                (
                    "to_location",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="incoming_transactions",
                        to="locations.stocklocation",
                    ),
                ),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="transactions",
                        to="inventory.supplier",
                    ),
                ),
                (
                    "performed_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="inventory_transactions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["item", "transaction_date"], name="transaction_item_date_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gt", 0)), name="transaction_quantity_positive"
                    ),

                    models.CheckConstraint(
                        condition=models.Q(("unit_price__isnull", True), ("unit_price__gte", 0), _connector="OR"),
                        name="transaction_unit_price_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("total_value__isnull", True), ("total_value__gte", 0), _connector="OR"),
                        name="transaction_total_value_non_negative",
                    ),
                ],
            },
        ),
    ]
