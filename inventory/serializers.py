"""Serializers for inventory domain (multi-location).

Read serializers render items with their stock levels and the ledger with
readable summaries. Write serializers only shape input; every rule about
stock lives in ``services``.
"""

from common.choices import BulkOperation, ItemCategory, ReservedStockAction, TransactionType
from rest_framework import serializers

from .models import Item, StockLevel, Supplier, Transaction


class StockLevelSerializer(serializers.ModelSerializer):
    location_name = serializers.CharField(source="location.name", read_only=True)

    class Meta:
        model = StockLevel
        fields = [
            "location",
            "location_name",
            "current_stock",
            "reserved_stock",
            "available_stock",
            "minimum_level",
            "maximum_level",
            "reorder_point",
        ]
        read_only_fields = fields


class StockLevelInputSerializer(serializers.Serializer):
    location = serializers.IntegerField()
    current_stock = serializers.IntegerField(min_value=0, default=0)
    reserved_stock = serializers.IntegerField(min_value=0, default=0)
    minimum_level = serializers.IntegerField(min_value=0, default=0)
    maximum_level = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    reorder_point = serializers.IntegerField(min_value=0, default=0)


class ItemSerializer(serializers.ModelSerializer):
    """Read-only item view with per-location levels and computed totals."""

    stock_levels = StockLevelSerializer(many=True, read_only=True)
    total_stock = serializers.SerializerMethodField()
    total_reserved = serializers.SerializerMethodField()
    total_available = serializers.SerializerMethodField()

    class Meta:
        model = Item
        fields = "__all__"

    def get_total_stock(self, obj) -> int:
        return obj.totals.total_stock

    def get_total_reserved(self, obj) -> int:
        return obj.totals.total_reserved

    def get_total_available(self, obj) -> int:
        return obj.totals.total_available


class ItemWriteSerializer(serializers.ModelSerializer):
    # Declared explicitly so duplicate codes reach the service and map to 409.
    item_code = serializers.CharField(max_length=64)
    stock_levels = StockLevelInputSerializer(many=True, required=False)

    class Meta:
        model = Item
        exclude = ["stock_status", "created_at", "updated_at"]

    def validate_stock_levels(self, value):
        locations = [entry["location"] for entry in value]
        if len(set(locations)) != len(locations):
            raise serializers.ValidationError("Each location may appear only once in stock levels.")
        return value


class SupplierSerializer(serializers.ModelSerializer):
    # Declared explicitly so duplicate names reach the service and map to 409.
    company_name = serializers.CharField(max_length=200)

    class Meta:
        model = Supplier
        fields = [
            "id",
            "company_name",
            "supplier_type",
            "contact_person",
            "email",
            "phone",
            "alternate_phone",
            "address",
            "city",
            "country",
            "payment_terms",
            "rating",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class TransactionSerializer(serializers.ModelSerializer):
    """Read-only ledger entry with item, location, supplier and performer summaries."""

    transaction_type_label = serializers.CharField(source="get_transaction_type_display", read_only=True)
    item = serializers.SerializerMethodField()
    from_location = serializers.SerializerMethodField()
    to_location = serializers.SerializerMethodField()
    supplier = serializers.SerializerMethodField()
    performed_by = serializers.SerializerMethodField()

    class Meta:
        model = Transaction
        fields = [
            "id",
            "transaction_ref",
            "item",
            "transaction_type",
            "transaction_type_label",
            "quantity",
            "unit_price",
            "total_value",
            "from_location",
            "to_location",
            "project",
            "supplier",
            "performed_by",
            "transaction_date",
            "stock_before",
            "stock_after",
            "notes",
            "document_ref",
            "created_at",
        ]
        read_only_fields = fields

    def get_item(self, obj) -> dict:
        return {"id": obj.item_id, "item_code": obj.item.item_code, "item_name": obj.item.item_name}

    def get_from_location(self, obj) -> dict | None:
        if not obj.from_location_id:
            return None
        return {"id": obj.from_location_id, "name": obj.from_location.name}

    def get_to_location(self, obj) -> dict | None:
        if not obj.to_location_id:
            return None
        return {"id": obj.to_location_id, "name": obj.to_location.name}

    def get_supplier(self, obj) -> dict | None:
        if not obj.supplier_id:
            return None
        return {"id": obj.supplier_id, "company_name": obj.supplier.company_name}

    def get_performed_by(self, obj) -> dict:
        user = obj.performed_by
        return {"id": user.pk, "username": user.get_username(), "email": getattr(user, "email", "")}


class TransactionCreateSerializer(serializers.Serializer):
    item = serializers.IntegerField()
    transaction_type = serializers.ChoiceField(choices=TransactionType.choices)
    quantity = serializers.IntegerField(min_value=1)
    from_location = serializers.IntegerField(required=False, allow_null=True)
    to_location = serializers.IntegerField(required=False, allow_null=True)
    supplier = serializers.IntegerField(required=False, allow_null=True)
    unit_price = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0, required=False, allow_null=True)
    total_value = serializers.DecimalField(
        max_digits=16, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    project = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    transaction_date = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    document_ref = serializers.CharField(max_length=120, required=False, allow_blank=True, default="")
    transaction_ref = serializers.CharField(max_length=40, required=False, allow_blank=True, default="")
    performed_by = serializers.IntegerField(required=False, allow_null=True)


class StockAdjustmentSerializer(serializers.Serializer):
    item = serializers.IntegerField()
    location = serializers.IntegerField()
    adjustment_quantity = serializers.IntegerField()
    reason = serializers.CharField(required=False, allow_blank=True, default="")
    document_ref = serializers.CharField(max_length=120, required=False, allow_blank=True, default="")
    performed_by = serializers.IntegerField(required=False, allow_null=True)


class BulkUpdateEntrySerializer(serializers.Serializer):
    item = serializers.IntegerField()
    location = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=0)
    operation = serializers.ChoiceField(choices=BulkOperation.choices)


class BulkStockUpdateSerializer(serializers.Serializer):
    updates = BulkUpdateEntrySerializer(many=True, allow_empty=False)
    reason = serializers.CharField(required=False, allow_blank=True, default="")
    performed_by = serializers.IntegerField(required=False, allow_null=True)


class ReservedStockSerializer(serializers.Serializer):
    item = serializers.IntegerField()
    location = serializers.IntegerField()
    action = serializers.ChoiceField(choices=ReservedStockAction.choices)
    quantity = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    project = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    performed_by = serializers.IntegerField(required=False, allow_null=True)


class StockReportQuerySerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=ItemCategory.choices, required=False)
    location = serializers.IntegerField(required=False)
    low_stock_only = serializers.BooleanField(required=False, default=False)
    include_valuation = serializers.BooleanField(required=False, default=False)


class MovementReportQuerySerializer(serializers.Serializer):
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField()
    item = serializers.IntegerField(required=False)
    location = serializers.IntegerField(required=False)

    def validate(self, attrs):
        if attrs["start_date"] > attrs["end_date"]:
            raise serializers.ValidationError("start_date must be before end_date.")
        return attrs


# EOF
