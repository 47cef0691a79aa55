"""Admin registrations for inventory app."""

from django.contrib import admin

from .engine import derive_stock_status
from .models import Item, StockLevel, Supplier, Transaction


class StockLevelInline(admin.TabularInline):
    model = StockLevel
    extra = 0
    fields = ("location", "current_stock", "reserved_stock", "available_stock", "minimum_level", "maximum_level")
    readonly_fields = ("available_stock",)


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ("id", "item_code", "item_name", "category", "stock_status", "is_active", "updated_at")
    list_filter = ("category", "stock_status", "is_active")
    search_fields = ("item_code", "item_name", "manufacturer")
    readonly_fields = ("stock_status",)
    inlines = [StockLevelInline]

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        item = form.instance
        item.stock_status = derive_stock_status(item.stock_levels.all())
        item.save(update_fields=["stock_status", "updated_at"])


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ("id", "company_name", "supplier_type", "city", "country", "rating")
    list_filter = ("supplier_type",)
    search_fields = ("company_name", "contact_person", "email")


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = (
        "transaction_ref",
        "item",
        "transaction_type",
        "quantity",
        "from_location",
        "to_location",
        "stock_before",
        "stock_after",
        "transaction_date",
    )
    list_filter = ("transaction_type",)
    search_fields = ("transaction_ref", "item__item_code", "document_ref")

    # The ledger is append-only
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# EOF
