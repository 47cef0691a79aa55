"""Query-string filters for item, transaction and supplier listings."""

import django_filters
from common.choices import ItemCategory, StockStatus, TransactionType
from django.db.models import Q

from .models import Item, Supplier, Transaction


class ItemFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    category = django_filters.ChoiceFilter(choices=ItemCategory.choices)
    stock_status = django_filters.ChoiceFilter(choices=StockStatus.choices)
    supplier = django_filters.CharFilter(field_name="supplier", lookup_expr="icontains")
    is_active = django_filters.BooleanFilter(method="filter_is_active")

    class Meta:
        model = Item
        fields = ["search", "category", "stock_status", "supplier", "is_active"]

    def __init__(self, data=None, *args, **kwargs):
        # Listing shows active items unless asked otherwise
        data = data.copy() if data is not None else {}
        if "is_active" not in data:
            data["is_active"] = "true"
        super().__init__(data, *args, **kwargs)

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(item_name__icontains=value)
            | Q(item_code__icontains=value)
            | Q(description__icontains=value)
            | Q(manufacturer__icontains=value)
        )

    def filter_is_active(self, queryset, name, value):
        if value is None:
            return queryset
        return queryset.filter(is_active=value)


class TransactionFilter(django_filters.FilterSet):
    item = django_filters.NumberFilter(field_name="item_id")
    transaction_type = django_filters.ChoiceFilter(choices=TransactionType.choices)
    date_from = django_filters.DateTimeFilter(field_name="transaction_date", lookup_expr="gte")
    date_to = django_filters.DateTimeFilter(field_name="transaction_date", lookup_expr="lte")

    class Meta:
        model = Transaction
        fields = ["item", "transaction_type", "date_from", "date_to"]


class SupplierFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    supplier_type = django_filters.CharFilter(field_name="supplier_type")

    class Meta:
        model = Supplier
        fields = ["search", "supplier_type"]

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(company_name__icontains=value) | Q(contact_person__icontains=value) | Q(email__icontains=value)
        )


# EOF
