from django.urls import path

from .views import (
    BulkStockUpdateView,
    DashboardView,
    InventoryHealthView,
    ItemDetailView,
    ItemListCreateView,
    MovementReportView,
    ReservedStockView,
    StockAdjustView,
    StockReportView,
    SupplierDetailView,
    SupplierListCreateView,
    TransactionDetailView,
    TransactionListCreateView,
    ValuationReportView,
)

urlpatterns = [
    path("health/", InventoryHealthView.as_view(), name="inventory-health"),
    # Catalog
    path("items/", ItemListCreateView.as_view(), name="item-list"),
    path("items/<int:item_id>/", ItemDetailView.as_view(), name="item-detail"),
    path("suppliers/", SupplierListCreateView.as_view(), name="supplier-list"),
    path("suppliers/<int:supplier_id>/", SupplierDetailView.as_view(), name="supplier-detail"),
    # Ledger
    path("transactions/", TransactionListCreateView.as_view(), name="transaction-list"),
    path("transactions/<int:transaction_id>/", TransactionDetailView.as_view(), name="transaction-detail"),
    path("stock/adjust/", StockAdjustView.as_view(), name="stock-adjust"),
    path("stock/bulk-update/", BulkStockUpdateView.as_view(), name="stock-bulk-update"),
    path("stock/reserved/", ReservedStockView.as_view(), name="stock-reserved"),
    # Reports
    path("reports/stock/", StockReportView.as_view(), name="report-stock"),
    path("reports/movements/", MovementReportView.as_view(), name="report-movements"),
    path("reports/valuation/", ValuationReportView.as_view(), name="report-valuation"),
    path("dashboard/", DashboardView.as_view(), name="inventory-dashboard"),
]

# EOF
