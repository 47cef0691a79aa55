"""Inventory endpoints: catalog, ledger, stock operations and reports."""

from common.exceptions import InventoryError
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.views import APIView

from . import reports, selectors, services
from .filters import ItemFilter, SupplierFilter, TransactionFilter
from .serializers import (
    BulkStockUpdateSerializer,
    ItemSerializer,
    ItemWriteSerializer,
    MovementReportQuerySerializer,
    ReservedStockSerializer,
    StockAdjustmentSerializer,
    StockReportQuerySerializer,
    SupplierSerializer,
    TransactionCreateSerializer,
    TransactionSerializer,
)


def _error(exc: InventoryError) -> Response:
    return Response({"detail": exc.detail}, status=exc.status_code)


def _performer(request, validated: dict):
    return validated.pop("performed_by", None) or request.user


class InventoryHealthView(APIView):
    throttle_classes = []

    @extend_schema(
        tags=["Inventory Endpoints"],
        summary="Inventory health",
        description="Simple healthcheck endpoint for the inventory app",
        examples=[OpenApiExample("Health OK", value={"status": "ok", "app": "inventory"})],
    )
    def get(self, request):
        return Response({"status": "ok", "app": "inventory"})


class ItemListCreateView(generics.ListAPIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_scope = "inventory"
    serializer_class = ItemSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = ItemFilter

    def get_queryset(self):
        return selectors.item_queryset().order_by("-created_at", "id")

    @extend_schema(
        tags=["Inventory Items"],
        summary="List inventory items",
        description="Active items by default. Filters: search, category, stock_status, supplier, is_active.",
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Inventory Items"],
        summary="Create inventory item",
        request=ItemWriteSerializer,
        responses={201: ItemSerializer},
        examples=[
            OpenApiExample(
                "Breaker",
                value={
                    "item_code": "BRK-001",
                    "item_name": "63A MCB",
                    "category": "breaker",
                    "unit_of_measure": "pcs",
                    "standard_cost": "850.00",
                    "stock_levels": [{"location": 1, "current_stock": 100, "minimum_level": 20}],
                },
                request_only=True,
            )
        ],
    )
    def post(self, request):
        serializer = ItemWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        stock_levels = data.pop("stock_levels", [])
        try:
            item = services.create_item(data=data, stock_levels=stock_levels)
        except InventoryError as exc:
            return _error(exc)
        return Response(ItemSerializer(selectors.get_item(item.id)).data, status=status.HTTP_201_CREATED)


class ItemDetailView(APIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_scope = "inventory"

    @extend_schema(tags=["Inventory Items"], summary="Get inventory item", responses={200: ItemSerializer})
    def get(self, request, item_id: int):
        try:
            item = selectors.get_item(item_id)
        except InventoryError as exc:
            return _error(exc)
        return Response(ItemSerializer(item).data)

    @extend_schema(
        tags=["Inventory Items"],
        summary="Update inventory item",
        description="Supplying stock_levels replaces every level of the item.",
        request=ItemWriteSerializer,
        responses={200: ItemSerializer},
    )
    def patch(self, request, item_id: int):
        serializer = ItemWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        stock_levels = data.pop("stock_levels", None)
        try:
            item = services.update_item(item_id=item_id, data=data, stock_levels=stock_levels)
        except InventoryError as exc:
            return _error(exc)
        return Response(ItemSerializer(selectors.get_item(item.id)).data)

    @extend_schema(
        tags=["Inventory Items"],
        summary="Delete inventory item",
        description="Items with transaction history are deactivated instead of deleted.",
        examples=[OpenApiExample("Deactivated", value={"result": "deactivated"})],
    )
    def delete(self, request, item_id: int):
        try:
            result = services.delete_item(item_id=item_id)
        except InventoryError as exc:
            return _error(exc)
        return Response({"result": result})


class TransactionListCreateView(generics.ListAPIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_scope = "inventory"
    serializer_class = TransactionSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = TransactionFilter

    def get_queryset(self):
        return selectors.transaction_queryset().order_by("-created_at", "-id")

    @extend_schema(
        tags=["Inventory Transactions"],
        summary="List transactions",
        description="Filters: item, transaction_type, date_from, date_to (ISO).",
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Inventory Transactions"],
        summary="Record stock transaction",
        request=TransactionCreateSerializer,
        responses={201: TransactionSerializer},
        examples=[
            OpenApiExample(
                "Purchase",
                value={"item": 1, "transaction_type": "purchase", "quantity": 50, "to_location": 1, "supplier": 3},
                request_only=True,
            ),
            OpenApiExample(
                "Transfer",
                value={"item": 1, "transaction_type": "transfer", "quantity": 10, "from_location": 1, "to_location": 2},
                request_only=True,
            ),
        ],
    )
    def post(self, request):
        serializer = TransactionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        performed_by = _performer(request, data)
        try:
            txn = services.create_transaction(
                item_id=data.pop("item"),
                from_location_id=data.pop("from_location", None),
                to_location_id=data.pop("to_location", None),
                supplier_id=data.pop("supplier", None),
                performed_by=performed_by,
                **data,
            )
        except InventoryError as exc:
            return _error(exc)
        return Response(TransactionSerializer(txn).data, status=status.HTTP_201_CREATED)


class TransactionDetailView(APIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_scope = "inventory"

    @extend_schema(tags=["Inventory Transactions"], summary="Get transaction", responses={200: TransactionSerializer})
    def get(self, request, transaction_id: int):
        try:
            txn = selectors.get_transaction(transaction_id)
        except InventoryError as exc:
            return _error(exc)
        return Response(TransactionSerializer(txn).data)


class SupplierListCreateView(generics.ListAPIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_scope = "inventory"
    serializer_class = SupplierSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = SupplierFilter

    def get_queryset(self):
        return selectors.supplier_queryset()

    @extend_schema(tags=["Suppliers"], summary="List suppliers", description="Filters: search, supplier_type.")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Suppliers"],
        summary="Create supplier",
        request=SupplierSerializer,
        responses={201: SupplierSerializer},
        examples=[
            OpenApiExample(
                "Distributor",
                value={"company_name": "Sunpower Distributors Ltd", "supplier_type": "distributor", "rating": 4},
                request_only=True,
            )
        ],
    )
    def post(self, request):
        serializer = SupplierSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            supplier = services.create_supplier(**serializer.validated_data)
        except InventoryError as exc:
            return _error(exc)
        return Response(SupplierSerializer(supplier).data, status=status.HTTP_201_CREATED)


class SupplierDetailView(APIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_scope = "inventory"

    @extend_schema(tags=["Suppliers"], summary="Get supplier", responses={200: SupplierSerializer})
    def get(self, request, supplier_id: int):
        try:
            supplier = selectors.get_supplier(supplier_id)
        except InventoryError as exc:
            return _error(exc)
        return Response(SupplierSerializer(supplier).data)

    @extend_schema(
        tags=["Suppliers"], summary="Update supplier", request=SupplierSerializer, responses={200: SupplierSerializer}
    )
    def patch(self, request, supplier_id: int):
        serializer = SupplierSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            supplier = services.update_supplier(supplier_id=supplier_id, **serializer.validated_data)
        except InventoryError as exc:
            return _error(exc)
        return Response(SupplierSerializer(supplier).data)

    @extend_schema(tags=["Suppliers"], summary="Delete supplier", responses={204: None})
    def delete(self, request, supplier_id: int):
        try:
            services.delete_supplier(supplier_id=supplier_id)
        except InventoryError as exc:
            return _error(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)


class StockAdjustView(APIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_scope = "inventory_write"

    @extend_schema(
        tags=["Stock Operations"],
        summary="Adjust stock at a location",
        description="Positive quantities record an adjustment in, negative ones an adjustment out.",
        request=StockAdjustmentSerializer,
        responses={201: TransactionSerializer},
        examples=[
            OpenApiExample(
                "Cycle count shortfall",
                value={"item": 1, "location": 1, "adjustment_quantity": -3, "reason": "Cycle count"},
                request_only=True,
            )
        ],
    )
    def post(self, request):
        serializer = StockAdjustmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        performed_by = _performer(request, data)
        try:
            txn = services.adjust_stock(
                item_id=data["item"],
                location_id=data["location"],
                adjustment_quantity=data["adjustment_quantity"],
                performed_by=performed_by,
                reason=data["reason"],
                document_ref=data["document_ref"],
            )
        except InventoryError as exc:
            return _error(exc)
        return Response(TransactionSerializer(txn).data, status=status.HTTP_201_CREATED)


class BulkStockUpdateView(APIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_scope = "inventory_write"

    @extend_schema(
        tags=["Stock Operations"],
        summary="Bulk stock update",
        description="Updates apply in order and commit one by one; the first failure stops the batch.",
        request=BulkStockUpdateSerializer,
        examples=[
            OpenApiExample(
                "Stock take",
                value={
                    "updates": [
                        {"item": 1, "location": 1, "quantity": 40, "operation": "set"},
                        {"item": 2, "location": 1, "quantity": 5, "operation": "add"},
                    ],
                    "reason": "Quarterly stock take",
                },
                request_only=True,
            )
        ],
    )
    def post(self, request):
        serializer = BulkStockUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        performed_by = _performer(request, data)
        try:
            results = services.bulk_update_stock(
                updates=data["updates"], performed_by=performed_by, reason=data["reason"]
            )
        except InventoryError as exc:
            return _error(exc)
        return Response({"results": results})


class ReservedStockView(APIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_scope = "inventory_write"

    @extend_schema(
        tags=["Stock Operations"],
        summary="Update reserved stock",
        request=ReservedStockSerializer,
        responses={200: ItemSerializer},
        examples=[
            OpenApiExample(
                "Reserve for project",
                value={"item": 1, "location": 1, "action": "increase", "quantity": 5, "project": "PRJ-2024-014"},
                request_only=True,
            )
        ],
    )
    def post(self, request):
        serializer = ReservedStockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        performed_by = _performer(request, data)
        try:
            item = services.update_reserved_stock(
                item_id=data["item"],
                location_id=data["location"],
                action=data["action"],
                quantity=data.get("quantity"),
                performed_by=performed_by,
                notes=data["notes"],
                project=data["project"],
            )
        except InventoryError as exc:
            return _error(exc)
        return Response(ItemSerializer(item).data)


class StockReportView(APIView):
    throttle_scope = "inventory"

    @extend_schema(
        tags=["Inventory Reports"],
        summary="Stock report",
        parameters=[StockReportQuerySerializer],
    )
    def get(self, request):
        query = StockReportQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        return Response(
            reports.stock_report(
                category=params.get("category"),
                location_id=params.get("location"),
                low_stock_only=params["low_stock_only"],
                include_valuation=params["include_valuation"],
            )
        )


class MovementReportView(APIView):
    throttle_scope = "inventory"

    @extend_schema(
        tags=["Inventory Reports"],
        summary="Stock movement report",
        parameters=[MovementReportQuerySerializer],
    )
    def get(self, request):
        query = MovementReportQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        return Response(
            reports.movement_report(
                start_date=params["start_date"],
                end_date=params["end_date"],
                item_id=params.get("item"),
                location_id=params.get("location"),
            )
        )


class ValuationReportView(APIView):
    throttle_scope = "inventory"

    @extend_schema(tags=["Inventory Reports"], summary="Inventory valuation")
    def get(self, request):
        return Response({"results": reports.inventory_valuation()})


class DashboardView(APIView):
    throttle_scope = "inventory"

    @extend_schema(
        tags=["Inventory Reports"],
        summary="Inventory dashboard",
        description="Totals, low/out of stock counts, this month's activity and current stock alerts.",
    )
    def get(self, request):
        return Response(reports.dashboard_stats())


# EOF
