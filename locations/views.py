"""Warehouse / stock location endpoints."""

from common.exceptions import InventoryError
from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .models import StockLocation
from .serializers import StockLocationSerializer


class LocationListCreateView(generics.ListAPIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_scope = "inventory"
    serializer_class = StockLocationSerializer
    queryset = StockLocation.objects.order_by("name", "id")

    @extend_schema(tags=["Locations"], summary="List stock locations")
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Locations"],
        summary="Create stock location",
        request=StockLocationSerializer,
        responses={201: StockLocationSerializer},
        examples=[
            OpenApiExample(
                "Warehouse",
                value={"name": "Nairobi Main Warehouse", "city": "Nairobi", "county": "Nairobi"},
                request_only=True,
            )
        ],
    )
    def post(self, request):
        serializer = StockLocationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            location = services.create_location(**serializer.validated_data)
        except InventoryError as exc:
            return Response({"detail": exc.detail}, status=exc.status_code)
        return Response(StockLocationSerializer(location).data, status=status.HTTP_201_CREATED)


class LocationDetailView(APIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_scope = "inventory"

    @extend_schema(tags=["Locations"], summary="Get stock location", responses={200: StockLocationSerializer})
    def get(self, request, location_id: int):
        try:
            location = services.get_location(location_id)
        except InventoryError as exc:
            return Response({"detail": exc.detail}, status=exc.status_code)
        return Response(StockLocationSerializer(location).data)

    @extend_schema(
        tags=["Locations"],
        summary="Update stock location",
        request=StockLocationSerializer,
        responses={200: StockLocationSerializer},
    )
    def patch(self, request, location_id: int):
        serializer = StockLocationSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            location = services.update_location(location_id=location_id, **serializer.validated_data)
        except InventoryError as exc:
            return Response({"detail": exc.detail}, status=exc.status_code)
        return Response(StockLocationSerializer(location).data)

    @extend_schema(tags=["Locations"], summary="Delete stock location", responses={204: None})
    def delete(self, request, location_id: int):
        try:
            services.delete_location(location_id=location_id)
        except InventoryError as exc:
            return Response({"detail": exc.detail}, status=exc.status_code)
        return Response(status=status.HTTP_204_NO_CONTENT)


# EOF
