"""Serializers for the location registry."""

from rest_framework import serializers

from .models import StockLocation


class StockLocationSerializer(serializers.ModelSerializer):
    # Declared explicitly so duplicate names reach the service and map to 409.
    name = serializers.CharField(max_length=120)

    class Meta:
        model = StockLocation
        fields = [
            "id",
            "name",
            "address",
            "city",
            "county",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


# EOF
