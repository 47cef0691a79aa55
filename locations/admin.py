"""Admin registrations for the location registry."""

from django.contrib import admin

from .models import StockLocation


@admin.register(StockLocation)
class StockLocationAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "city", "county", "updated_at")
    search_fields = ("name", "city", "county")


# EOF
