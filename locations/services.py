"""Location registry services: create, update and guarded delete."""

import logging

from common.exceptions import BadRequest, Conflict, NotFound
from django.db import transaction

from .models import StockLocation

logger = logging.getLogger("solarstock.locations")


def get_location(location_id) -> StockLocation:
    try:
        return StockLocation.objects.get(pk=location_id)
    except (StockLocation.DoesNotExist, ValueError, TypeError):
        raise NotFound(f"Warehouse with ID {location_id} not found")


def location_exists(location_id) -> bool:
    try:
        return StockLocation.objects.filter(pk=int(location_id)).exists()
    except (ValueError, TypeError):
        return False


@transaction.atomic
def create_location(*, name: str, address: str = "", city: str = "", county: str = "") -> StockLocation:
    name = (name or "").strip()
    if not name:
        raise BadRequest("Location name is required")
    if StockLocation.objects.filter(name=name).exists():
        raise Conflict(f"Stock location with name '{name}' already exists")
    location = StockLocation.objects.create(name=name, address=address, city=city, county=county)
    logger.info("locations.created", extra={"event": "locations.created", "location_id": location.id})
    return location


@transaction.atomic
def update_location(*, location_id, **fields) -> StockLocation:
    location = get_location(location_id)
    name = fields.get("name")
    if name is not None:
        name = name.strip()
        if not name:
            raise BadRequest("Location name is required")
        if StockLocation.objects.filter(name=name).exclude(pk=location.pk).exists():
            raise Conflict(f"Stock location with name '{name}' already exists")
        fields["name"] = name
    for attr, value in fields.items():
        setattr(location, attr, value)
    location.save()
    logger.info("locations.updated", extra={"event": "locations.updated", "location_id": location.id})
    return location


@transaction.atomic
def delete_location(*, location_id) -> None:
    """Delete a location unless stock or ledger history still points at it."""

    location = get_location(location_id)
    in_use = (
        location.stock_levels.exists()
        or location.outgoing_transactions.exists()
        or location.incoming_transactions.exists()
    )
    if in_use:
        raise BadRequest("Cannot delete a location that holds stock or has transactions")
    location.delete()
    logger.info("locations.deleted", extra={"event": "locations.deleted", "location_id": location_id})


# EOF
