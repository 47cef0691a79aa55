"""Shared enumerations and choices used across apps."""

from django.db import models


class StockStatus(models.TextChoices):
    """Item-level stock classification.

    Only the first three are ever derived from stock levels; the rest can be
    set by hand but are overwritten on the next save or reconciliation.
    """

    IN_STOCK = "in_stock", "In Stock"
    LOW_STOCK = "low_stock", "Low Stock"
    OUT_OF_STOCK = "out_of_stock", "Out of Stock"
    ON_ORDER = "on_order", "On Order"
    DISCONTINUED = "discontinued", "Discontinued"
    QUARANTINED = "quarantined", "Quarantined"


class TransactionType(models.TextChoices):
    PURCHASE = "purchase", "Purchase"
    SALE = "sale", "Sale"
    TRANSFER = "transfer", "Transfer"
    ADJUSTMENT_IN = "adjustment_in", "Adjustment In"
    ADJUSTMENT_OUT = "adjustment_out", "Adjustment Out"
    RETURN = "return", "Return"
    ALLOCATION = "allocation", "Project Allocation"
    CONSUMPTION = "consumption", "Consumption"
    DAMAGE = "damage", "Damage/Loss"
    MAINTENANCE = "maintenance", "Maintenance Use"


class ReservedStockAction(models.TextChoices):
    INCREASE = "increase", "Increase"
    DECREASE = "decrease", "Decrease"
    UNRESERVE_ALL = "unreserve_all", "Unreserve all"


class BulkOperation(models.TextChoices):
    ADD = "add", "Add"
    SUBTRACT = "subtract", "Subtract"
    SET = "set", "Set"


class SupplierType(models.TextChoices):
    MANUFACTURER = "manufacturer", "Manufacturer"
    DISTRIBUTOR = "distributor", "Distributor"
    LOCAL_SUPPLIER = "local_supplier", "Local Supplier"
    INTERNATIONAL = "international", "International Supplier"
    SERVICE_PROVIDER = "service_provider", "Service Provider"


class ItemCondition(models.TextChoices):
    NEW = "new", "New"
    REFURBISHED = "refurbished", "Refurbished"
    USED_GOOD = "used_good", "Used - Good"
    USED_FAIR = "used_fair", "Used - Fair"
    DAMAGED = "damaged", "Damaged"
    FOR_REPAIR = "for_repair", "For Repair"


class ItemCategory(models.TextChoices):
    """Catalog categories for power, solar and installation stock."""

    # Power & energy systems
    GENERATOR = "generator", "Generator"
    RECTIFIER = "rectifier", "Rectifier System"
    INVERTER = "inverter", "Inverter"
    BATTERY = "battery", "Battery"
    BATTERY_CABINET = "battery_cabinet", "Battery Cabinet"

    # Solar & renewables
    SOLAR_PANEL = "solar_panel", "Solar Panel"
    PV_CONTROLLER = "pv_controller", "PV Controller"
    SOLAR_STRUCTURE = "solar_structure", "Solar Structure"
    SOLAR_SYSTEM = "solar_system", "Solar PV System"

    # Cables
    POWER_CABLE = "power_cable", "Power Cable"
    CONTROL_CABLE = "control_cable", "Control Cable"
    FLEX_CABLE = "flex_cable", "Flex Cable"
    EARTHING_CABLE = "earthing_cable", "Earthing Cable"

    # Installation materials
    CONDUIT = "conduit", "Conduit"
    CABLE_TRAY = "cable_tray", "Cable Tray"
    DUCTING = "ducting", "Ducting"
    EARTHING_ROD = "earthing_rod", "Earthing Rod"

    # Hardware & accessories
    CONNECTOR = "connector", "Connector"
    BREAKER = "breaker", "Circuit Breaker"
    CABLE_LUG = "cable_lug", "Cable Lug"
    INSULATION = "insulation", "Insulation Material"
    MOUNTING_HARDWARE = "mounting_hardware", "Mounting Hardware"

    # Civil works
    CONCRETE = "concrete", "Concrete"
    EXCAVATION = "excavation", "Excavation Work"
    SLAB_WORK = "slab_work", "Slab Work"

    # Tools
    INSTALLATION_TOOL = "installation_tool", "Installation Tool"
    TESTING_EQUIPMENT = "testing_equipment", "Testing Equipment"

    # Services
    INSTALLATION_SERVICE = "installation_service", "Installation Service"
    COMMISSIONING_SERVICE = "commissioning_service", "Commissioning Service"
    MAINTENANCE_SERVICE = "maintenance_service", "Maintenance Service"

    SPARE_PART = "spare_part", "Spare Part"
    CONSUMABLE = "consumable", "Consumable"
    OTHER = "other", "Other"


class UnitOfMeasure(models.TextChoices):
    PIECES = "pcs", "Pcs"
    SETS = "sets", "Sets"
    UNITS = "units", "Units"
    METERS = "m", "Meters"
    KILOMETERS = "km", "Kilometers"
    FEET = "ft", "Feet"
    SQUARE_METERS = "m2", "M²"
    SQUARE_FEET = "ft2", "Ft²"
    CUBIC_METERS = "m3", "M³"
    CUBIC_FEET = "ft3", "Ft³"
    LITERS = "l", "Liters"
    KILOGRAMS = "kg", "Kg"
    TONNES = "t", "Tonnes"
    POUNDS = "lbs", "Lbs"
    KILOWATTS = "kw", "kW"
    KWP = "kwp", "KWp"
    KVA = "kva", "kVA"
    AMPERE_HOURS = "ah", "AH"
    WATTS = "w", "W"
    VOLTS = "v", "V"
    HOURS = "hours", "Hours"
    DAYS = "days", "Days"
    MANHOURS = "man_hours", "Man-hours"
    ROLLS = "rolls", "Rolls"
    BOXES = "boxes", "Boxes"
    PACKETS = "packets", "Packets"
