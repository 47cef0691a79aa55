"""Domain errors raised by service functions.

Views translate these into ``{"detail": ...}`` responses using ``status_code``.
"""


class InventoryError(Exception):
    """Base class for stock, catalog and registry failures."""

    status_code = 400
    default_detail = "Inventory operation failed."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFound(InventoryError):
    status_code = 404
    default_detail = "Not found."


class BadRequest(InventoryError):
    status_code = 400
    default_detail = "Invalid request."


class InsufficientStock(BadRequest):
    default_detail = "Insufficient stock."


class Conflict(InventoryError):
    status_code = 409
    default_detail = "Resource already exists."
