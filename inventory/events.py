"""Structured ledger event logging."""

import logging

logger = logging.getLogger("solarstock.inventory")


def log_stock_event(event: str, *, level: int = logging.INFO, **fields) -> None:
    """Emit ``event`` with its identifiers in ``extra`` for the JSON formatter."""
    logger.log(level, event, extra={"event": event, **fields})


# EOF
