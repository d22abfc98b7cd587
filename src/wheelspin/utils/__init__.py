"""
Utility functions and helpers for the WheelSpin package.

This module contains shared helpers used across the engine and its
services, mainly the structured event logging used for spin lifecycle
events.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields: Any) -> None:
    """
    Log a lifecycle event as a single-line JSON document.

    Every document carries the event name and a UTC timestamp; extra keyword
    arguments are added as-is and serialized with ``str`` when they are not
    JSON native.

    Args:
        logger: Logger to write to
        event: Event name, e.g. ``SPIN_RESOLVED``
        level: Logging level for the record
        **fields: Additional event data

    Example:
        >>> log_event(logger, "SPIN_STARTED", sections=4)
    """
    if not logger.isEnabledFor(level):
        return

    log_data = {
        "event": event,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        **fields,
    }
    logger.log(level, json.dumps(log_data, default=str))


__all__ = ["log_event"]
