"""
Core shared utilities.

This module consolidates functionality used by both the HTTP API
(webapi/) and the ledger simulator (ledger/):
- audit event log with redaction
- API error hierarchy
- UTC timestamp helpers
"""

from .event_logger import (
    EventLogger,
    event_logger,
    log_event,
    get_event_log,
    clear_event_log,
)
from .timestamps import now, isonow

__all__ = [
    "EventLogger",
    "event_logger",
    "log_event",
    "get_event_log",
    "clear_event_log",
    "now",
    "isonow",
]
