"""
Centralized event logging for the audit trail.

Records security-relevant actions (registration, login, content signing,
integrity failures) in a bounded in-memory log, optionally mirrored to a
JSON file.

Usage:
    from core import log_event, get_event_log

    # Log an event
    log_event("login", details="Login successful: admin", status="success", user="admin")

    # Get recent events, most recent first
    events = get_event_log(limit=20)
"""

import json
import logging
import os
import re
import threading
from collections import deque
from pathlib import Path
from typing import Optional

from core.timestamps import isonow

logger = logging.getLogger(__name__)

# Constants
MAX_EVENTS = 500

# =============================================================================
# Log Redaction
# =============================================================================

# Feature flag (default: enabled)
ENABLE_LOG_REDACTION = os.getenv("ENABLE_LOG_REDACTION", "true").lower() == "true"
MAX_REDACTION_LENGTH = 10240  # Skip redaction on strings > 10KB (performance)

# Pre-compiled patterns (order matters - more specific first)
REDACTION_PATTERNS = [
    # Explicit key=value patterns
    (re.compile(r'\b(password|passwd|pwd)\s*[=:]\s*\S+', re.IGNORECASE), r'\1=***REDACTED***'),
    (re.compile(r'\b(secret|api[_-]?key|auth[_-]?token)\s*[=:]\s*\S+', re.IGNORECASE), r'\1=***REDACTED***'),

    # Bearer tokens
    (re.compile(r'(Bearer\s+)[A-Za-z0-9\-_\.]{20,}', re.IGNORECASE), r'\1***REDACTED***'),

    # Bare compact JWTs (header segment always starts with eyJ)
    (re.compile(r'\beyJ[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+'), '***REDACTED***'),

    # JSON-style "key": "value"
    (re.compile(r'(["\'](?:password|secret|token|signed_token)["\'])\s*:\s*["\'][^"\']+["\']', re.IGNORECASE), r'\1: "***REDACTED***"'),
]


def _redact_sensitive(text: str) -> str:
    """
    Remove sensitive data from log text.

    Returns original text if:
    - ENABLE_LOG_REDACTION is false
    - Text is None or empty
    - Text exceeds MAX_REDACTION_LENGTH (performance guard)
    """
    if not ENABLE_LOG_REDACTION or not text:
        return text
    if len(text) > MAX_REDACTION_LENGTH:
        return text

    result = text
    for pattern, replacement in REDACTION_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


class EventLogger:
    """
    Thread-safe, bounded audit event log.

    Events live in memory; if log_file is given they are also written to
    it as a JSON array after every append.
    """

    def __init__(
        self,
        log_file: Optional[Path] = None,
        max_events: int = MAX_EVENTS,
    ):
        self._log_file = log_file
        self._max_events = max_events
        self._event_log: deque = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def save(self) -> None:
        """Mirror the event log to log_file, if one is configured."""
        if self._log_file is None:
            return
        try:
            self._log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self._log_file, "w") as f:
                json.dump(list(self._event_log), f, indent=2)
        except OSError as e:
            logger.warning(f"Failed to save event log: {e}")

    def log(
        self,
        action: str,
        details: Optional[str] = None,
        status: str = "success",
        user: Optional[str] = None,
    ) -> dict:
        """
        Log an event to the audit trail.

        Args:
            action: The action being logged (e.g., "login", "sign_content")
            details: Additional details about the action
            status: Status of the action ("success", "error", "warning")
            user: Username of the caller, when known

        Returns:
            The event dict that was logged
        """
        event = {
            "timestamp": isonow(),
            "action": action,
            "details": _redact_sensitive(details) if details else None,
            "status": status,
        }
        if user is not None:
            event["user"] = user

        with self._lock:
            self._event_log.append(event)
            self.save()

        return event

    def get_events(self, limit: int = 50, action: Optional[str] = None) -> list[dict]:
        """
        Get events from the log with optional filtering.

        Returns:
            List of event dicts, most recent first
        """
        with self._lock:
            events = list(self._event_log)

        if action:
            events = [e for e in events if e.get("action") == action]

        return list(reversed(events[-limit:]))

    def clear(self) -> None:
        """Clear all events from the log."""
        with self._lock:
            self._event_log.clear()
            self.save()


# =============================================================================
# Module-level singleton and convenience functions
# =============================================================================

_log_path = os.getenv("EVENT_LOG_FILE", "")
event_logger = EventLogger(log_file=Path(_log_path) if _log_path else None)


def log_event(
    action: str,
    details: Optional[str] = None,
    status: str = "success",
    user: Optional[str] = None,
) -> dict:
    """Log an event to the shared audit trail."""
    return event_logger.log(action, details=details, status=status, user=user)


def get_event_log(limit: int = 50, action: Optional[str] = None) -> list[dict]:
    """Get recent audit events, most recent first."""
    return event_logger.get_events(limit=limit, action=action)


def clear_event_log() -> None:
    """Clear the shared audit trail."""
    event_logger.clear()
