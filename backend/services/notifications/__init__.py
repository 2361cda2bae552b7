"""
Notification service.

This module handles:
    - Debounced emission of proximity alerts
    - One-shot ride lifecycle notifications
    - Handing stored notifications to the push transport
"""

from .debouncer import NotificationDebouncer
from .dispatch import emit_notification, record_notification, send_ride_notification

__all__ = [
    "NotificationDebouncer",
    "emit_notification",
    "record_notification",
    "send_ride_notification",
]
