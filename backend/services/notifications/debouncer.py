"""
Suppress repeat alerts of the same type for the same ride.

Level-triggered: a band that is re-entered after the window has elapsed
alerts again. The check and the later insert are not atomic, so two
concurrent evaluations of one ride may both pass; a duplicate alert is
tolerated.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from django.conf import settings
from django.utils import timezone

from notifications.models import Notification

logger = logging.getLogger(__name__)


class NotificationDebouncer:
    """At most one ``(user, type, ride)`` notification per window."""

    def __init__(self, window_seconds: Optional[int] = None):
        if window_seconds is None:
            window_seconds = settings.NOTIFICATION_DEBOUNCE_SECONDS
        self.window = timedelta(seconds=window_seconds)

    def was_sent_recently(
        self,
        user_id: int,
        notification_type: str,
        ride_id: str,
        now: Optional[datetime] = None,
    ) -> bool:
        now = now or timezone.now()
        return Notification.objects.filter(
            user_id=user_id,
            type=notification_type,
            ride_id=ride_id,
            created_at__gt=now - self.window,
        ).exists()

    def allow(self, user_id: int, notification_type: str, ride_id: str, now: Optional[datetime] = None) -> bool:
        if self.was_sent_recently(user_id, notification_type, ride_id, now=now):
            logger.debug(
                "Suppressed %s for user %s on ride %s (window=%ss)",
                notification_type, user_id, ride_id, int(self.window.total_seconds()),
            )
            return False
        return True
