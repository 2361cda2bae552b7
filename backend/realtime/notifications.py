"""
Push transport: deliver notifications to connected clients over Channels.

Every user socket joins its personal group ``user_<id>``; server code sends
``notification_push`` events to that group. Delivery is fire-and-forget.
"""

from __future__ import annotations

import logging
from typing import Dict, Any

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)


def user_group(user_id: int) -> str:
    return f"user_{user_id}"


def push_to_user(user_id: int | None, payload: Dict[str, Any]) -> bool:
    """
    Send a ``notification_push`` event to one user's personal group.

    Args:
        user_id: Target user's ID
        payload: Serialized notification

    Returns:
        True if handed to the channel layer, False otherwise
    """
    if not user_id:
        return False

    channel_layer = get_channel_layer()
    if channel_layer is None:
        return False

    message = {
        "type": "notification_push",
        "notification": payload,
    }

    logger.debug("WS -> user_%s: %s", user_id, payload.get("type"))
    async_to_sync(channel_layer.group_send)(user_group(user_id), message)

    return True
