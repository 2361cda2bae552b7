"""WebSocket consumer delivering notifications and taking location updates."""

import logging
from typing import Dict, Any

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer

from locations.services import update_user_location
from realtime.notifications import user_group

logger = logging.getLogger(__name__)


class NotificationConsumer(AsyncJsonWebsocketConsumer):
    """
    One socket per signed-in user, drivers and passengers alike.

    Handles:
        - Pushing stored notifications as they are created
        - ``location_update`` messages, stored as the user's location sample
        - ``ping`` keepalives
    """

    async def connect(self):
        self.user = self.scope["user"]
        if self.user.is_anonymous:
            await self.close()
            return

        self.user_id = self.user.id
        self.group_name = user_group(self.user_id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)

        await self.accept()
        await self.send_json({
            "type": "connection_established",
            "user_id": self.user_id,
            "role": getattr(self.user, "role", None),
        })

    async def disconnect(self, close_code):
        group_name = getattr(self, "group_name", None)
        if group_name:
            await self.channel_layer.group_discard(group_name, self.channel_name)

    async def receive_json(self, data: Dict[str, Any]):
        msg_type = data.get("type")
        try:
            if msg_type == "location_update":
                await self._handle_location_update(data)
            elif msg_type == "ping":
                await self.send_json({"type": "pong"})
            else:
                await self.send_error(f"Unknown message type: {msg_type}")
        except Exception:
            logger.exception("Error handling %s from user %s", msg_type, self.user_id)
            await self.send_error(f"Error processing {msg_type}")

    async def send_error(self, message: str):
        await self.send_json({"type": "error", "message": message})

    # ---------------------- Server Events ----------------------

    async def notification_push(self, event):
        """Sent by realtime.notifications.push_to_user."""
        await self.send_json({
            "type": "notification",
            "notification": event.get("notification", {}),
        })

    # ---------------------- Message Handlers ----------------------

    async def _handle_location_update(self, data: Dict[str, Any]):
        lat = data.get("latitude")
        lon = data.get("longitude")

        if lat is None or lon is None:
            await self.send_error("location_update requires latitude and longitude")
            return

        try:
            lat, lon = float(lat), float(lon)
        except (TypeError, ValueError):
            await self.send_error("latitude and longitude must be numbers")
            return

        if not (-90 <= lat <= 90 and -180 <= lon <= 180):
            await self.send_error("latitude or longitude out of range")
            return

        await database_sync_to_async(update_user_location)(self.user, lat, lon, role=data.get("role"))
        logger.debug("Location update from user %s: %s,%s", self.user_id, lat, lon)

        await self.send_json({
            "type": "location_updated",
            "latitude": lat,
            "longitude": lon,
        })
