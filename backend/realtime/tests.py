from types import SimpleNamespace
from unittest.mock import patch

from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator
from django.contrib.auth.models import AnonymousUser
from django.test import SimpleTestCase

from .consumers import NotificationConsumer


class NotificationConsumerTests(SimpleTestCase):
	databases = "__all__"

	def communicator(self, user):
		communicator = WebsocketCommunicator(NotificationConsumer.as_asgi(), "/ws/notifications/")
		communicator.scope["user"] = user
		return communicator

	async def test_anonymous_connection_is_rejected(self):
		communicator = self.communicator(AnonymousUser())

		connected, _ = await communicator.connect()

		self.assertFalse(connected)

	async def test_receives_pushes_for_own_group(self):
		user = SimpleNamespace(id=42, role="passenger", is_anonymous=False)
		communicator = self.communicator(user)

		connected, _ = await communicator.connect()
		self.assertTrue(connected)
		hello = await communicator.receive_json_from()
		self.assertEqual(hello["type"], "connection_established")

		await get_channel_layer().group_send(
			"user_42",
			{"type": "notification_push", "notification": {"type": "driver_nearby"}},
		)
		message = await communicator.receive_json_from()

		self.assertEqual(message, {"type": "notification", "notification": {"type": "driver_nearby"}})
		await communicator.disconnect()

	async def test_ping_and_unknown_messages(self):
		communicator = self.communicator(SimpleNamespace(id=7, role="driver", is_anonymous=False))
		await communicator.connect()
		await communicator.receive_json_from()

		await communicator.send_json_to({"type": "ping"})
		self.assertEqual(await communicator.receive_json_from(), {"type": "pong"})

		await communicator.send_json_to({"type": "teleport"})
		error = await communicator.receive_json_from()
		self.assertEqual(error["type"], "error")
		await communicator.disconnect()

	async def test_location_update_is_stored(self):
		user = SimpleNamespace(id=7, role="driver", is_anonymous=False)
		communicator = self.communicator(user)
		await communicator.connect()
		await communicator.receive_json_from()

		with patch("realtime.consumers.notification_consumer.update_user_location") as mock_update:
			await communicator.send_json_to({"type": "location_update", "latitude": -25.7461, "longitude": 28.1881})
			reply = await communicator.receive_json_from()

		mock_update.assert_called_once_with(user, -25.7461, 28.1881, role=None)
		self.assertEqual(reply["type"], "location_updated")
		await communicator.disconnect()

	async def test_location_update_requires_coordinates(self):
		communicator = self.communicator(SimpleNamespace(id=7, role="driver", is_anonymous=False))
		await communicator.connect()
		await communicator.receive_json_from()

		await communicator.send_json_to({"type": "location_update", "latitude": -25.7})
		error = await communicator.receive_json_from()

		self.assertEqual(error["message"], "location_update requires latitude and longitude")
		await communicator.disconnect()
