"""WebSocket URL routing for the realtime app."""

from django.urls import re_path

from .consumers.notification_consumer import NotificationConsumer

websocket_urlpatterns = [
    # Notifications and location updates for the signed-in user
    # URL: ws://localhost:8000/ws/notifications/?token=<access token>
    re_path(
        r"ws/notifications/$",
        NotificationConsumer.as_asgi(),
        name="notifications-ws"
    ),
]
