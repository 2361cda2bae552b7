"""Realtime consumers for WebSocket communication."""

from .notification_consumer import NotificationConsumer

__all__ = ["NotificationConsumer"]
