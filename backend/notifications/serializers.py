from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ["notification_id", "type", "title", "message", "priority",
                  "ride_id", "metadata", "is_read", "created_at", "read_at"]
        read_only_fields = fields
