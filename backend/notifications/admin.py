from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["notification_id", "user", "type", "priority", "ride_id", "is_read", "is_push", "created_at"]
    list_filter = ["type", "priority", "is_read"]
    search_fields = ["notification_id", "user__username", "ride_id"]
    readonly_fields = ["created_at", "read_at"]
