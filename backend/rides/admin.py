"""Tells what to show in the Django admin interface for rides app"""

from django.contrib import admin
from .models import Ride


@admin.register(Ride)
class RideAdmin(admin.ModelAdmin):
    """Ride admin"""
    list_display = ['ride_id', 'passenger', 'driver', 'status', 'requested_at', 'accepted_at', 'completed_at']
    list_filter = ['status', 'requested_at']
    search_fields = ['ride_id', 'passenger__username', 'driver__username', 'start_address', 'end_address']
    readonly_fields = ['ride_id', 'requested_at', 'accepted_at', 'started_at', 'completed_at', 'cancelled_at']
    date_hierarchy = 'requested_at'
