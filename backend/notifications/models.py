import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


def generate_notification_id():
    return f"notif_{uuid.uuid4().hex[:16]}"


class Notification(models.Model):
    """In-app notification. Append-only apart from the read flag."""

    TYPE_CHOICES = [
        ('ride_request', 'Ride request'),
        ('ride_accepted', 'Ride accepted'),
        ('ride_declined', 'Ride declined'),
        ('ride_started', 'Ride started'),
        ('ride_completed', 'Ride completed'),
        ('ride_cancelled', 'Ride cancelled'),
        ('driver_approaching', 'Driver approaching'),
        ('driver_nearby', 'Driver nearby'),
        ('driver_arrived', 'Driver arrived'),
        ('passenger_at_stop', 'Passenger at stop'),
    ]

    PRIORITY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
        ('urgent', 'Urgent'),
    ]

    notification_id = models.CharField(max_length=64, unique=True, default=generate_notification_id)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications',
    )
    type = models.CharField(max_length=32, choices=TYPE_CHOICES)
    title = models.CharField(max_length=200)
    message = models.TextField()
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='medium')

    # Copy of metadata["rideId"] so the debounce lookup can use an index
    ride_id = models.CharField(max_length=64, blank=True, default='')
    metadata = models.JSONField(default=dict, blank=True)

    is_read = models.BooleanField(default=False)
    is_push = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)
    read_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'type', 'ride_id', 'created_at'], name='notif_debounce_idx'),
        ]

    def __str__(self):
        return f"{self.type} -> {self.user_id} ({self.ride_id})"
