import uuid

from django.db import models
from django.conf import settings


def generate_ride_id():
    return f"ride_{uuid.uuid4().hex[:16]}"


class RideQuerySet(models.QuerySet):
    def active(self):
        """Rides the proximity sweep watches."""
        return self.filter(status__in=Ride.MONITORED_STATUSES)


class Ride(models.Model):
    """A passenger's trip on a fixed route, from request to a terminal state"""

    REQUESTED = 'requested'
    ACCEPTED = 'accepted'
    STARTED = 'started'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'
    DECLINED = 'declined'

    STATUS_CHOICES = [
        (REQUESTED, 'Requested'),
        (ACCEPTED, 'Accepted'),
        (STARTED, 'Started'),
        (IN_PROGRESS, 'In Progress'),
        (COMPLETED, 'Completed'),
        (CANCELLED, 'Cancelled'),
        (DECLINED, 'Declined'),
    ]

    MONITORED_STATUSES = (ACCEPTED, IN_PROGRESS)
    TERMINAL_STATUSES = (COMPLETED, CANCELLED, DECLINED)

    ride_id = models.CharField(max_length=64, unique=True, default=generate_ride_id)

    passenger = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='rides_as_passenger'
    )

    driver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='rides_as_driver'
    )

    # Pickup
    start_latitude = models.FloatField()
    start_longitude = models.FloatField()
    start_address = models.TextField(blank=True)

    # Drop-off
    end_latitude = models.FloatField()
    end_longitude = models.FloatField()
    end_address = models.TextField(blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=REQUESTED, db_index=True)

    # Timestamps
    requested_at = models.DateTimeField(auto_now_add=True)
    accepted_at = models.DateTimeField(null=True, blank=True)
    started_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    estimated_fare = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    estimated_distance = models.FloatField(null=True, blank=True)
    final_fare = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)

    objects = RideQuerySet.as_manager()

    class Meta:
        db_table = 'rides'
        ordering = ['-requested_at']

    def __str__(self):
        return f"Ride {self.ride_id} - {self.passenger} - {self.status}"

    @property
    def start_location(self):
        return (self.start_latitude, self.start_longitude)

    @property
    def end_location(self):
        return (self.end_latitude, self.end_longitude)

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES
