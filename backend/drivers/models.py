from django.db import models
from django.conf import settings

User = settings.AUTH_USER_MODEL


class DriverProfileQuerySet(models.QuerySet):
    def on_route(self, route):
        return self.filter(assigned_route=route).select_related("user", "taxi")


class DriverProfile(models.Model):
    """Driver-specific details: assigned route and aggregate stats"""

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='driver_profile')

    assigned_route = models.ForeignKey(
        'routes.Route',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='drivers',
    )
    route_assigned_at = models.DateTimeField(null=True, blank=True)
    taxi_association = models.CharField(max_length=200, blank=True)

    number_of_rides_completed = models.PositiveIntegerField(default=0)
    average_rating = models.FloatField(null=True, blank=True)

    objects = DriverProfileQuerySet.as_manager()

    class Meta:
        db_table = 'driver_profiles'

    def __str__(self):
        return f"{self.user.username} - {self.assigned_route_id or 'unassigned'}"


class Taxi(models.Model):
    """The vehicle a driver operates"""

    driver = models.OneToOneField(DriverProfile, on_delete=models.CASCADE, related_name='taxi')
    license_plate = models.CharField(max_length=20, unique=True)
    model = models.CharField(max_length=100)
    color = models.CharField(max_length=50, blank=True)
    year = models.PositiveIntegerField(null=True, blank=True)
    capacity = models.PositiveIntegerField(default=15)
    is_available = models.BooleanField(default=True)

    class Meta:
        db_table = 'taxis'

    def __str__(self):
        return f"{self.license_plate} ({self.model})"
