from django.conf import settings
from django.db import models


class LocationSampleQuerySet(models.QuerySet):
    def latest_for(self, user_id):
        """Current sample for a user, or None. There is only ever one."""
        return self.filter(user_id=user_id).first()


class LocationSample(models.Model):
    """Latest known position of a user. Overwritten in place, never appended."""

    ROLE_CHOICES = [
        ('passenger', 'Passenger'),
        ('driver', 'Driver'),
        ('both', 'Both'),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='location',
    )
    latitude = models.FloatField()
    longitude = models.FloatField()
    role = models.CharField(max_length=10, choices=ROLE_CHOICES)
    updated_at = models.DateTimeField(auto_now=True)

    objects = LocationSampleQuerySet.as_manager()

    class Meta:
        db_table = 'locations'

    def __str__(self):
        return f"{self.user_id} @ ({self.latitude}, {self.longitude})"

    @property
    def coordinates(self):
        return (self.latitude, self.longitude)
