from django.db import models


class RouteQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)


class Route(models.Model):
    """A fixed minibus-taxi route serviced by a taxi association."""

    route_id = models.CharField(max_length=64, unique=True)
    name = models.CharField(max_length=200)

    fare = models.DecimalField(max_digits=8, decimal_places=2)
    estimated_duration = models.PositiveIntegerField(help_text="Minutes end to end")
    estimated_distance = models.FloatField(null=True, blank=True, help_text="Kilometres end to end")

    taxi_association = models.CharField(max_length=200)
    is_active = models.BooleanField(default=True)

    objects = RouteQuerySet.as_manager()

    class Meta:
        db_table = 'routes'
        ordering = ['route_id']

    def __str__(self):
        return f"{self.route_id} - {self.name}"

    def scoring_stops(self):
        """
        Ordered stops used for matching.

        Enriched (denser) waypoints supersede the primary stop list when the
        route has any.
        """
        stops = list(self.stops.all())
        enriched = [stop for stop in stops if stop.is_enriched]
        chosen = enriched or [stop for stop in stops if not stop.is_enriched]
        return sorted(chosen, key=lambda stop: stop.order)


class RouteStop(models.Model):
    """A named point on a route. ``order`` increases along the physical path."""

    route = models.ForeignKey(Route, on_delete=models.CASCADE, related_name='stops')
    stop_id = models.CharField(max_length=64)
    name = models.CharField(max_length=200)
    latitude = models.FloatField()
    longitude = models.FloatField()
    order = models.PositiveIntegerField()
    is_enriched = models.BooleanField(default=False)

    class Meta:
        db_table = 'route_stops'
        ordering = ['route', 'is_enriched', 'order']
        constraints = [
            models.UniqueConstraint(
                fields=['route', 'is_enriched', 'order'],
                name='unique_route_stop_order',
            )
        ]

    def __str__(self):
        return f"{self.route.route_id} #{self.order} {self.name}"

    @property
    def coordinates(self):
        return (self.latitude, self.longitude)

