from django.contrib import admin
from drivers.models import DriverProfile, Taxi


class TaxiInline(admin.StackedInline):
    model = Taxi
    extra = 0


@admin.register(DriverProfile)
class DriverProfileAdmin(admin.ModelAdmin):
    """Admin panel for managing Driver Profiles"""

    list_display = [
        "user",
        "assigned_route",
        "taxi_association",
        "number_of_rides_completed",
        "average_rating",
    ]

    list_filter = [
        "taxi_association",
        "assigned_route",
    ]

    search_fields = [
        "user__username",
        "taxi__license_plate",
    ]

    inlines = [TaxiInline]

    ordering = ("user__username",)
