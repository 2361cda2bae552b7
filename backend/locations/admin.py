from django.contrib import admin

from .models import LocationSample


@admin.register(LocationSample)
class LocationSampleAdmin(admin.ModelAdmin):
    list_display = ["user", "role", "latitude", "longitude", "updated_at"]
    list_filter = ["role"]
    search_fields = ["user__username"]
    readonly_fields = ["updated_at"]
