from django.contrib import admin

from .models import Route, RouteStop


class RouteStopInline(admin.TabularInline):
    model = RouteStop
    extra = 0
    ordering = ("is_enriched", "order")


@admin.register(Route)
class RouteAdmin(admin.ModelAdmin):
    """Back-office editing of the route catalogue"""
    list_display = ["route_id", "name", "taxi_association", "fare", "estimated_duration", "is_active"]
    list_filter = ["is_active", "taxi_association"]
    search_fields = ["route_id", "name", "taxi_association"]
    inlines = [RouteStopInline]
