from django.contrib import admin
from django.urls import path, include

from .views import health_check

urlpatterns = [
    path('admin/', admin.site.urls),
    path("health/", health_check), # Health check endpoint

    # Taxi search, ride requests, ride actions and proximity (at /api/rides/)
    path('api/rides/', include('rides.urls')),

    # Current location upload (at /api/locations/)
    path('api/locations/', include('locations.urls')),

    # In-app notification inbox (at /api/notifications/)
    path('api/notifications/', include('notifications.urls')),
]
