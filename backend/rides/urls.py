from django.urls import path
from . import views

app_name = 'rides'

urlpatterns = [
    # Search and request
    path('find-taxis/', views.find_available_taxis, name='find-taxis'),
    path('request/', views.request_ride, name='request-ride'),

    # Proximity
    path('proximity/tick/', views.proximity_tick, name='proximity-tick'),
    path('<str:ride_id>/proximity/', views.ride_proximity, name='ride-proximity'),

    # Ride details and actions
    path('<str:ride_id>/', views.ride_detail, name='ride-detail'),
    path('<str:ride_id>/<str:action>/', views.ride_action, name='ride-action'),
]
