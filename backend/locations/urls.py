from django.urls import path
from .views import MyLocationView

urlpatterns = [
    path("me/", MyLocationView.as_view(), name="my-location"),
]
