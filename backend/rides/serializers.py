from rest_framework import serializers
from django.conf import settings

from .models import Ride

from accounts.serializers import UserBasicSerializer
from drivers.serializers import DriverBasicSerializer


class RideSerializer(serializers.ModelSerializer):
    """Serializer for Rides"""
    passenger = UserBasicSerializer(read_only=True)
    driver = UserBasicSerializer(read_only=True)
    driver_profile = DriverBasicSerializer(read_only=True, source='driver.driver_profile', default=None)

    class Meta:
        model = Ride
        fields = ['ride_id', 'passenger', 'driver', 'driver_profile',
                  'start_latitude', 'start_longitude', 'start_address',
                  'end_latitude', 'end_longitude', 'end_address',
                  'status', 'estimated_fare', 'estimated_distance', 'final_fare',
                  'requested_at', 'accepted_at', 'started_at', 'completed_at', 'cancelled_at']
        read_only_fields = fields


class _JourneySerializer(serializers.Serializer):
    start_latitude = serializers.FloatField(min_value=-90, max_value=90)
    start_longitude = serializers.FloatField(min_value=-180, max_value=180)
    end_latitude = serializers.FloatField(min_value=-90, max_value=90)
    end_longitude = serializers.FloatField(min_value=-180, max_value=180)


class FindTaxisQuerySerializer(_JourneySerializer):
    """Query parameters for taxi search. Omitted limits use TAXI_SEARCH_DEFAULTS."""
    max_origin_distance = serializers.FloatField(min_value=0, required=False)
    max_destination_distance = serializers.FloatField(min_value=0, required=False)
    max_taxi_distance = serializers.FloatField(min_value=0, required=False)
    max_results = serializers.IntegerField(min_value=1, max_value=100, required=False)

    def validate(self, attrs):
        for key, value in settings.TAXI_SEARCH_DEFAULTS.items():
            attrs.setdefault(key, value)
        return attrs


class RideRequestCreateSerializer(_JourneySerializer):
    """Serializer for creating ride requests"""
    driver_id = serializers.IntegerField()
    start_address = serializers.CharField(required=False, allow_blank=True, default="")
    end_address = serializers.CharField(required=False, allow_blank=True, default="")
