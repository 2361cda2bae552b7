from rest_framework import serializers
from drivers.models import DriverProfile


class DriverBasicSerializer(serializers.ModelSerializer):
    """
    Lite version of driver info for ride details
    (sent to passengers once a driver is attached to a ride).
    """
    username = serializers.CharField(source="user.username", read_only=True)
    name = serializers.CharField(source="user.display_name", read_only=True)
    phone_number = serializers.CharField(source="user.phone_number", read_only=True)
    license_plate = serializers.CharField(source="taxi.license_plate", read_only=True, default=None)

    class Meta:
        model = DriverProfile
        fields = [
            "id",
            "username",
            "name",
            "phone_number",
            "license_plate",
            "taxi_association",
            "average_rating",
        ]
