from rest_framework import serializers

from .models import LocationSample


class LocationUpdateSerializer(serializers.Serializer):
    """Serializer for a client GPS fix."""
    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    role = serializers.ChoiceField(choices=[c[0] for c in LocationSample.ROLE_CHOICES], required=False)


class LocationSampleSerializer(serializers.ModelSerializer):
    class Meta:
        model = LocationSample
        fields = ["user", "latitude", "longitude", "role", "updated_at"]
        read_only_fields = fields
