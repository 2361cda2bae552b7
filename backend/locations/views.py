from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from locations.models import LocationSample
from locations.serializers import LocationUpdateSerializer, LocationSampleSerializer
from locations.services import update_user_location


class MyLocationView(APIView):
    """Read or overwrite the caller's current location sample."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        sample = LocationSample.objects.latest_for(request.user.id)
        if sample is None:
            return Response({"error": "No location recorded"}, status=404)
        return Response(LocationSampleSerializer(sample).data)

    def put(self, request):
        serializer = LocationUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        sample = update_user_location(
            request.user,
            data["latitude"],
            data["longitude"],
            role=data.get("role"),
        )
        return Response(LocationSampleSerializer(sample).data)
