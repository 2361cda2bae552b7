from locations.models import LocationSample


def update_user_location(user, lat, lon, role=None) -> LocationSample:
    """
    Overwrite the user's current location sample.

    Used by:
    - HTTP location endpoint
    - WebSocket ``location_update`` messages
    """
    role = role or user.role
    sample, _ = LocationSample.objects.update_or_create(
        user=user,
        defaults={
            "latitude": float(lat),
            "longitude": float(lon),
            "role": role,
        },
    )
    return sample
