from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db.models import Q

from .models import Ride
from .serializers import (
    RideSerializer,
    FindTaxisQuerySerializer,
    RideRequestCreateSerializer,
)

# Import from services layer
from services.matching import find_taxis
from services.proximity import ProximitySweep, evaluate_proximity
from services.ride_management import (
    accept_ride,
    decline_ride,
    cancel_ride,
    start_ride,
    end_ride,
    create_ride_request,
    RideLifecycleError,
    RideNotFoundError,
    RideNotAuthorizedError,
)

RIDE_ACTIONS = {
    'accept': accept_ride,
    'decline': decline_ride,
    'cancel': cancel_ride,
    'start': start_ride,
    'end': end_ride,
}


def _error_response(exc: RideLifecycleError):
    if isinstance(exc, RideNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, RideNotAuthorizedError):
        code = status.HTTP_403_FORBIDDEN
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(exc)}, status=code)


# ==================== Taxi Search ====================

@api_view(['GET'])
@permission_classes([IsAuthenticated])
def find_available_taxis(request):
    """Search taxis whose route serves the journey and who are near the pickup"""
    serializer = FindTaxisQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    result = find_taxis(
        (data['start_latitude'], data['start_longitude']),
        (data['end_latitude'], data['end_longitude']),
        max_origin_distance=data['max_origin_distance'],
        max_destination_distance=data['max_destination_distance'],
        max_taxi_distance=data['max_taxi_distance'],
        max_results=data['max_results'],
    )

    code = status.HTTP_200_OK if result.success else status.HTTP_500_INTERNAL_SERVER_ERROR
    return Response(result.to_dict(), status=code)


# ==================== Ride APIs ====================

@api_view(['POST'])
@permission_classes([IsAuthenticated])
def request_ride(request):
    """Request a ride from a driver picked out of a taxi search"""
    serializer = RideRequestCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    if data['driver_id'] == request.user.id:
        return Response(
            {'error': 'You cannot request a ride from yourself'},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        result = create_ride_request(
            request.user,
            data['driver_id'],
            (data['start_latitude'], data['start_longitude']),
            (data['end_latitude'], data['end_longitude']),
            start_address=data['start_address'],
            end_address=data['end_address'],
        )
    except RideLifecycleError as exc:
        return _error_response(exc)

    return Response(
        {
            'message': result.message,
            'is_duplicate': result.is_duplicate,
            'ride': RideSerializer(result.ride).data,
        },
        status=status.HTTP_200_OK if result.is_duplicate else status.HTTP_201_CREATED
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def ride_detail(request, ride_id):
    """Ride details, visible to its passenger and driver only"""
    ride = (
        Ride.objects.select_related('passenger', 'driver')
        .filter(ride_id=ride_id)
        .filter(Q(passenger=request.user) | Q(driver=request.user))
        .first()
    )
    if ride is None:
        return Response({'error': 'Ride not found'}, status=status.HTTP_404_NOT_FOUND)
    return Response(RideSerializer(ride).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def ride_action(request, ride_id, action):
    """Accept, decline, cancel, start or end a ride"""
    operation = RIDE_ACTIONS.get(action)
    if operation is None:
        return Response({'error': f'Unknown action: {action}'}, status=status.HTTP_404_NOT_FOUND)

    try:
        result = operation(ride_id, request.user.id)
    except RideLifecycleError as exc:
        return _error_response(exc)

    return Response({
        'message': result.message,
        'ride_id': result.ride_id,
        'ride': RideSerializer(result.ride).data,
    })


# ==================== Proximity ====================

@api_view(['POST'])
@permission_classes([IsAuthenticated])
def proximity_tick(request):
    """Run one proximity sweep over every monitored ride"""
    summary = ProximitySweep().run_once()
    return Response({
        'rides_checked': summary.rides_checked,
        'notifications_sent': summary.notifications_sent,
        'rides_skipped': summary.rides_skipped,
        'rides_failed': summary.rides_failed,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def ride_proximity(request, ride_id):
    """Evaluate proximity for one ride the caller takes part in"""
    ride = (
        Ride.objects.filter(ride_id=ride_id)
        .filter(Q(passenger=request.user) | Q(driver=request.user))
        .first()
    )
    if ride is None:
        return Response({'error': 'Ride not found'}, status=status.HTTP_404_NOT_FOUND)

    if ride.status not in Ride.MONITORED_STATUSES:
        return Response(
            {'error': 'Proximity is only tracked for accepted or in-progress rides'},
            status=status.HTTP_400_BAD_REQUEST
        )

    report = evaluate_proximity(ride)
    return Response({
        'ride_id': report.ride_id,
        'evaluated': report.evaluated,
        'skipped_reason': report.skipped_reason,
        'distance': report.distance,
        'band': report.band,
        'eta_minutes': report.eta_minutes,
        'passenger_at_stop': report.passenger_at_stop,
        'notifications_sent': report.notifications_sent,
    })
