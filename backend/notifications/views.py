from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import Notification
from .serializers import NotificationSerializer

MAX_NOTIFICATIONS = 50


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def list_notifications(request):
    """Caller's inbox, newest first. ``?unread=true`` limits to unread ones."""
    notifications = Notification.objects.filter(user=request.user)
    if request.query_params.get('unread') in ('1', 'true'):
        notifications = notifications.filter(is_read=False)

    unread_count = Notification.objects.filter(user=request.user, is_read=False).count()
    return Response({
        'unread_count': unread_count,
        'notifications': NotificationSerializer(notifications[:MAX_NOTIFICATIONS], many=True).data,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def mark_notification_read(request, notification_id):
    notification = Notification.objects.filter(
        notification_id=notification_id, user=request.user
    ).first()
    if notification is None:
        return Response({'error': 'Notification not found'}, status=status.HTTP_404_NOT_FOUND)

    if not notification.is_read:
        notification.is_read = True
        notification.read_at = timezone.now()
        notification.save(update_fields=['is_read', 'read_at'])

    return Response(NotificationSerializer(notification).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def mark_all_read(request):
    updated = Notification.objects.filter(user=request.user, is_read=False).update(
        is_read=True, read_at=timezone.now()
    )
    return Response({'marked_read': updated})
