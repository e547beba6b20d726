from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from accounts.authentication import token_required
from .services import NotificationService


@require_GET
@token_required
def notification_list(request):
    """Unread notifications, newest first, with the unread count"""
    notification_service = NotificationService()
    unread = list(notification_service.unread(request.user)[:50])

    return JsonResponse({
        'notifications': [notification.as_dict() for notification in unread],
        'unread_count': notification_service.unread_count(request.user),
    })


@require_POST
@token_required
def mark_all_read(request):
    updated = NotificationService().mark_all_read(request.user)
    return JsonResponse({'success': True, 'updated': updated})


@require_POST
@token_required
def mark_read(request, notification_id):
    if not NotificationService().mark_read(request.user, notification_id):
        return JsonResponse({'error': 'Notification not found'}, status=404)
    return JsonResponse({'success': True})
