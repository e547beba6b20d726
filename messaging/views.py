import logging

from django.contrib.auth import get_user_model
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from accounts.authentication import token_required
from core.utils import invalid_json_response, json_body
from .models import Conversation
from .services import MessagingService, serialize_message

User = get_user_model()
logger = logging.getLogger(__name__)


def serialize_participant(user):
    if user is None:
        return None

    profile = getattr(user, 'profile', None)
    return {
        'id': user.id,
        'name': user.display_name,
        'mood': profile.mood if profile is not None else None,
    }


def serialize_conversation(conversation, user, messaging_service):
    last_message = conversation.messages.filter(is_deleted=False).order_by('-created_at').first()
    return {
        'id': str(conversation.id),
        'conversation_type': conversation.conversation_type,
        'other_user': serialize_participant(messaging_service.get_other_participant(conversation, user)),
        'last_message': serialize_message(last_message) if last_message else None,
        'last_message_at': conversation.last_message_at.isoformat() if conversation.last_message_at else None,
        'unread_count': getattr(conversation, 'unread_count', 0),
    }


def get_user_conversation(conversation_id, user):
    """The conversation if the user takes part in it, else None"""
    conversation = Conversation.objects.filter(id=conversation_id, is_active=True).first()
    if conversation is None or not conversation.has_participant(user):
        return None
    return conversation


def conversation_not_found():
    return JsonResponse({'error': 'Conversation not found'}, status=404)


@require_GET
@token_required
def conversations_list(request):
    """List user's conversations"""
    messaging_service = MessagingService()
    conversations = messaging_service.get_user_conversations(request.user)

    return JsonResponse({
        'conversations': [
            serialize_conversation(conversation, request.user, messaging_service)
            for conversation in conversations
        ],
        'unread_count': sum(conversation.unread_count for conversation in conversations),
    })


@require_GET
@token_required
def unread_counts(request):
    messaging_service = MessagingService()
    counts = messaging_service.unread_counts(request.user)
    return JsonResponse({
        'conversations': counts,
        'total': sum(counts.values()),
    })


@require_POST
@token_required
def start_conversation(request):
    """Open (or reuse) a direct chat with another user"""
    data = json_body(request)
    if data is None:
        return invalid_json_response()

    try:
        other_user = User.objects.get(pk=data.get('user_id'), is_active=True)
    except (User.DoesNotExist, ValueError, TypeError):
        return JsonResponse({'error': 'User not found'}, status=404)

    if other_user == request.user:
        return JsonResponse({'error': 'You cannot start a chat with yourself'}, status=400)

    messaging_service = MessagingService()
    conversation, created = messaging_service.get_or_create_direct_conversation(request.user, other_user)

    return JsonResponse({
        'conversation_id': str(conversation.id),
        'created': created,
    }, status=201 if created else 200)


@require_GET
@token_required
def conversation_detail(request, conversation_id):
    """Chat info, the other user and recent messages; marks the chat read"""
    conversation = get_user_conversation(conversation_id, request.user)
    if conversation is None:
        return conversation_not_found()

    messaging_service = MessagingService()

    try:
        limit = min(max(int(request.GET.get('limit', 50)), 1), 200)
    except ValueError:
        limit = 50

    messages = messaging_service.get_conversation_messages(conversation, limit=limit)
    messaging_service.mark_conversation_read(conversation, request.user)

    return JsonResponse({
        'conversation': {
            'id': str(conversation.id),
            'conversation_type': conversation.conversation_type,
            'created_at': conversation.created_at.isoformat(),
        },
        'other_user': serialize_participant(messaging_service.get_other_participant(conversation, request.user)),
        'messages': [serialize_message(message) for message in messages],
        'websocket_url': f'ws/chat/{conversation.id}/',
    })


@require_POST
@token_required
def send_message(request, conversation_id):
    conversation = Conversation.objects.filter(id=conversation_id, is_active=True).first()
    if conversation is None:
        return conversation_not_found()

    if not conversation.has_participant(request.user):
        return JsonResponse({'error': 'Not authorized'}, status=403)

    data = json_body(request)
    if data is None:
        return invalid_json_response()

    content = data.get('content')
    if not isinstance(content, str) or not content.strip():
        return JsonResponse({'error': 'Message content cannot be empty'}, status=400)

    message = MessagingService().send_message(
        conversation=conversation,
        sender=request.user,
        content=content
    )
    if message is None:
        return JsonResponse({'error': 'Failed to send message'}, status=400)

    return JsonResponse({'success': True, 'message': serialize_message(message)}, status=201)
