import logging

from django.conf import settings
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from accounts.authentication import token_required
from accounts.serializers import serialize_user
from messaging.services import MessagingService
from messaging.views import serialize_conversation
from roommate_matching.exceptions import QuizNotCompleted
from roommate_matching.services import MatchingService

logger = logging.getLogger(__name__)


@require_GET
def health(request):
    return JsonResponse({'status': 'ok'})


@require_GET
@token_required
def dashboard(request):
    """Everything the home screen shows, in one response"""
    user = request.user
    user_data = serialize_user(user)
    counts = request.user_session.live_counts()

    matches = []
    compatibility_factors = []
    show_quiz = not user.quiz_completed
    if user.quiz_completed:
        matching_service = MatchingService()
        try:
            matches = matching_service.find_matches(user.pk)
            compatibility_factors = matching_service.compatibility_factors(user)
        except QuizNotCompleted:
            # Flag set but the answers are gone; ask for the quiz again
            logger.warning(f"User {user.id} is marked quiz-complete without answers")
            show_quiz = True

    messaging_service = MessagingService()
    conversations = messaging_service.get_user_conversations(user, limit=5)

    return JsonResponse({
        'user': user_data,
        'quiz_completed': user.quiz_completed,
        'show_quiz': show_quiz,
        'mood': user_data.get('mood'),
        'stats': {
            'unread_messages': counts['unread_messages'],
            'unread_notifications': counts['unread_notifications'],
            'match_count': len(matches),
        },
        'top_matches': [match.as_dict() for match in matches[:settings.DASHBOARD_TOP_MATCHES]],
        'compatibility_factors': compatibility_factors,
        'recent_conversations': [
            serialize_conversation(conversation, user, messaging_service)
            for conversation in conversations
        ],
    })
