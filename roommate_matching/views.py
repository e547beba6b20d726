import logging

from django.contrib.auth import get_user_model
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_http_methods

from accounts.authentication import token_required
from core.utils import form_errors_response, invalid_json_response, json_body
from .exceptions import MatchingError, QuizNotCompleted, UserNotFound
from .forms import QuizSubmissionForm, RoommateFilterForm
from .quiz import QUIZ_QUESTIONS
from .services import MatchingService

User = get_user_model()
logger = logging.getLogger(__name__)


def matching_error_response(error: MatchingError):
    status = 404 if isinstance(error, UserNotFound) else 400
    return JsonResponse({'error': str(error)}, status=status)


def matches_response(matches, **extra):
    return JsonResponse({
        'matches': [match.as_dict() for match in matches],
        'total_count': len(matches),
        **extra,
    })


@require_http_methods(['GET', 'POST'])
@token_required
def quiz(request):
    """Quiz questions and current answers; POST submits a full answer set"""
    matching_service = MatchingService()

    if request.method == 'GET':
        response = getattr(request.user, 'quiz_response', None)
        return JsonResponse({
            'questions': QUIZ_QUESTIONS,
            'answers': response.answers if response is not None else {},
            'quiz_completed': request.user.quiz_completed,
        })

    data = json_body(request)
    if data is None:
        return invalid_json_response()

    form = QuizSubmissionForm(data)
    if not form.is_valid():
        return form_errors_response(form)

    try:
        matches = matching_service.submit_quiz(request.user, form.cleaned_data['answers'])
    except MatchingError as e:
        return matching_error_response(e)

    return matches_response(matches, answers=form.cleaned_data['answers'])


@require_GET
@token_required
def matches(request):
    """Ranked matches for the signed-in user"""
    try:
        ranked = MatchingService().find_matches(request.user.pk)
    except MatchingError as e:
        return matching_error_response(e)

    return matches_response(ranked)


@require_GET
@token_required
def find_roommates(request):
    """Ranked matches narrowed by location, budget, move-in date and preferences"""
    form = RoommateFilterForm(request.GET)
    if not form.is_valid():
        return form_errors_response(form)

    filters = {key: value for key, value in form.cleaned_data.items() if value not in (None, '', [])}

    try:
        ranked = MatchingService().find_matches(request.user.pk, filters=filters)
    except MatchingError as e:
        return matching_error_response(e)

    return matches_response(ranked, filters=filters)


@require_GET
@token_required
def compatibility_detail(request, user_id):
    """Detailed compatibility breakdown with another user"""
    other_user = get_object_or_404(
        User.objects.select_related('quiz_response'),
        id=user_id,
        is_active=True
    )

    if other_user == request.user:
        return JsonResponse({'error': 'Cannot calculate compatibility with yourself'}, status=400)

    try:
        result = MatchingService().compatibility_with(request.user, other_user)
    except QuizNotCompleted as e:
        return matching_error_response(e)

    return JsonResponse(result)
