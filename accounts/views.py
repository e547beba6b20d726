import logging

from django.db import transaction
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST, require_http_methods

from core.utils import form_errors_response, invalid_json_response, json_body
from profiles.forms import ProfileUpdateForm
from profiles.models import UserProfile
from .authentication import token_required
from .forms import SignInForm, SignUpForm
from .serializers import serialize_user
from .sessions import UserSession

logger = logging.getLogger(__name__)


def _session_response(user_session, status=200):
    return JsonResponse({
        'token': user_session.token,
        'user': serialize_user(user_session.user),
    }, status=status)


@csrf_exempt
@require_POST
def signup(request):
    """Create an account with a starter profile and sign it in"""
    data = json_body(request)
    if data is None:
        return invalid_json_response()

    form = SignUpForm(data)
    if not form.is_valid():
        return form_errors_response(form)

    with transaction.atomic():
        user = form.save()
        UserProfile.objects.create(
            user=user,
            gender=form.cleaned_data.get('gender', ''),
            university=form.cleaned_data.get('university', '')
        )

    user_session = UserSession.open(user, request.headers.get('User-Agent', ''))
    logger.info(f"New account {user.id} signed up")

    return _session_response(user_session, status=201)


@csrf_exempt
@require_POST
def signin(request):
    data = json_body(request)
    if data is None:
        return invalid_json_response()

    form = SignInForm(data, request=request)
    if not form.is_valid():
        if form.has_error('__all__', code='invalid_login'):
            logger.info("Rejected sign-in attempt")
            return JsonResponse({'error': 'Invalid email or password'}, status=401)
        return form_errors_response(form)

    user_session = UserSession.open(form.get_user(), request.headers.get('User-Agent', ''))
    return _session_response(user_session)


@require_POST
@token_required
def signout(request):
    request.user_session.close()
    return JsonResponse({'success': True})


@require_GET
@token_required
def me(request):
    return JsonResponse({'user': serialize_user(request.user)})


@require_http_methods(['PUT', 'PATCH'])
@token_required
def update_profile(request):
    """Partial update of the user's name and profile fields"""
    data = json_body(request)
    if data is None:
        return invalid_json_response()

    user = request.user
    profile, _ = UserProfile.objects.get_or_create(user=user)

    form = ProfileUpdateForm(ProfileUpdateForm.merge_data(profile, data), instance=profile)
    if not form.is_valid():
        return form_errors_response(form)

    name = data.get('name')
    if name is not None:
        if not isinstance(name, str) or not name.strip():
            return JsonResponse({'errors': {'name': ['Please tell us your name.']}}, status=400)

    with transaction.atomic():
        form.save()
        if name is not None:
            user.name = name.strip()
            user.save(update_fields=['name'])

    user.refresh_from_db()
    return JsonResponse({'user': serialize_user(user)})
