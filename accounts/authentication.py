from functools import wraps

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt

from .sessions import UserSession
from .tokens import TokenError


def get_bearer_token(request):
    header = request.headers.get('Authorization', '')
    if header.startswith('Bearer '):
        return header[len('Bearer '):].strip()
    return ''


def token_required(view_func):
    """Authenticate a JSON API view with a bearer token.

    Sets ``request.user`` and ``request.user_session``. Bearer tokens are
    not sent automatically by browsers, so these views skip CSRF checks.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        token = get_bearer_token(request)
        if not token:
            return JsonResponse({'error': 'Authentication required'}, status=401)

        try:
            user_session = UserSession.from_token(token)
        except TokenError as e:
            return JsonResponse({'error': str(e)}, status=401)

        request.user = user_session.user
        request.user_session = user_session
        return view_func(request, *args, **kwargs)

    return csrf_exempt(wrapper)
