from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.contrib.auth import get_user_model
from django.views.decorators.http import require_GET, require_http_methods

from accounts.authentication import token_required
from accounts.serializers import serialize_user
from core.utils import form_errors_response, invalid_json_response, json_body
from .forms import MoodUpdateForm
from .models import PREFERENCE_CHOICES, UserProfile
from .moods import mood_catalogue

User = get_user_model()


@require_http_methods(['GET', 'PUT'])
@token_required
def mood(request):
    """Current mood status, or set a new one"""
    profile, _ = UserProfile.objects.get_or_create(user=request.user)

    if request.method == 'PUT':
        data = json_body(request)
        if data is None:
            return invalid_json_response()

        form = MoodUpdateForm(data)
        if not form.is_valid():
            return form_errors_response(form)

        status = form.cleaned_data['status'] if 'status' in data else None
        profile.set_mood(form.cleaned_data['mood'], status=status)

    return JsonResponse({
        'mood': profile.mood,
        'moods': mood_catalogue(),
    })


@require_GET
def preferences(request):
    """Preference tags a roommate search can filter on"""
    return JsonResponse({
        'preferences': [
            {'id': index, 'value': value, 'label': label}
            for index, (value, label) in enumerate(PREFERENCE_CHOICES, start=1)
        ]
    })


@require_GET
@token_required
def profile_view(request, user_id):
    """Another user's public profile"""
    other_user = get_object_or_404(
        User.objects.select_related('profile'),
        id=user_id,
        is_active=True
    )
    data = serialize_user(other_user)
    data.pop('email', None)
    return JsonResponse({'user': data})
