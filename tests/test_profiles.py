import pytest

from profiles.models import UserProfile
from profiles.moods import DEFAULT_MOOD, get_mood

pytestmark = pytest.mark.django_db


def test_get_mood_is_case_insensitive():
    assert get_mood('chill').emoji == '😎'
    assert get_mood(' FOCUSED ').color == '#818CF8'
    assert get_mood('grumpy') is None
    assert get_mood(None) is None


def test_new_profile_starts_with_default_mood(user):
    mood = user.profile.mood

    assert mood['name'] == DEFAULT_MOOD.name
    assert mood['emoji'] == '😊'
    assert mood['color'] == '#FFE66D'
    assert mood['status'] == 'Just joined!'


def test_get_mood_lists_catalogue(client, user, auth_headers):
    response = client.get('/api/profile/mood', **auth_headers(user))

    assert response.status_code == 200
    body = response.json()
    assert body['mood']['name'] == 'Happy'
    assert [mood['name'] for mood in body['moods']] == [
        'Happy', 'Tired', 'Chill', 'Curious', 'Excited', 'Focused'
    ]


def test_set_mood_with_status(client, user, auth_headers):
    response = client.put(
        '/api/profile/mood',
        {'mood': 'tired', 'status': 'Exams week'},
        content_type='application/json',
        **auth_headers(user)
    )

    assert response.status_code == 200
    mood = response.json()['mood']
    assert mood['name'] == 'Tired'
    assert mood['emoji'] == '😴'
    assert mood['status'] == 'Exams week'


def test_set_mood_without_status_keeps_the_old_one(client, user, auth_headers):
    response = client.put(
        '/api/profile/mood',
        {'mood': 'Excited'},
        content_type='application/json',
        **auth_headers(user)
    )

    assert response.json()['mood']['status'] == 'Just joined!'
    assert UserProfile.objects.get(user=user).mood_name == 'Excited'


def test_unknown_mood_is_rejected(client, user, auth_headers):
    response = client.put(
        '/api/profile/mood',
        {'mood': 'Grumpy'},
        content_type='application/json',
        **auth_headers(user)
    )

    assert response.status_code == 400
    assert response.json() == {'errors': {'mood': ['Unknown mood.']}}


def test_preferences_catalogue_is_public(client):
    response = client.get('/api/profile/preferences')

    assert response.status_code == 200
    preferences = response.json()['preferences']
    assert preferences[0] == {'id': 1, 'value': 'non_smoker', 'label': 'Non-smoker'}


def test_public_profile_hides_email(client, user, make_user, auth_headers):
    other = make_user('Riley Chen', university='UTS')

    response = client.get(f'/api/profile/{other.id}', **auth_headers(user))

    assert response.status_code == 200
    data = response.json()['user']
    assert data['name'] == 'Riley Chen'
    assert data['university'] == 'UTS'
    assert 'email' not in data


def test_public_profile_of_unknown_user_is_404(client, user, auth_headers):
    response = client.get('/api/profile/999999', **auth_headers(user))

    assert response.status_code == 404
