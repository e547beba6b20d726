import pytest

from accounts.models import AuthSession, CustomUser

from .conftest import PASSWORD

pytestmark = pytest.mark.django_db


def signup(client, **overrides):
    payload = {
        'name': 'Jordan Lee',
        'email': 'Jordan@Example.com',
        'password': PASSWORD,
        'university': 'UNSW',
    }
    payload.update(overrides)
    return client.post('/api/auth/signup', payload, content_type='application/json')


def test_signup_creates_account_profile_and_session(client):
    response = signup(client)

    assert response.status_code == 201
    body = response.json()
    assert body['token']
    assert body['user']['email'] == 'jordan@example.com'
    assert body['user']['name'] == 'Jordan Lee'
    assert body['user']['quiz_completed'] is False
    assert body['user']['university'] == 'UNSW'
    assert body['user']['mood']['emoji'] == '😊'
    assert body['user']['mood']['status'] == 'Just joined!'

    user = CustomUser.objects.get(email='jordan@example.com')
    assert user.check_password(PASSWORD)
    assert AuthSession.objects.filter(user=user).count() == 1


def test_signup_rejects_duplicate_email(client):
    signup(client)

    response = signup(client, email='JORDAN@example.com')

    assert response.status_code == 400
    assert 'email' in response.json()['errors']


def test_signup_rejects_weak_password(client):
    response = signup(client, password='123')

    assert response.status_code == 400
    assert 'password' in response.json()['errors']


def test_signup_requires_name(client):
    response = signup(client, name='   ')

    assert response.status_code == 400
    assert 'name' in response.json()['errors']


def test_signup_rejects_invalid_json(client):
    response = client.post('/api/auth/signup', 'not json', content_type='application/json')

    assert response.status_code == 400
    assert response.json() == {'error': 'Invalid JSON'}


def test_signin_returns_token(client, user):
    response = client.post(
        '/api/auth/signin',
        {'email': user.email.upper(), 'password': PASSWORD},
        content_type='application/json'
    )

    assert response.status_code == 200
    assert response.json()['user']['id'] == user.id
    assert response.json()['token']


def test_signin_with_wrong_password_is_unauthorized(client, user):
    response = client.post(
        '/api/auth/signin',
        {'email': user.email, 'password': 'wrong-password'},
        content_type='application/json'
    )

    assert response.status_code == 401
    assert response.json() == {'error': 'Invalid email or password'}


def test_me_requires_token(client):
    response = client.get('/api/auth/me')

    assert response.status_code == 401


def test_me_rejects_garbage_token(client):
    response = client.get('/api/auth/me', HTTP_AUTHORIZATION='Bearer not-a-jwt')

    assert response.status_code == 401
    assert response.json() == {'error': 'Invalid token'}


def test_me_returns_current_user(client, user, auth_headers):
    response = client.get('/api/auth/me', **auth_headers(user))

    assert response.status_code == 200
    assert response.json()['user']['email'] == user.email


def test_signout_ends_the_session(client, user, auth_headers):
    headers = auth_headers(user)

    response = client.post('/api/auth/signout', **headers)
    assert response.status_code == 200

    response = client.get('/api/auth/me', **headers)
    assert response.status_code == 401
    assert response.json() == {'error': 'Session has ended'}


def test_update_profile_is_partial(client, user, auth_headers):
    headers = auth_headers(user)
    client.patch(
        '/api/auth/profile',
        {'location': 'Newtown', 'max_budget': 350},
        content_type='application/json',
        **headers
    )

    response = client.patch(
        '/api/auth/profile',
        {'name': 'Alex M.', 'preferences': ['non_smoker', 'non_smoker', 'students']},
        content_type='application/json',
        **headers
    )

    assert response.status_code == 200
    data = response.json()['user']
    assert data['name'] == 'Alex M.'
    assert data['location'] == 'Newtown'
    assert data['max_budget'] == 350
    assert data['preferences'] == ['non_smoker', 'students']


def test_update_profile_rejects_unknown_preference(client, user, auth_headers):
    response = client.put(
        '/api/auth/profile',
        {'preferences': ['owns_a_boat']},
        content_type='application/json',
        **auth_headers(user)
    )

    assert response.status_code == 400
    assert 'preferences' in response.json()['errors']
