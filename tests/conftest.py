import itertools

import pytest

from accounts.models import CustomUser
from accounts.sessions import UserSession
from profiles.models import UserProfile
from roommate_matching.services import MatchingService

PASSWORD = 'Roomie-test-pass-42'

EARLY_BIRD = {
    'sleepSchedule': 'early',
    'cleanliness': 'very_clean',
    'noise': 'quiet',
    'guests': 'rarely',
    'sharing': 'separate',
}

NIGHT_OWL = {
    'sleepSchedule': 'late',
    'cleanliness': 'messy',
    'noise': 'lively',
    'guests': 'frequently',
    'sharing': 'communal',
}


def answers_with(base, **changes):
    answers = dict(base)
    answers.update(changes)
    return answers


@pytest.fixture
def make_user(db):
    """Factory for users with a profile and, optionally, quiz answers"""
    counter = itertools.count(1)

    def _make_user(name='Test User', answers=None, email=None, **profile_fields):
        user = CustomUser.objects.create_user(
            email=email or f'user{next(counter)}@example.com',
            password=PASSWORD,
            name=name
        )
        UserProfile.objects.create(user=user, **profile_fields)
        if answers is not None:
            MatchingService().submit_quiz(user, answers)
            user.refresh_from_db()
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user(name='Alex Morgan')


@pytest.fixture
def auth_headers(db):
    """Bearer header for a freshly opened session"""
    def _auth_headers(user):
        user_session = UserSession.open(user, 'pytest')
        return {'HTTP_AUTHORIZATION': f'Bearer {user_session.token}'}

    return _auth_headers
