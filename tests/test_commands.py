from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from accounts.models import CustomUser
from roommate_matching.models import QuizResponse

from .conftest import EARLY_BIRD, NIGHT_OWL

pytestmark = pytest.mark.django_db


def run(*args):
    out = StringIO()
    call_command(*args, stdout=out)
    return out.getvalue()


def test_rank_matches_for_one_user(make_user):
    me = make_user('Me', answers=EARLY_BIRD)
    make_user('Twin', answers=EARLY_BIRD)
    make_user('Opposite', answers=NIGHT_OWL)

    output = run('rank_matches', '--user-id', str(me.id))

    assert 'Twin: 100%' in output
    assert output.index('Twin') < output.index('Opposite')
    assert 'Done!' in output


def test_rank_matches_respects_limit(make_user):
    me = make_user('Me', answers=EARLY_BIRD)
    make_user('Twin', answers=EARLY_BIRD)
    make_user('Opposite', answers=NIGHT_OWL)

    output = run('rank_matches', '--user-id', str(me.id), '--limit', '1')

    assert 'Twin' in output
    assert 'Opposite' not in output


def test_rank_matches_for_all_users(make_user):
    make_user('Me', answers=EARLY_BIRD)
    make_user('Twin', answers=EARLY_BIRD)

    output = run('rank_matches', '--all-users')

    assert 'Processing 2 users' in output
    assert 'Me ↔ Twin: 100%' in output


def test_rank_matches_errors(make_user):
    me = make_user('Me')

    with pytest.raises(CommandError, match='Quiz answers not found'):
        run('rank_matches', '--user-id', str(me.id))
    with pytest.raises(CommandError, match='User not found'):
        run('rank_matches', '--user-id', '999999')
    with pytest.raises(CommandError):
        run('rank_matches')


def test_create_test_users(db):
    output = run('create_test_users', '--count', '3', '--seed', '7')

    assert CustomUser.objects.count() == 3
    assert QuizResponse.objects.count() == 3
    assert all(user.quiz_completed for user in CustomUser.objects.all())
    assert 'Successfully created 3 test users' in output

    output = run('create_test_users', '--count', '1')
    assert 'already exists' in output
    assert CustomUser.objects.count() == 3
