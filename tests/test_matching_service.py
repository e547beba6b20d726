from datetime import date, timedelta

import pytest
from django.db import DatabaseError

from accounts.models import CustomUser
from roommate_matching.exceptions import MatchingError, QuizNotCompleted, UserNotFound
from roommate_matching.models import QuizResponse
from roommate_matching.services import MatchingService

from .conftest import EARLY_BIRD, NIGHT_OWL, answers_with


@pytest.fixture
def service():
    return MatchingService()


def test_ranks_by_score_with_ties_in_user_id_order(make_user, service):
    me = make_user('Me', answers=EARLY_BIRD)
    twin = make_user('Twin', answers=EARLY_BIRD)
    close = make_user('Close', answers=answers_with(EARLY_BIRD, noise='lively', guests='frequently'))
    other_twin = make_user('Other Twin', answers=EARLY_BIRD)
    opposite = make_user('Opposite', answers=NIGHT_OWL)

    matches = service.find_matches(me.pk)

    assert [(m.user_id, m.compatibility) for m in matches] == [
        (twin.pk, 100),
        (other_twin.pk, 100),
        (close.pk, 60),
        (opposite.pk, 0),
    ]


def test_user_is_never_matched_with_themselves(make_user, service):
    me = make_user('Me', answers=EARLY_BIRD)

    assert service.find_matches(me.pk) == []


def test_unknown_user_raises(db, service):
    with pytest.raises(UserNotFound) as excinfo:
        service.find_matches(999999)
    assert str(excinfo.value) == 'User not found'


def test_garbage_user_id_raises_user_not_found(db, service):
    with pytest.raises(UserNotFound):
        service.find_matches('not-a-number')


def test_user_without_answers_raises(make_user, service):
    me = make_user('Me')
    make_user('Other', answers=EARLY_BIRD)

    with pytest.raises(QuizNotCompleted) as excinfo:
        service.find_matches(me.pk)
    assert str(excinfo.value) == 'Quiz answers not found'


def test_candidates_missing_answers_are_skipped_and_empty_sets_score_0(make_user, service):
    me = make_user('Me', answers=EARLY_BIRD)
    good = make_user('Good', answers=EARLY_BIRD)

    # Flagged complete but the answers row is missing
    no_row = make_user('No Row')
    CustomUser.objects.filter(pk=no_row.pk).update(quiz_completed=True)

    # Flagged complete with an empty answer set
    empty = make_user('Empty')
    QuizResponse.objects.create(user=empty, answers={})
    CustomUser.objects.filter(pk=empty.pk).update(quiz_completed=True)

    # Malformed answers
    malformed = make_user('Malformed')
    QuizResponse.objects.create(user=malformed, answers=['early'])
    CustomUser.objects.filter(pk=malformed.pk).update(quiz_completed=True)

    matches = service.find_matches(me.pk)

    assert [(m.user_id, m.compatibility) for m in matches] == [(good.pk, 100), (empty.pk, 0)]


def test_user_with_empty_answer_set_scores_0_against_everyone(make_user, service):
    me = make_user('Me')
    QuizResponse.objects.create(user=me, answers={})
    first = make_user('First', answers=EARLY_BIRD)
    second = make_user('Second', answers=NIGHT_OWL)

    matches = service.find_matches(me.pk)

    assert [(m.user_id, m.compatibility) for m in matches] == [(first.pk, 0), (second.pk, 0)]


def test_storage_errors_propagate_without_retry(make_user, service, monkeypatch):
    me = make_user('Me', answers=EARLY_BIRD)
    make_user('Other', answers=EARLY_BIRD)
    calls = []

    def failing_queryset(user, filters=None):
        calls.append(user.pk)
        raise DatabaseError('database is locked')

    monkeypatch.setattr(service, 'candidate_queryset', failing_queryset)

    with pytest.raises(DatabaseError) as excinfo:
        service.find_matches(me.pk)

    assert not isinstance(excinfo.value, MatchingError)
    assert str(excinfo.value) == 'database is locked'
    assert calls == [me.pk]


def test_users_who_have_not_finished_the_quiz_are_not_candidates(make_user, service):
    me = make_user('Me', answers=EARLY_BIRD)
    make_user('Not Yet')
    inactive = make_user('Inactive', answers=EARLY_BIRD)
    inactive.is_active = False
    inactive.save(update_fields=['is_active'])

    assert service.find_matches(me.pk) == []


def test_find_matches_only_reads(make_user, service):
    me = make_user('Me', answers=EARLY_BIRD)
    make_user('Other', answers=NIGHT_OWL)
    before = list(QuizResponse.objects.order_by('pk').values('answers', 'updated_at', 'times_taken'))

    service.find_matches(me.pk)
    service.find_matches(me.pk)

    after = list(QuizResponse.objects.order_by('pk').values('answers', 'updated_at', 'times_taken'))
    assert before == after


def test_submit_quiz_replaces_answers_and_counts_retakes(make_user, service):
    me = make_user('Me', answers=EARLY_BIRD)

    service.submit_quiz(me, NIGHT_OWL)

    response = QuizResponse.objects.get(user=me)
    assert response.answers == NIGHT_OWL
    assert response.times_taken == 2
    me.refresh_from_db()
    assert me.quiz_completed is True
    assert me.quiz_completed_at is not None


def test_submit_quiz_returns_ranked_matches(make_user, service):
    other = make_user('Other', answers=EARLY_BIRD)
    me = make_user('Me')

    matches = service.submit_quiz(me, EARLY_BIRD)

    assert [(m.user_id, m.compatibility) for m in matches] == [(other.pk, 100)]


def test_location_filter_is_case_insensitive_substring(make_user, service):
    me = make_user('Me', answers=EARLY_BIRD)
    newtown = make_user('Newtown', answers=EARLY_BIRD, location='Newtown, Sydney')
    make_user('Bondi', answers=EARLY_BIRD, location='Bondi')

    matches = service.find_matches(me.pk, filters={'location': 'newtown'})

    assert [m.user_id for m in matches] == [newtown.pk]


def test_budget_filter_keeps_cheaper_and_unknown_budgets(make_user, service):
    me = make_user('Me', answers=EARLY_BIRD)
    cheap = make_user('Cheap', answers=EARLY_BIRD, max_budget=300)
    make_user('Pricey', answers=EARLY_BIRD, max_budget=900)
    unknown = make_user('Unknown', answers=EARLY_BIRD)

    matches = service.find_matches(me.pk, filters={'budget': 500})

    assert [m.user_id for m in matches] == [cheap.pk, unknown.pk]


def test_move_in_filter_uses_a_thirty_day_window(make_user, service):
    target = date(2026, 3, 1)
    me = make_user('Me', answers=EARLY_BIRD)
    soon = make_user('Soon', answers=EARLY_BIRD, move_in_date=target + timedelta(days=30))
    make_user('Late', answers=EARLY_BIRD, move_in_date=target + timedelta(days=31))
    flexible = make_user('Flexible', answers=EARLY_BIRD)

    matches = service.find_matches(me.pk, filters={'move_in_date': target})

    assert [m.user_id for m in matches] == [soon.pk, flexible.pk]


def test_preference_filter_requires_every_tag(make_user, service):
    me = make_user('Me', answers=EARLY_BIRD)
    both = make_user('Both', answers=EARLY_BIRD, preferences=['non_smoker', 'pet_friendly', 'students'])
    make_user('One', answers=EARLY_BIRD, preferences=['non_smoker'])

    matches = service.find_matches(me.pk, filters={'preferences': ['pet_friendly', 'non_smoker']})

    assert [m.user_id for m in matches] == [both.pk]


def test_compatibility_with_includes_breakdown(make_user, service):
    me = make_user('Me', answers=EARLY_BIRD)
    other = make_user('Other', answers=answers_with(EARLY_BIRD, noise='lively'))

    result = service.compatibility_with(me, other)

    assert result['compatibility'] == 80
    assert 'compatibility_level' not in result
    assert len(result['breakdown']) == 5
    assert [row['question_id'] for row in result['breakdown'] if not row['match']] == ['noise']
