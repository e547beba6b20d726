from roommate_matching.services import (
    CompatibilityCalculator, MatchCandidate, calculate_compatibility,
    rank_candidates,
)

from .conftest import EARLY_BIRD, NIGHT_OWL, answers_with


def test_identical_answers_score_100():
    assert calculate_compatibility(EARLY_BIRD, dict(EARLY_BIRD)) == 100


def test_opposite_answers_score_0():
    assert calculate_compatibility(EARLY_BIRD, NIGHT_OWL) == 0


def test_missing_or_empty_answer_sets_score_0():
    assert calculate_compatibility(None, EARLY_BIRD) == 0
    assert calculate_compatibility(EARLY_BIRD, None) == 0
    assert calculate_compatibility({}, EARLY_BIRD) == 0
    assert calculate_compatibility(None, None) == 0


def test_no_shared_questions_score_0():
    assert calculate_compatibility({'noise': 'quiet'}, {'guests': 'rarely'}) == 0


def test_only_shared_questions_are_compared():
    mine = {'sleepSchedule': 'early', 'noise': 'quiet', 'guests': 'rarely', 'sharing': 'separate'}
    theirs = {'sleepSchedule': 'early', 'noise': 'lively', 'guests': 'rarely', 'sharing': 'communal', 'cleanliness': 'messy'}

    # 2 of 4 shared questions agree
    assert calculate_compatibility(mine, theirs) == 50


def test_score_rounds_half_up():
    mine = {f'q{i}': 'a' for i in range(8)}
    theirs = dict(mine, **{f'q{i}': 'b' for i in range(1, 8)})

    # 1 of 8 is 12.5
    assert calculate_compatibility(mine, theirs) == 13
    # 2 of 3 is 66.67, 1 of 3 is 33.33
    assert calculate_compatibility({'a': 1, 'b': 1, 'c': 1}, {'a': 1, 'b': 1, 'c': 2}) == 67
    assert calculate_compatibility({'a': 1, 'b': 1, 'c': 1}, {'a': 1, 'b': 2, 'c': 2}) == 33


def test_blank_answers_are_not_compared():
    mine = {'sleepSchedule': 'early', 'noise': ''}
    theirs = {'sleepSchedule': 'early', 'noise': 'quiet'}

    assert calculate_compatibility(mine, theirs) == 100
    assert calculate_compatibility(theirs, mine) == 100


def test_score_is_symmetric():
    pairs = [
        (EARLY_BIRD, NIGHT_OWL),
        (EARLY_BIRD, answers_with(EARLY_BIRD, noise='moderate')),
        ({'noise': 'quiet', 'guests': 'rarely'}, {'noise': 'quiet', 'sharing': 'communal'}),
        ({'noise': 'quiet', 'guests': None}, {'noise': 'lively', 'guests': 'rarely'}),
    ]
    for first, second in pairs:
        assert calculate_compatibility(first, second) == calculate_compatibility(second, first)


def test_score_is_an_integer_percentage():
    score = calculate_compatibility(EARLY_BIRD, answers_with(EARLY_BIRD, noise='lively', guests='frequently'))
    assert isinstance(score, int)
    assert score == 60


def test_rank_candidates_is_stable_for_ties():
    candidates = [
        MatchCandidate(user_id=1, name='A', compatibility=30),
        MatchCandidate(user_id=2, name='B', compatibility=90),
        MatchCandidate(user_id=3, name='C', compatibility=90),
        MatchCandidate(user_id=4, name='D', compatibility=10),
    ]

    ranked = rank_candidates(candidates)

    assert [c.user_id for c in ranked] == [2, 3, 1, 4]
    # Input is left untouched
    assert [c.user_id for c in candidates] == [1, 2, 3, 4]


def test_match_candidate_as_dict():
    data = MatchCandidate(user_id=7, name='Sam', compatibility=85, gender='female').as_dict()
    assert data == {
        'user_id': 7,
        'name': 'Sam',
        'compatibility': 85,
        'gender': 'female',
    }


def test_breakdown_lists_questions_both_answered():
    calculator = CompatibilityCalculator()
    rows = calculator.breakdown(EARLY_BIRD, {'sleepSchedule': 'early', 'noise': 'lively'})

    assert [row['question_id'] for row in rows] == ['sleepSchedule', 'noise']
    assert rows[0]['match'] is True
    assert rows[1] == {
        'question_id': 'noise',
        'label': 'Noise Level',
        'your_answer': 'quiet',
        'their_answer': 'lively',
        'match': False,
    }


def test_agreement_factors():
    calculator = CompatibilityCalculator()
    others = [EARLY_BIRD, NIGHT_OWL, answers_with(NIGHT_OWL, noise='quiet')]

    factors = {row['question_id']: row['score'] for row in calculator.agreement_factors(EARLY_BIRD, others)}

    assert factors['noise'] == 67
    assert factors['sleepSchedule'] == 33
