from dataclasses import dataclass, asdict
from datetime import timedelta
from typing import Dict, List, Mapping, Optional
import logging
import math

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from .exceptions import QuizNotCompleted, UserNotFound
from .models import QuizResponse
from .quiz import QUIZ_QUESTIONS

User = get_user_model()
logger = logging.getLogger(__name__)


def calculate_compatibility(answers1: Optional[Mapping], answers2: Optional[Mapping]) -> int:
    """Percentage of shared quiz questions two users answered identically.

    Only questions answered on both sides are compared. No shared questions,
    or a missing answer set, scores 0. Agreement is exact-match only.
    """
    if not answers1 or not answers2:
        return 0

    matches = 0
    compared = 0

    for question, answer in answers1.items():
        other = answers2.get(question)
        if not answer or not other:
            continue
        compared += 1
        if answer == other:
            matches += 1

    if not compared:
        return 0

    # Half-up rounding
    return int(math.floor(100 * matches / compared + 0.5))


@dataclass
class MatchCandidate:
    user_id: int
    name: str
    compatibility: int
    gender: Optional[str] = None

    def as_dict(self) -> Dict:
        return asdict(self)


def rank_candidates(candidates: List[MatchCandidate]) -> List[MatchCandidate]:
    """Sort by compatibility, highest first; equal scores keep their order"""
    return sorted(candidates, key=lambda candidate: candidate.compatibility, reverse=True)


class CompatibilityCalculator:
    """Question-by-question comparison of two quiz answer sets"""

    def __init__(self, questions=None):
        self.questions = questions if questions is not None else QUIZ_QUESTIONS

    def calculate_compatibility(self, answers1: Optional[Mapping], answers2: Optional[Mapping]) -> int:
        return calculate_compatibility(answers1, answers2)

    def breakdown(self, answers1: Optional[Mapping], answers2: Optional[Mapping]) -> List[Dict]:
        """Per-question agreement for the catalogue questions both sides answered"""
        answers1 = answers1 or {}
        answers2 = answers2 or {}
        rows = []

        for question in self.questions:
            mine = answers1.get(question['id'])
            theirs = answers2.get(question['id'])
            if not mine or not theirs:
                continue
            rows.append({
                'question_id': question['id'],
                'label': question['label'],
                'your_answer': mine,
                'their_answer': theirs,
                'match': mine == theirs,
            })

        return rows

    def agreement_factors(self, answers: Mapping, others: List[Mapping]) -> List[Dict]:
        """How often others agree with each of the user's answers, as a percentage"""
        factors = []

        for question in self.questions:
            mine = answers.get(question['id'])
            if not mine:
                continue

            answered = [other.get(question['id']) for other in others if other.get(question['id'])]
            if not answered:
                continue

            agreeing = sum(1 for theirs in answered if theirs == mine)
            factors.append({
                'question_id': question['id'],
                'factor': question['label'],
                'score': int(math.floor(100 * agreeing / len(answered) + 0.5)),
            })

        return factors


def _answers_of(user) -> Optional[Dict]:
    """A user's stored answer set, or None when absent or malformed.

    An empty dict is a stored answer set; it scores 0 against everyone.
    """
    response = getattr(user, 'quiz_response', None)
    if response is None:
        return None
    answers = response.answers
    if not isinstance(answers, dict):
        return None
    return answers


class MatchingService:
    """Service for ranking roommate matches from quiz answers"""

    def __init__(self):
        self.calculator = CompatibilityCalculator()

    def get_user(self, user_id) -> User:
        try:
            return User.objects.select_related('quiz_response').get(pk=user_id)
        except (User.DoesNotExist, ValueError, TypeError):
            raise UserNotFound(user_id)

    def get_answers(self, user: User) -> Dict:
        answers = _answers_of(user)
        if answers is None:
            raise QuizNotCompleted(user.pk)
        return answers

    def submit_quiz(self, user: User, answers: Dict) -> List[MatchCandidate]:
        """Store a full answer set, replacing any earlier one, then rank matches"""
        now = timezone.now()

        with transaction.atomic():
            response, created = QuizResponse.objects.get_or_create(
                user=user,
                defaults={'answers': answers, 'completed_at': now}
            )
            if not created:
                response.answers = answers
                response.completed_at = now
                response.times_taken += 1
                response.save(update_fields=['answers', 'completed_at', 'times_taken', 'updated_at'])

            user.quiz_completed = True
            user.quiz_completed_at = now
            user.save(update_fields=['quiz_completed', 'quiz_completed_at'])

        logger.info(f"User {user.id} submitted quiz ({'first attempt' if created else 'retake'})")

        return self.find_matches(user.pk)

    def candidate_queryset(self, user: User, filters: Optional[Dict] = None):
        """Other active users who completed the quiz, in primary-key order"""
        candidates = User.objects.filter(
            quiz_completed=True,
            is_active=True
        ).exclude(
            pk=user.pk
        ).select_related(
            'quiz_response', 'profile'
        ).order_by('pk')

        filters = filters or {}

        location = filters.get('location')
        if location:
            candidates = candidates.filter(profile__location__icontains=location)

        budget = filters.get('budget')
        if budget is not None:
            candidates = candidates.filter(
                Q(profile__max_budget__lte=budget) | Q(profile__max_budget__isnull=True)
            )

        move_in_date = filters.get('move_in_date')
        if move_in_date:
            window = timedelta(days=settings.MATCH_MOVE_IN_WINDOW_DAYS)
            candidates = candidates.filter(
                Q(profile__move_in_date__range=(move_in_date - window, move_in_date + window)) |
                Q(profile__move_in_date__isnull=True)
            )

        return candidates

    def find_matches(self, user_id, filters: Optional[Dict] = None) -> List[MatchCandidate]:
        """Rank every other completed-quiz user by compatibility with this user.

        Raises UserNotFound / QuizNotCompleted before any scoring. Candidates
        without a usable answer set are skipped. Ties keep ascending user id
        order. Reads only.
        """
        user = self.get_user(user_id)
        answers = self.get_answers(user)

        wanted_preferences = (filters or {}).get('preferences') or []
        matches = []

        for candidate in self.candidate_queryset(user, filters):
            candidate_answers = _answers_of(candidate)
            if candidate_answers is None:
                logger.debug(f"Skipping user {candidate.pk}: no quiz answers")
                continue

            profile = getattr(candidate, 'profile', None)
            if wanted_preferences and (profile is None or not profile.has_preferences(wanted_preferences)):
                continue

            matches.append(MatchCandidate(
                user_id=candidate.pk,
                name=candidate.display_name,
                compatibility=self.calculator.calculate_compatibility(answers, candidate_answers),
                gender=(profile.gender or None) if profile is not None else None,
            ))

        return rank_candidates(matches)

    def compatibility_with(self, user: User, other_user: User) -> Dict:
        """Score and per-question breakdown between two users"""
        answers = self.get_answers(user)
        other_answers = _answers_of(other_user)

        score = self.calculator.calculate_compatibility(answers, other_answers)
        return {
            'user_id': other_user.pk,
            'name': other_user.display_name,
            'compatibility': score,
            'breakdown': self.calculator.breakdown(answers, other_answers),
        }

    def compatibility_factors(self, user: User) -> List[Dict]:
        """Agreement rate of this user's answers across all candidates"""
        answers = self.get_answers(user)
        others = [
            candidate_answers
            for candidate_answers in map(_answers_of, self.candidate_queryset(user))
            if candidate_answers is not None
        ]
        return self.calculator.agreement_factors(answers, others)
