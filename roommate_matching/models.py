from django.db import models
from django.contrib.auth import get_user_model
from django.utils import timezone

User = get_user_model()


class QuizResponse(models.Model):
    """A user's quiz answers, replaced wholesale on every retake"""

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name='quiz_response'
    )
    answers = models.JSONField(default=dict, help_text="Question id -> selected option value")

    completed_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
    times_taken = models.PositiveIntegerField(default=1)

    class Meta:
        db_table = 'roommate_matching_quizresponse'
        verbose_name = 'Quiz Response'
        verbose_name_plural = 'Quiz Responses'

    def __str__(self):
        return f"Quiz answers for {self.user}"

    @property
    def answer_count(self):
        return len(self.answers) if isinstance(self.answers, dict) else 0
