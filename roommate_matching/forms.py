from django import forms
from django.core.exceptions import ValidationError

from profiles.models import PREFERENCE_CHOICES
from .quiz import QUESTIONS_BY_ID, option_values


class QuizSubmissionForm(forms.Form):
    """Validates a full answer set against the question catalogue"""

    answers = forms.JSONField()

    def clean_answers(self):
        answers = self.cleaned_data.get('answers')

        if not isinstance(answers, dict) or not answers:
            raise ValidationError("Answers must be an object of question id to option value.")

        errors = []
        for question_id, value in answers.items():
            if question_id not in QUESTIONS_BY_ID:
                errors.append(f"Unknown question: {question_id}")
            elif not isinstance(value, str) or value not in option_values(question_id):
                errors.append(f"Invalid option for {question_id}: {value}")

        if errors:
            raise ValidationError(errors)

        return {question_id: answers[question_id] for question_id in answers}


class RoommateFilterForm(forms.Form):
    location = forms.CharField(max_length=150, required=False)
    budget = forms.DecimalField(min_value=0, max_digits=8, decimal_places=2, required=False)
    move_in_date = forms.DateField(required=False)
    preferences = forms.CharField(required=False, help_text="Comma-separated preference tags")

    def clean_location(self):
        return self.cleaned_data.get('location', '').strip()

    def clean_preferences(self):
        raw = self.cleaned_data.get('preferences', '')
        tags = [tag.strip() for tag in raw.split(',') if tag.strip()]

        known = {value for value, _ in PREFERENCE_CHOICES}
        unknown = [tag for tag in tags if tag not in known]
        if unknown:
            raise ValidationError(f"Unknown preferences: {', '.join(unknown)}")

        return tags
