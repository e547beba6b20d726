from django import forms
from django.core.exceptions import ValidationError

from .models import PREFERENCE_CHOICES, UserProfile
from .moods import get_mood


class ProfileUpdateForm(forms.ModelForm):
    preferences = forms.MultipleChoiceField(choices=PREFERENCE_CHOICES, required=False)

    class Meta:
        model = UserProfile
        fields = ['gender', 'university', 'bio', 'location', 'max_budget', 'move_in_date', 'preferences']

    @classmethod
    def merge_data(cls, profile, data):
        """Overlay submitted fields on current values so updates can be partial"""
        merged = {
            field: getattr(profile, field)
            for field in cls._meta.fields
        }
        merged['preferences'] = list(profile.preferences or [])
        merged.update({key: value for key, value in data.items() if key in merged})
        return merged

    def clean_preferences(self):
        # Keep order, drop duplicates
        return list(dict.fromkeys(self.cleaned_data.get('preferences') or []))


class MoodUpdateForm(forms.Form):
    mood = forms.CharField(max_length=20)
    status = forms.CharField(max_length=140, required=False)

    def clean_mood(self):
        mood = get_mood(self.cleaned_data['mood'])
        if mood is None:
            raise ValidationError("Unknown mood.")
        return mood
