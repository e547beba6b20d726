from django.db import models
from django.contrib.auth import get_user_model
from django.core.validators import MinValueValidator
from django.utils import timezone

from .moods import DEFAULT_MOOD, DEFAULT_MOOD_STATUS

User = get_user_model()

GENDER_CHOICES = [
    ('male', 'Male'),
    ('female', 'Female'),
    ('non_binary', 'Non-binary'),
    ('prefer_not_say', 'Prefer not to say'),
]

PREFERENCE_CHOICES = [
    ('non_smoker', 'Non-smoker'),
    ('pet_friendly', 'Pet friendly'),
    ('quiet_hours', 'Quiet hours'),
    ('early_riser', 'Early riser'),
    ('night_owl', 'Night owl'),
    ('vegetarian_kitchen', 'Vegetarian kitchen'),
    ('lgbtq_friendly', 'LGBTQ+ friendly'),
    ('students', 'Students'),
    ('working_professionals', 'Working professionals'),
    ('shared_meals', 'Shared meals'),
]


class UserProfile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')

    # Personal Information
    gender = models.CharField(max_length=20, choices=GENDER_CHOICES, blank=True)
    university = models.CharField(max_length=150, blank=True)
    bio = models.TextField(max_length=1000, blank=True, help_text="Tell others about yourself")

    # Housing search
    location = models.CharField(max_length=150, blank=True, help_text="City, neighborhood, or zip code")
    max_budget = models.DecimalField(
        max_digits=8, decimal_places=2,
        null=True, blank=True,
        validators=[MinValueValidator(0)],
        help_text="Maximum monthly budget"
    )
    move_in_date = models.DateField(null=True, blank=True)
    preferences = models.JSONField(default=list, blank=True, help_text="List of preference tags")

    # Mood status
    mood_name = models.CharField(max_length=20, default=DEFAULT_MOOD.name)
    mood_emoji = models.CharField(max_length=8, default=DEFAULT_MOOD.emoji)
    mood_color = models.CharField(max_length=7, default=DEFAULT_MOOD.color)
    mood_status = models.CharField(max_length=140, blank=True, default=DEFAULT_MOOD_STATUS)
    mood_updated_at = models.DateTimeField(default=timezone.now)

    # Metadata
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'profiles_userprofile'
        verbose_name = 'User Profile'
        verbose_name_plural = 'User Profiles'

    def __str__(self):
        return f"{self.user.get_full_name()}'s Profile"

    @property
    def mood(self):
        return {
            'name': self.mood_name,
            'emoji': self.mood_emoji,
            'color': self.mood_color,
            'status': self.mood_status,
            'last_updated': self.mood_updated_at.isoformat() if self.mood_updated_at else None,
        }

    def set_mood(self, mood, status=None):
        """Switch to a catalogue mood, optionally with a status line"""
        self.mood_name = mood.name
        self.mood_emoji = mood.emoji
        self.mood_color = mood.color
        if status is not None:
            self.mood_status = status
        self.mood_updated_at = timezone.now()
        self.save(update_fields=[
            'mood_name', 'mood_emoji', 'mood_color', 'mood_status', 'mood_updated_at', 'updated_at'
        ])

    def has_preferences(self, wanted):
        return set(wanted).issubset(set(self.preferences or []))
