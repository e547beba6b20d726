from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from django.db import transaction
from profiles.models import PREFERENCE_CHOICES, UserProfile
from profiles.moods import MOODS
from roommate_matching.quiz import QUIZ_QUESTIONS, option_values
from roommate_matching.services import MatchingService
from datetime import date, timedelta
import random

User = get_user_model()


class Command(BaseCommand):
    help = 'Create test users with sample profiles and quiz answers for development'

    def add_arguments(self, parser):
        parser.add_argument(
            '--count',
            type=int,
            default=5,
            help='Number of test users to create (default: 5)',
        )
        parser.add_argument(
            '--seed',
            type=int,
            help='Random seed, for repeatable sample data',
        )

    def handle(self, *args, **options):
        count = options['count']
        rng = random.Random(options.get('seed'))

        sample_data = {
            'names': ['Alex', 'Sam', 'Jordan', 'Taylor', 'Casey', 'Riley', 'Morgan', 'Jamie'],
            'universities': ['University of Sydney', 'UNSW', 'UTS', 'Macquarie University'],
            'locations': ['Newtown', 'Surry Hills', 'Bondi', 'Kensington', 'Chatswood'],
            'bios': [
                "I'm a friendly and clean person looking for like-minded roommates. I enjoy cooking and would love to share meals together!",
                "Student seeking affordable accommodation with other students. Love music and outdoor activities.",
                "Easy-going person who values cleanliness and good communication. Happy to help with household chores.",
            ]
        }
        preference_values = [value for value, _ in PREFERENCE_CHOICES]
        matching_service = MatchingService()

        created_users = []

        for i in range(count):
            email = f'testuser{i+1}@example.com'

            if User.objects.filter(email=email).exists():
                self.stdout.write(
                    self.style.WARNING(f'User {email} already exists, skipping')
                )
                continue

            with transaction.atomic():
                user = User.objects.create_user(
                    email=email,
                    password='testpass123',
                    name=f"{rng.choice(sample_data['names'])} {i+1}",
                )

                profile = UserProfile.objects.create(
                    user=user,
                    gender=rng.choice(['male', 'female', 'non_binary']),
                    university=rng.choice(sample_data['universities']),
                    bio=rng.choice(sample_data['bios']),
                    location=rng.choice(sample_data['locations']),
                    max_budget=rng.randint(200, 500),
                    move_in_date=date.today() + timedelta(days=rng.randint(7, 60)),
                    preferences=rng.sample(preference_values, rng.randint(1, 3)),
                )
                profile.set_mood(rng.choice(MOODS), status='Looking for a place')

                answers = {
                    question['id']: rng.choice(sorted(option_values(question['id'])))
                    for question in QUIZ_QUESTIONS
                }
                matching_service.submit_quiz(user, answers)

            created_users.append(user.email)
            self.stdout.write(
                self.style.SUCCESS(f'Created user: {user.email} ({user.name}) with quiz answers')
            )

        if created_users:
            self.stdout.write(
                self.style.SUCCESS(f'\nSuccessfully created {len(created_users)} test users')
            )
            self.stdout.write('Login credentials: password is "testpass123" for all test users')
        else:
            self.stdout.write(
                self.style.WARNING('No new users were created')
            )
