from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model
from roommate_matching.exceptions import MatchingError
from roommate_matching.services import MatchingService

User = get_user_model()


class Command(BaseCommand):
    help = 'Print ranked roommate matches for one user, or the top match of every user'

    def add_arguments(self, parser):
        parser.add_argument(
            '--user-id',
            type=int,
            help='Rank matches for a specific user ID',
        )
        parser.add_argument(
            '--all-users',
            action='store_true',
            help='Show the best match for every user who completed the quiz',
        )
        parser.add_argument(
            '--limit',
            type=int,
            default=10,
            help='Limit number of matches shown per user',
        )

    def handle(self, *args, **options):
        matching_service = MatchingService()

        if options['user_id']:
            try:
                matches = matching_service.find_matches(options['user_id'])
            except MatchingError as e:
                raise CommandError(str(e))

            user = User.objects.get(pk=options['user_id'])
            self.stdout.write(f"Matches for {user.display_name} ({user.email}):")

            for match in matches[:options['limit']]:
                self.stdout.write(
                    f"  {match.name}: {match.compatibility}%"
                )

            if not matches:
                self.stdout.write("  No other users have completed the quiz yet")

        elif options['all_users']:
            users = User.objects.filter(quiz_completed=True, is_active=True).order_by('pk')
            self.stdout.write(f"Processing {users.count()} users...")

            for user in users:
                try:
                    matches = matching_service.find_matches(user.pk)
                except MatchingError as e:
                    self.stdout.write(f"  Error for {user.display_name}: {e}")
                    continue

                if matches:
                    best = matches[0]
                    self.stdout.write(
                        f"  {user.display_name} ↔ {best.name}: "
                        f"{best.compatibility}%"
                    )
                else:
                    self.stdout.write(f"  {user.display_name}: no matches")
        else:
            raise CommandError('Pass --user-id or --all-users')

        self.stdout.write(self.style.SUCCESS('Done!'))
