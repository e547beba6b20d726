from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='UserProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('gender', models.CharField(blank=True, choices=[('male', 'Male'), ('female', 'Female'), ('non_binary', 'Non-binary'), ('prefer_not_say', 'Prefer not to say')], max_length=20)),
                ('university', models.CharField(blank=True, max_length=150)),
                ('bio', models.TextField(blank=True, help_text='Tell others about yourself', max_length=1000)),
                ('location', models.CharField(blank=True, help_text='City, neighborhood, or zip code', max_length=150)),
                ('max_budget', models.DecimalField(blank=True, decimal_places=2, help_text='Maximum monthly budget', max_digits=8, null=True, validators=[django.core.validators.MinValueValidator(0)])),
                ('move_in_date', models.DateField(blank=True, null=True)),
                ('preferences', models.JSONField(blank=True, default=list, help_text='List of preference tags')),
                ('mood_name', models.CharField(default='Happy', max_length=20)),
                ('mood_emoji', models.CharField(default='😊', max_length=8)),
                ('mood_color', models.CharField(default='#FFE66D', max_length=7)),
                ('mood_status', models.CharField(blank=True, default='Just joined!', max_length=140)),
                ('mood_updated_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'User Profile',
                'verbose_name_plural': 'User Profiles',
                'db_table': 'profiles_userprofile',
            },
        ),
    ]
