from django.db import models
from django.contrib.auth import get_user_model
from django.utils import timezone

User = get_user_model()


class Notification(models.Model):
    """Something a user should see, e.g. a message that arrived while away"""

    NOTIFICATION_TYPES = [
        ('new_message', 'New Message'),
        ('new_match', 'New Match'),
        ('system', 'System'),
    ]

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='notifications'
    )
    notification_type = models.CharField(max_length=30, choices=NOTIFICATION_TYPES, default='system')
    title = models.CharField(max_length=200)
    body = models.TextField(blank=True)
    data = models.JSONField(default=dict, blank=True)

    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'notifications_notification'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'read'], name='notif_user_read_idx'),
        ]

    def __str__(self):
        return f"{self.get_notification_type_display()} for {self.user}: {self.title}"

    def as_dict(self):
        return {
            'id': self.id,
            'type': self.notification_type,
            'title': self.title,
            'body': self.body,
            'data': self.data,
            'read': self.read,
            'created_at': self.created_at.isoformat(),
        }
