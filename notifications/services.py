from typing import Dict, Optional
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.contrib.auth import get_user_model

from .models import Notification

User = get_user_model()
logger = logging.getLogger(__name__)


def notification_group_name(user_id) -> str:
    return f'notifications_{user_id}'


class NotificationService:
    """Stores notifications and pushes them, with unread totals, to a user's group"""

    def __init__(self):
        try:
            self.channel_layer = get_channel_layer()
        except Exception:
            logger.warning("Channel layer unavailable, real-time notifications disabled")
            self.channel_layer = None

    def notify(self, user: User, notification_type: str, title: str,
               body: str = '', data: Optional[Dict] = None) -> Notification:
        notification = Notification.objects.create(
            user=user,
            notification_type=notification_type,
            title=title,
            body=body,
            data=data or {}
        )

        self.send(user, {
            'type': 'notification',
            'notification': notification.as_dict(),
            'unread_notifications': self.unread_count(user),
        })
        return notification

    def unread(self, user: User):
        return Notification.objects.filter(user=user, read=False)

    def unread_count(self, user: User) -> int:
        return self.unread(user).count()

    def mark_all_read(self, user: User) -> int:
        """Clear every unread notification in one update; returns how many"""
        updated = self.unread(user).update(read=True)
        if updated:
            self.push_counts(user)
        return updated

    def mark_read(self, user: User, notification_id) -> bool:
        """Mark one of the user's notifications read; False if it isn't theirs"""
        try:
            notifications = Notification.objects.filter(user=user, id=notification_id)
            if not notifications.exists():
                return False
        except (ValueError, TypeError):
            return False

        if notifications.filter(read=False).update(read=True):
            self.push_counts(user)
        return True

    def counts(self, user: User) -> Dict[str, int]:
        from messaging.services import MessagingService

        return {
            'unread_notifications': self.unread_count(user),
            'unread_messages': MessagingService().get_unread_count(user),
        }

    def push_counts(self, user: User, unread_messages: Optional[int] = None):
        """Push live unread totals; computes message totals unless given"""
        if unread_messages is None:
            counts = self.counts(user)
        else:
            counts = {
                'unread_notifications': self.unread_count(user),
                'unread_messages': unread_messages,
            }

        self.send(user, {'type': 'unread_counts', **counts})

    def send(self, user: User, event: Dict):
        """Fan an event in to every open socket of one user"""
        if not self.channel_layer:
            return

        async_to_sync(self.channel_layer.group_send)(
            notification_group_name(user.id),
            event
        )
