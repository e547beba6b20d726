from typing import Dict, List, Optional
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.contrib.auth import get_user_model
from django.db.models import Count, F, Q

from notifications.services import NotificationService
from .models import Conversation, Message

User = get_user_model()
logger = logging.getLogger(__name__)


def chat_group_name(conversation_id) -> str:
    return f'chat_{conversation_id}'


def serialize_message(message: Message) -> Dict:
    sender = message.sender
    return {
        'id': str(message.id),
        'conversation_id': str(message.conversation_id),
        'content': message.content,
        'sender': {
            'id': sender.id if sender else None,
            'name': message.sender_name or (sender.display_name if sender else 'System'),
        },
        'message_type': message.message_type,
        'created_at': message.created_at.isoformat(),
    }


class MessagingService:
    """Service for managing messaging functionality"""

    def __init__(self):
        try:
            self.channel_layer = get_channel_layer()
        except Exception:
            # Channel layer misconfigured, disable real-time features
            logger.warning("Channel layer unavailable, real-time messaging disabled")
            self.channel_layer = None
        self.notification_service = NotificationService()

    def get_user_conversations(self, user: User, limit: int = 20) -> List[Conversation]:
        """A user's active conversations, latest first, each with ``unread_count``"""
        conversations = list(Conversation.objects.filter(
            conversationparticipant__user=user,
            conversationparticipant__is_active=True,
            is_active=True
        ).prefetch_related('participants')[:limit])

        counts = self.unread_counts(user)
        for conversation in conversations:
            conversation.unread_count = counts.get(str(conversation.id), 0)

        return conversations

    def get_or_create_direct_conversation(self, user1: User, user2: User) -> tuple[Conversation, bool]:
        """Get or create a direct conversation between two users"""
        conversation, created = Conversation.get_or_create_direct_conversation(user1, user2)
        if created:
            logger.info(f"Started conversation {conversation.id} between users {user1.id} and {user2.id}")
        return conversation, created

    def send_message(self, conversation: Conversation, sender: User,
                     content: str, message_type: str = 'text') -> Optional[Message]:
        """Send a message in a conversation.

        Returns None, storing nothing, when the text is blank or the sender
        is not an active participant. Otherwise the message is broadcast to
        the chat group and every other participant gets a notification and
        fresh unread totals.
        """
        content = (content or '').strip()
        if not content:
            return None

        if not conversation.has_participant(sender):
            logger.warning(f"User {sender.id} tried to post in conversation {conversation.id}")
            return None

        message = Message.objects.create(
            conversation=conversation,
            sender=sender,
            sender_name=sender.display_name,
            content=content,
            message_type=message_type
        )

        # The sender has seen everything up to their own message
        conversation.mark_as_read(sender)

        self.send_realtime_message(message)

        for recipient in conversation.other_participants(sender):
            self.notification_service.notify(
                recipient,
                'new_message',
                f"New message from {message.sender_name}",
                content[:100],
                data={
                    'conversation_id': str(conversation.id),
                    'message_id': str(message.id),
                    'sender_id': sender.id,
                }
            )
            self.push_unread_counts(recipient)

        return message

    def send_system_message(self, conversation: Conversation, content: str) -> Message:
        """Send a system message"""
        message = Message.objects.create(
            conversation=conversation,
            sender=None,  # System messages have no sender
            content=content,
            message_type='system'
        )

        self.send_realtime_message(message)
        return message

    def send_realtime_message(self, message: Message):
        """Send message via WebSocket"""
        if not self.channel_layer:
            return

        async_to_sync(self.channel_layer.group_send)(
            chat_group_name(message.conversation_id),
            {
                'type': 'chat_message',
                'message': serialize_message(message)
            }
        )

    def get_conversation_messages(self, conversation: Conversation,
                                  limit: int = 50, offset: int = 0) -> List[Message]:
        """Most recent messages of a conversation, oldest first"""
        latest = Message.objects.filter(
            conversation=conversation,
            is_deleted=False
        ).select_related(
            'sender'
        ).order_by('-created_at')[offset:offset + limit]

        return list(reversed(latest))

    def get_other_participant(self, conversation: Conversation, user: User) -> Optional[User]:
        """The other side of a direct conversation"""
        return conversation.other_participants(user).select_related('profile').first()

    def mark_conversation_read(self, conversation: Conversation, user: User):
        """Mark conversation as read for user"""
        conversation.mark_as_read(user)
        self.push_unread_counts(user)

    def _unread_messages(self, user: User):
        # One filter() call so every condition applies to the same participant row
        return Message.objects.filter(
            Q(conversation__conversationparticipant__last_read_at__isnull=True) |
            Q(created_at__gt=F('conversation__conversationparticipant__last_read_at')),
            conversation__conversationparticipant__user=user,
            conversation__conversationparticipant__is_active=True,
            conversation__is_active=True,
            is_deleted=False
        ).exclude(sender=user)

    def unread_counts(self, user: User) -> Dict[str, int]:
        """Unread message count per conversation id, computed in one query"""
        rows = self._unread_messages(user).values(
            'conversation_id'
        ).annotate(
            unread=Count('id')
        ).order_by()

        return {str(row['conversation_id']): row['unread'] for row in rows}

    def get_unread_count(self, user: User) -> int:
        """Get total unread messages count for user"""
        return self._unread_messages(user).count()

    def push_unread_counts(self, user: User):
        """Send a user's live unread totals to their notification group"""
        self.notification_service.push_counts(user, unread_messages=self.get_unread_count(user))
