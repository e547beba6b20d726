from django.db import models
from django.contrib.auth import get_user_model
from django.utils import timezone
import uuid

User = get_user_model()


class Conversation(models.Model):
    """A chat between matched users"""

    CONVERSATION_TYPES = [
        ('direct', 'Direct Message'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    conversation_type = models.CharField(max_length=20, choices=CONVERSATION_TYPES, default='direct')

    participants = models.ManyToManyField(
        User,
        related_name='conversations',
        through='ConversationParticipant'
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
    last_message_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'messaging_conversation'
        ordering = ['-last_message_at', '-created_at']
        indexes = [
            models.Index(fields=['conversation_type', 'is_active'], name='msg_conv_type_active_idx'),
            models.Index(fields=['last_message_at'], name='msg_conv_last_message_idx'),
        ]

    def __str__(self):
        names = [user.get_short_name() for user in self.participants.all()[:2]]
        if len(names) == 2:
            return ' & '.join(names)
        return f"Chat {self.id}"

    def has_participant(self, user):
        return ConversationParticipant.objects.filter(
            conversation=self,
            user=user,
            is_active=True
        ).exists()

    def other_participants(self, user):
        return User.objects.filter(
            conversationparticipant__conversation=self,
            conversationparticipant__is_active=True
        ).exclude(id=user.id)

    def mark_as_read(self, user):
        """Move the user's read position to now"""
        ConversationParticipant.objects.filter(
            conversation=self,
            user=user
        ).update(last_read_at=timezone.now())

    @classmethod
    def get_or_create_direct_conversation(cls, user1, user2):
        """Get or create a direct conversation between two users"""
        # Count before filtering on participants so the count covers everyone
        conversation = cls.objects.filter(
            conversation_type='direct'
        ).annotate(
            participant_count=models.Count('participants', distinct=True)
        ).filter(
            participant_count=2
        ).filter(
            participants=user1
        ).filter(
            participants=user2
        ).first()

        if conversation:
            return conversation, False

        conversation = cls.objects.create(conversation_type='direct')
        ConversationParticipant.objects.bulk_create([
            ConversationParticipant(conversation=conversation, user=user1),
            ConversationParticipant(conversation=conversation, user=user2),
        ])

        return conversation, True


class ConversationParticipant(models.Model):
    """Membership of a user in a conversation, with their read position"""

    conversation = models.ForeignKey(Conversation, on_delete=models.CASCADE)
    user = models.ForeignKey(User, on_delete=models.CASCADE)

    joined_at = models.DateTimeField(default=timezone.now)
    left_at = models.DateTimeField(null=True, blank=True)
    # Null until the user first opens the chat
    last_read_at = models.DateTimeField(null=True, blank=True)

    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'messaging_conversationparticipant'
        unique_together = ['conversation', 'user']
        indexes = [
            models.Index(fields=['user', 'is_active'], name='msg_part_user_active_idx'),
        ]

    def __str__(self):
        return f"{self.user.get_short_name()} in {self.conversation_id}"

    def leave_conversation(self):
        self.is_active = False
        self.left_at = timezone.now()
        self.save(update_fields=['is_active', 'left_at'])


class Message(models.Model):
    """Individual message in a conversation"""

    MESSAGE_TYPES = [
        ('text', 'Text Message'),
        ('system', 'System Message'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name='messages'
    )
    sender = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='sent_messages'
    )
    # Name at send time, shown even if the sender later changes it
    sender_name = models.CharField(max_length=100, blank=True)

    message_type = models.CharField(max_length=20, choices=MESSAGE_TYPES, default='text')
    content = models.TextField()

    is_deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'messaging_message'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['conversation', 'created_at'], name='msg_message_conv_created_idx'),
            models.Index(fields=['sender', 'created_at'], name='msg_message_sender_created_idx'),
        ]

    def __str__(self):
        preview = self.content[:50] + '...' if len(self.content) > 50 else self.content
        return f"{self.sender_name or 'System'}: {preview}"

    def save(self, *args, **kwargs):
        is_new = self._state.adding
        super().save(*args, **kwargs)

        if is_new:
            Conversation.objects.filter(pk=self.conversation_id).update(last_message_at=self.created_at)
            self.conversation.last_message_at = self.created_at

    def soft_delete(self):
        self.is_deleted = True
        self.deleted_at = timezone.now()
        self.save(update_fields=['is_deleted', 'deleted_at'])
