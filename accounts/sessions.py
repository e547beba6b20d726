"""Explicit per-user session context.

A ``UserSession`` is created when a user signs in and closed when they sign
out. Whatever needs the current user's identity or their live unread counts
takes one of these instead of reaching for request-global state.
"""
import logging
from typing import Optional

from django.db import transaction

from .models import AuthSession, CustomUser
from .tokens import TokenError, decode_token, issue_token, session_expiry

logger = logging.getLogger(__name__)


class UserSession:
    """Signed-in user plus the AuthSession row backing their token"""

    def __init__(self, auth_session: AuthSession, token: Optional[str] = None):
        self.auth_session = auth_session
        self.user = auth_session.user
        self.token = token

    def __repr__(self):
        return f"<UserSession user={self.user.pk} session={self.auth_session.pk}>"

    @classmethod
    def open(cls, user: CustomUser, user_agent: str = '') -> 'UserSession':
        """Start a session on sign-in and issue its token"""
        with transaction.atomic():
            auth_session = AuthSession.objects.create(
                user=user,
                user_agent=user_agent[:255],
                expires_at=session_expiry()
            )
        token = issue_token(auth_session)
        logger.info(f"Opened session {auth_session.id} for user {user.id}")
        return cls(auth_session, token)

    @classmethod
    def from_token(cls, token: str) -> 'UserSession':
        """Resume a session from a bearer token; raises TokenError"""
        payload = decode_token(token)

        try:
            auth_session = AuthSession.objects.select_related('user').get(
                id=payload.get('jti'),
                user_id=payload.get('user_id')
            )
        except (AuthSession.DoesNotExist, ValueError, TypeError):
            raise TokenError('Invalid token')

        if not auth_session.is_active:
            raise TokenError('Session has ended')
        if not auth_session.user.is_active:
            raise TokenError('Account disabled')

        return cls(auth_session, token)

    @property
    def is_open(self) -> bool:
        return self.auth_session.is_active

    def close(self):
        """Tear down the session on sign-out"""
        self.auth_session.revoke()
        logger.info(f"Closed session {self.auth_session.id} for user {self.user.id}")

    @property
    def unread_message_count(self) -> int:
        from messaging.services import MessagingService
        return MessagingService().get_unread_count(self.user)

    @property
    def unread_notification_count(self) -> int:
        from notifications.services import NotificationService
        return NotificationService().unread_count(self.user)

    def live_counts(self) -> dict:
        return {
            'unread_messages': self.unread_message_count,
            'unread_notifications': self.unread_notification_count,
        }
