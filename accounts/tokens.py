from datetime import timedelta
from typing import Dict

import jwt
from django.conf import settings
from django.utils import timezone


class TokenError(Exception):
    """Raised when a bearer token cannot be used"""


def issue_token(session) -> str:
    """Encode a JWT bound to an AuthSession"""
    payload = {
        'user_id': session.user_id,
        'jti': str(session.id),
        'iat': int(session.created_at.timestamp()),
        'exp': int(session.expires_at.timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Dict:
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise TokenError('Token expired')
    except jwt.InvalidTokenError:
        raise TokenError('Invalid token')


def session_expiry():
    return timezone.now() + timedelta(days=settings.JWT_EXPIRATION_DAYS)
