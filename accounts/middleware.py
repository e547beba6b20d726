from urllib.parse import parse_qs

from channels.auth import AuthMiddlewareStack
from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware

from .sessions import UserSession
from .tokens import TokenError


@database_sync_to_async
def get_token_user(token):
    try:
        return UserSession.from_token(token).user
    except TokenError:
        return None


class TokenAuthMiddleware(BaseMiddleware):
    """Authenticate WebSocket connections from a ``?token=`` query parameter"""

    async def __call__(self, scope, receive, send):
        query = parse_qs(scope.get('query_string', b'').decode())
        token = (query.get('token') or [''])[0]

        if token:
            user = await get_token_user(token)
            if user is not None:
                scope = dict(scope, user=user)

        return await super().__call__(scope, receive, send)


def TokenAuthMiddlewareStack(inner):
    # Session auth runs first; a valid token overrides its user
    return AuthMiddlewareStack(TokenAuthMiddleware(inner))
