import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'roomie_match.settings.development')

# Django must be set up before importing consumers that touch models
django_asgi_app = get_asgi_application()

from channels.routing import ProtocolTypeRouter, URLRouter  # noqa: E402
from channels.security.websocket import AllowedHostsOriginValidator  # noqa: E402

from accounts.middleware import TokenAuthMiddlewareStack  # noqa: E402
from messaging.routing import websocket_urlpatterns as messaging_patterns  # noqa: E402
from notifications.routing import websocket_urlpatterns as notification_patterns  # noqa: E402

application = ProtocolTypeRouter({
    'http': django_asgi_app,
    'websocket': AllowedHostsOriginValidator(
        TokenAuthMiddlewareStack(
            URLRouter(messaging_patterns + notification_patterns)
        )
    ),
})
