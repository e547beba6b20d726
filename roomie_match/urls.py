from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # Token authentication API
    path('api/auth/', include('accounts.urls')),

    # Profile, mood and preference catalogue
    path('api/profile/', include('profiles.urls')),

    # Quiz and matching
    path('api/matching/', include('roommate_matching.urls')),

    # Chat
    path('api/messages/', include('messaging.urls')),

    # Notification feed
    path('api/notifications/', include('notifications.urls')),

    # Dashboard and health
    path('api/', include('core.urls')),
]
