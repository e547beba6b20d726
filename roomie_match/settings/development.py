from .base import *

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = True

ALLOWED_HOSTS = ['*']

# Any local front-end dev server may call the API
CORS_ALLOW_ALL_ORIGINS = True

EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

# Matching and chat internals are worth seeing while developing
for app_logger in ('accounts', 'roommate_matching', 'messaging', 'notifications'):
    LOGGING['loggers'][app_logger]['level'] = os.getenv('DJANGO_LOG_LEVEL', 'DEBUG')
