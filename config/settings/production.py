"""
Econome — Production Settings

Deployment behind an HTTPS reverse proxy, serving the purchasing SPA
from a separate origin. Activated by:
  DJANGO_SETTINGS_MODULE=config.settings.production

SECRET_KEY, ALLOWED_HOSTS, DATABASE_URL and CORS_ALLOWED_ORIGINS must
come from the environment; the base defaults are for local use only.

@file config/settings/production.py
"""

from .base import *  # noqa: F401, F403
from .base import env

DEBUG = False

SECRET_KEY = env('SECRET_KEY')
ALLOWED_HOSTS = env.list('ALLOWED_HOSTS')
CORS_ALLOWED_ORIGINS = env.list('CORS_ALLOWED_ORIGINS')
CSRF_TRUSTED_ORIGINS = env.list('CSRF_TRUSTED_ORIGINS', default=CORS_ALLOWED_ORIGINS)

# HTTPS terminates at the proxy
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_SSL_REDIRECT = env.bool('SECURE_SSL_REDIRECT', default=True)
SECURE_HSTS_SECONDS = env.int('SECURE_HSTS_SECONDS', default=31536000)
SECURE_HSTS_INCLUDE_SUBDOMAINS = True

# Session cookie carries the cart to the cross-origin SPA.
SESSION_COOKIE_SECURE = True
SESSION_COOKIE_SAMESITE = 'None'
CSRF_COOKIE_SECURE = True

DATABASES['default']['CONN_MAX_AGE'] = env.int('DB_CONN_MAX_AGE', default=600)  # noqa: F405
DATABASES['default']['CONN_HEALTH_CHECKS'] = True  # noqa: F405

REST_FRAMEWORK['DEFAULT_RENDERER_CLASSES'] = (  # noqa: F405
    'core.renderers.StandardJSONRenderer',
)
REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {  # noqa: F405
    'anon': env('THROTTLE_ANON', default='30/minute'),
    'user': env('THROTTLE_USER', default='300/minute'),
}

# Upper bound for one provider call.
AI_REQUEST_TIMEOUT = env.float('AI_REQUEST_TIMEOUT', default=20.0)

LOGGING['loggers']['econome']['level'] = env('ECONOME_LOG_LEVEL', default='WARNING')  # noqa: F405
LOGGING['loggers']['django.request'] = {  # noqa: F405
    'handlers': ['console'],
    'level': 'ERROR',
    'propagate': False,
}
