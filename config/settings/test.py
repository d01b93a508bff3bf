"""
Econome — Test Settings

In-memory SQLite, fast password hashing, no throttling. Activated by
pytest through [tool.pytest.ini_options] in pyproject.toml.

@file config/settings/test.py
"""

from .base import *  # noqa: F401, F403

DEBUG = False

ALLOWED_HOSTS = ['*']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    },
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []  # noqa: F405
REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {}  # noqa: F405

AI_PROVIDER = 'gemini'
AI_MODEL = ''
GEMINI_API_KEY = ''
OPENAI_API_KEY = ''
ANTHROPIC_API_KEY = ''

LOGGING['loggers']['econome']['level'] = 'WARNING'  # noqa: F405
