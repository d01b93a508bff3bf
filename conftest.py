"""
Econome — Root conftest for pytest

Shared fixtures: API clients for a kitchen user and for staff, a bare
Django session for the purchasing cart, and an AI provider key.

@file conftest.py
"""

import pytest
from django.contrib.sessions.backends.db import SessionStore
from rest_framework.test import APIClient

from tests.factories import SuperuserFactory, UserFactory


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Kitchen staff account (not is_staff); password TestPass2026!"""
    return UserFactory()


@pytest.fixture
def admin_user(db):
    """Staff superuser, required for order deletion and AI settings updates."""
    return SuperuserFactory()


@pytest.fixture
def authenticated_client(api_client, user):
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def session(db):
    """Unsaved session store backing a Cart outside of a request."""
    return SessionStore()


@pytest.fixture
def gemini_api_key(settings):
    """Environment-level Gemini key, so AppSettings falls back to it."""
    settings.AI_PROVIDER = 'gemini'
    settings.GEMINI_API_KEY = 'test-gemini-key'
    return settings.GEMINI_API_KEY
