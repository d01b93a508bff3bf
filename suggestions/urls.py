"""
Suggestions — URL Configuration

@file suggestions/urls.py
"""

from django.urls import path

from .views import AppSettingsView, SuggestionView

app_name = 'suggestions'

urlpatterns = [
    path('', SuggestionView.as_view(), name='suggestions'),
    path('settings/', AppSettingsView.as_view(), name='settings'),
]
