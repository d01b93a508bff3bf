"""
Suggestions — Django Admin Configuration

@file suggestions/admin.py
"""

from django import forms
from django.contrib import admin

from .models import AppSettings


class AppSettingsForm(forms.ModelForm):
    class Meta:
        model = AppSettings
        fields = ['provider', 'ai_model', 'gemini_api_key', 'openai_api_key', 'anthropic_api_key']
        widgets = {
            'gemini_api_key': forms.PasswordInput(render_value=True),
            'openai_api_key': forms.PasswordInput(render_value=True),
            'anthropic_api_key': forms.PasswordInput(render_value=True),
        }


@admin.register(AppSettings)
class AppSettingsAdmin(admin.ModelAdmin):
    form = AppSettingsForm
    list_display = ('provider', 'ai_model', 'updated_at')

    def has_add_permission(self, request):
        return not AppSettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False
