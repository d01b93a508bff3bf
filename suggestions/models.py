"""
Suggestions — Models

AppSettings: single-row table holding the AI provider selection and the
per-provider API keys. Values left blank fall back to the environment
(config/settings AI_* and *_API_KEY).

@file suggestions/models.py
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import AuditFieldsMixin, TimestampMixin


class AppSettings(TimestampMixin, AuditFieldsMixin):

    class ProviderChoices(models.TextChoices):
        GEMINI = 'gemini', _('Google Gemini')
        OPENAI = 'openai', _('OpenAI')
        ANTHROPIC = 'anthropic', _('Anthropic')

    SINGLETON_PK = 1

    id = models.PositiveSmallIntegerField(primary_key=True, default=SINGLETON_PK, editable=False)
    provider = models.CharField(
        _('provider'), max_length=20,
        choices=ProviderChoices.choices,
        default=ProviderChoices.GEMINI,
    )
    ai_model = models.CharField(_('model'), max_length=100, blank=True)
    gemini_api_key = models.CharField(_('Gemini API key'), max_length=255, blank=True)
    openai_api_key = models.CharField(_('OpenAI API key'), max_length=255, blank=True)
    anthropic_api_key = models.CharField(_('Anthropic API key'), max_length=255, blank=True)

    class Meta:
        verbose_name = _('application settings')
        verbose_name_plural = _('application settings')

    def __str__(self):
        return f'AI: {self.provider} / {self.effective_model}'

    def save(self, *args, **kwargs):
        self.pk = self.SINGLETON_PK
        super().save(*args, **kwargs)

    @classmethod
    def load(cls) -> 'AppSettings':
        instance, _created = cls.objects.get_or_create(
            pk=cls.SINGLETON_PK,
            defaults={
                'provider': settings.AI_PROVIDER,
                'ai_model': settings.AI_MODEL,
            },
        )
        return instance

    @property
    def effective_model(self) -> str:
        return self.ai_model or settings.AI_DEFAULT_MODELS.get(self.provider, '')

    def api_key_for(self, provider: str | None = None) -> str:
        provider = provider or self.provider
        stored = getattr(self, f'{provider}_api_key', '')
        return stored or getattr(settings, f'{provider.upper()}_API_KEY', '')
