"""
Suggestions — Serializers

@file suggestions/serializers.py
"""

from rest_framework import serializers

from core.constants import AMOUNT_DECIMAL_PLACES, AMOUNT_MAX_DIGITS, QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS

from .models import AppSettings
from .services import MODE_RULES, MODES


class SuggestionRequestSerializer(serializers.Serializer):
    mode = serializers.ChoiceField(choices=MODES, default=MODE_RULES)


class SuggestionSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    product_name = serializers.CharField()
    unit = serializers.CharField()
    supplier_id = serializers.CharField()
    supplier_name = serializers.CharField()
    quantity = serializers.DecimalField(max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES)
    unit_price = serializers.DecimalField(
        max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES, allow_null=True,
    )
    reasoning = serializers.CharField(allow_blank=True)


class AppSettingsSerializer(serializers.ModelSerializer):
    """API keys are write-only; reads only say whether one is configured."""

    has_gemini_api_key = serializers.SerializerMethodField()
    has_openai_api_key = serializers.SerializerMethodField()
    has_anthropic_api_key = serializers.SerializerMethodField()
    effective_model = serializers.CharField(read_only=True)

    class Meta:
        model = AppSettings
        fields = [
            'provider', 'ai_model', 'effective_model',
            'gemini_api_key', 'openai_api_key', 'anthropic_api_key',
            'has_gemini_api_key', 'has_openai_api_key', 'has_anthropic_api_key',
            'updated_at',
        ]
        read_only_fields = ['updated_at']
        extra_kwargs = {
            'gemini_api_key': {'write_only': True},
            'openai_api_key': {'write_only': True},
            'anthropic_api_key': {'write_only': True},
        }

    def get_has_gemini_api_key(self, obj):
        return bool(obj.api_key_for(AppSettings.ProviderChoices.GEMINI))

    def get_has_openai_api_key(self, obj):
        return bool(obj.api_key_for(AppSettings.ProviderChoices.OPENAI))

    def get_has_anthropic_api_key(self, obj):
        return bool(obj.api_key_for(AppSettings.ProviderChoices.ANTHROPIC))
