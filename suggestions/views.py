"""
Suggestions — Views

POST suggestions/ computes reorder suggestions ('rules' or 'ai').
suggestions/settings/ reads and updates the AI provider configuration
(update restricted to staff).

@file suggestions/views.py
"""

import logging

from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.constants import AUDIT_ACTION_UPDATE
from core.services import AuditService

from .models import AppSettings
from .serializers import AppSettingsSerializer, SuggestionRequestSerializer, SuggestionSerializer
from .services import SuggestionService

logger = logging.getLogger('econome')

SECRET_FIELDS = ('gemini_api_key', 'openai_api_key', 'anthropic_api_key')


class SuggestionView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        ser = SuggestionRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        suggestions = SuggestionService.suggest(ser.validated_data['mode'])
        return Response(SuggestionSerializer(suggestions, many=True).data)


class AppSettingsView(APIView):

    def get_permissions(self):
        if self.request.method in ('PUT', 'PATCH'):
            return [IsAuthenticated(), IsAdminUser()]
        return [IsAuthenticated()]

    def get(self, request):
        return Response(AppSettingsSerializer(AppSettings.load()).data)

    def put(self, request):
        return self._update(request, partial=False)

    def patch(self, request):
        return self._update(request, partial=True)

    def _update(self, request, partial):
        instance = AppSettings.load()
        old_values = AuditService.snapshot(instance, fields=['provider', 'ai_model'])
        ser = AppSettingsSerializer(instance, data=request.data, partial=partial)
        ser.is_valid(raise_exception=True)
        instance = ser.save(updated_by=request.user)
        AuditService.log(
            actor=request.user,
            action=AUDIT_ACTION_UPDATE,
            model_name='AppSettings',
            object_id=instance.pk,
            old_values=old_values,
            new_values={
                **AuditService.snapshot(instance, fields=['provider', 'ai_model']),
                'keys_changed': [name for name in SECRET_FIELDS if name in ser.validated_data],
            },
        )
        logger.info('AI settings updated: provider=%s model=%s', instance.provider, instance.effective_model)
        return Response(AppSettingsSerializer(instance).data)
