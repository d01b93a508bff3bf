"""
Analytics — Views

@file analytics/views.py
"""

from rest_framework import serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .services import AnalyticsService


class MonthlySpendingQuerySerializer(serializers.Serializer):
    months = serializers.IntegerField(min_value=1, max_value=120, default=12)


class DashboardView(APIView):
    """Headline figures for the purchasing dashboard."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(AnalyticsService.dashboard())


class MonthlySpendingView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        ser = MonthlySpendingQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        return Response(AnalyticsService.monthly_spending(months=ser.validated_data['months']))
