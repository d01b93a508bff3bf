"""
Analytics — URL Configuration

@file analytics/urls.py
"""

from django.urls import path

from .views import DashboardView, MonthlySpendingView

app_name = 'analytics'

urlpatterns = [
    path('dashboard/', DashboardView.as_view(), name='dashboard'),
    path('monthly-spending/', MonthlySpendingView.as_view(), name='monthly-spending'),
]
