"""
Stock — URL Configuration

@file stock/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import SalesReportViewSet, StockImportViewSet, StockMovementViewSet

app_name = 'stock'

router = DefaultRouter()
router.register('movements', StockMovementViewSet, basename='movement')
router.register('sales', SalesReportViewSet, basename='sales')
router.register('imports', StockImportViewSet, basename='import')

urlpatterns = [
    path('', include(router.urls)),
]
