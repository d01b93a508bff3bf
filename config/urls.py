"""
Econome — Root URL Configuration

All API endpoints are namespaced under /api/v1/.
The DRF browsable API is available for route inspection in development.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

admin.site.site_header = 'Econome Administration'
admin.site.site_title = 'Econome'
admin.site.index_title = 'Restaurant Purchasing & Inventory'


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """Econome API v1 — endpoint directory."""
    return Response({
        'auth': {
            'token': reverse('api-v1:token-obtain', request=request, format=format),
            'refresh': reverse('api-v1:token-refresh', request=request, format=format),
        },
        'products': reverse('api-v1:products:product-list', request=request, format=format),
        'suppliers': reverse('api-v1:suppliers:supplier-list', request=request, format=format),
        'orders': reverse('api-v1:orders:order-list', request=request, format=format),
        'cart': reverse('api-v1:cart:cart', request=request, format=format),
        'stock': {
            'movements': reverse('api-v1:stock:movement-list', request=request, format=format),
            'sales': reverse('api-v1:stock:sales-list', request=request, format=format),
            'imports': reverse('api-v1:stock:import-list', request=request, format=format),
        },
        'suggestions': reverse('api-v1:suggestions:suggestions', request=request, format=format),
        'analytics': {
            'dashboard': reverse('api-v1:analytics:dashboard', request=request, format=format),
            'monthly_spending': reverse('api-v1:analytics:monthly-spending', request=request, format=format),
        },
    })


api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('auth/token/', TokenObtainPairView.as_view(), name='token-obtain'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('products/', include('products.urls', namespace='products')),
    path('suppliers/', include('suppliers.urls', namespace='suppliers')),
    path('orders/', include('orders.urls', namespace='orders')),
    path('cart/', include('cart.urls', namespace='cart')),
    path('stock/', include('stock.urls', namespace='stock')),
    path('suggestions/', include('suggestions.urls', namespace='suggestions')),
    path('analytics/', include('analytics.urls', namespace='analytics')),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    # DRF session auth (powers the "Log in" button on the browsable API)
    path('api/auth/', include('rest_framework.urls', namespace='rest_framework')),

    # Versioned API
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]
