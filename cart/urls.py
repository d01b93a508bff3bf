"""
Cart — URL Configuration

@file cart/urls.py
"""

from django.urls import path

from .views import CartCheckoutView, CartItemView, CartView

app_name = 'cart'

urlpatterns = [
    path('', CartView.as_view(), name='cart'),
    path('items/', CartItemView.as_view(), name='cart-items'),
    path('checkout/', CartCheckoutView.as_view(), name='cart-checkout'),
]
