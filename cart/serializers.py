"""
Cart — Serializers

@file cart/serializers.py
"""

from rest_framework import serializers

from core.constants import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS


class CartItemAddSerializer(serializers.Serializer):
    """supplier_id may be omitted: the cheapest supplier is then chosen."""

    product_id = serializers.CharField(max_length=64)
    supplier_id = serializers.CharField(max_length=64, required=False)
    quantity = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )


class CartItemUpdateSerializer(serializers.Serializer):
    product_id = serializers.CharField(max_length=64)
    supplier_id = serializers.CharField(max_length=64)
    quantity = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
