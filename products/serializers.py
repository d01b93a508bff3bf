"""
Products — Serializers

Read serializer for Product (with derived stock flags) and a plain
write serializer; persistence, uniqueness and ledger entries are
handled by ProductService.

@file products/serializers.py
"""

from decimal import Decimal

from rest_framework import serializers

from core.constants import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX_DIGITS,
)

from .models import Product

__all__ = [
    'ProductReadSerializer',
    'ProductMinimalSerializer',
    'ProductWriteSerializer',
]


class ProductReadSerializer(serializers.ModelSerializer):
    is_below_minimum = serializers.BooleanField(read_only=True)
    stock_value = serializers.DecimalField(
        max_digits=24, decimal_places=2, read_only=True,
    )

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'family', 'unit',
            'current_stock', 'min_stock', 'average_cost',
            'is_below_minimum', 'stock_value',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class ProductMinimalSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ['id', 'name', 'unit']
        read_only_fields = fields


class ProductWriteSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64, required=False)
    name = serializers.CharField(max_length=255)
    family = serializers.CharField(max_length=100, required=False, allow_blank=True)
    unit = serializers.CharField(max_length=50)
    current_stock = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
        min_value=Decimal('0'), required=False,
    )
    min_stock = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
        min_value=Decimal('0'), required=False,
    )
    average_cost = serializers.DecimalField(
        max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES,
        min_value=Decimal('0'), required=False,
    )

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Name cannot be blank.')
        return value
