"""
Suppliers — Serializers

Supplier with its nested catalog. On write the catalog is sent as a
whole and replaces the existing one.

@file suppliers/serializers.py
"""

from decimal import Decimal

from rest_framework import serializers

from core.constants import AMOUNT_DECIMAL_PLACES, AMOUNT_MAX_DIGITS

from .models import Supplier, SupplierProduct

__all__ = [
    'SupplierProductReadSerializer',
    'SupplierReadSerializer',
    'SupplierWriteSerializer',
    'PriceComparisonSerializer',
]


def _amount_field(**kwargs):
    return serializers.DecimalField(
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
        min_value=Decimal('0'),
        **kwargs,
    )


class SupplierProductReadSerializer(serializers.ModelSerializer):
    product_id = serializers.CharField(read_only=True)
    product_name = serializers.CharField(source='product.name', read_only=True)
    unit = serializers.CharField(source='product.unit', read_only=True)

    class Meta:
        model = SupplierProduct
        fields = ['product_id', 'product_name', 'unit', 'supplier_sku', 'price']
        read_only_fields = fields


class SupplierProductWriteSerializer(serializers.Serializer):
    product_id = serializers.CharField(max_length=64)
    supplier_sku = serializers.CharField(max_length=100, required=False, allow_blank=True)
    price = _amount_field()


class SupplierReadSerializer(serializers.ModelSerializer):
    products = SupplierProductReadSerializer(source='catalog', many=True, read_only=True)

    class Meta:
        model = Supplier
        fields = [
            'id', 'name', 'delivery_days', 'min_order',
            'products', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class SupplierWriteSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64, required=False)
    name = serializers.CharField(max_length=255)
    delivery_days = serializers.CharField(max_length=255, required=False, allow_blank=True)
    min_order = _amount_field(required=False)
    products = SupplierProductWriteSerializer(many=True, required=False)


class PriceComparisonSerializer(serializers.ModelSerializer):
    """One catalog offer seen from the product side."""

    supplier_id = serializers.CharField(read_only=True)
    supplier_name = serializers.CharField(source='supplier.name', read_only=True)
    delivery_days = serializers.CharField(source='supplier.delivery_days', read_only=True)
    min_order = serializers.DecimalField(
        source='supplier.min_order',
        max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES, read_only=True,
    )

    class Meta:
        model = SupplierProduct
        fields = ['supplier_id', 'supplier_name', 'delivery_days', 'min_order', 'supplier_sku', 'price']
        read_only_fields = fields
