"""
Orders — Serializers

Read serializers for Order / OrderItem and the input payloads of the
creation and receipt workflows. Explicit field lists; no __all__.

@file orders/serializers.py
"""

from decimal import Decimal

from rest_framework import serializers

from core.constants import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX_DIGITS,
)

from .models import Order, OrderItem

__all__ = [
    'OrderItemReadSerializer',
    'OrderReadSerializer',
    'OrderWriteSerializer',
    'CartLineSerializer',
    'OrderFromCartSerializer',
    'ReceiptSerializer',
]


class OrderItemReadSerializer(serializers.ModelSerializer):
    line_total = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = [
            'id', 'product', 'product_name', 'unit',
            'quantity', 'received_quantity', 'price_per_unit', 'line_total',
        ]
        read_only_fields = fields

    def get_line_total(self, obj):
        return (obj.quantity * obj.price_per_unit).quantize(Decimal('0.01'))


class OrderReadSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    items = OrderItemReadSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'supplier', 'supplier_name', 'date',
            'status', 'status_display', 'total', 'items',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class OrderItemWriteSerializer(serializers.Serializer):
    product_id = serializers.CharField(max_length=64)
    quantity = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    price_per_unit = serializers.DecimalField(
        max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES,
        min_value=Decimal('0'), required=False,
    )
    product_name = serializers.CharField(max_length=255, required=False)
    unit = serializers.CharField(max_length=50, required=False)


class OrderWriteSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64, required=False)
    supplier_id = serializers.CharField(max_length=64)
    items = OrderItemWriteSerializer(many=True)

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError('At least one item is required.')
        return value


class CartLineSerializer(serializers.Serializer):
    product_id = serializers.CharField(max_length=64)
    supplier_id = serializers.CharField(max_length=64)
    quantity = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )


class OrderFromCartSerializer(serializers.Serializer):
    items = CartLineSerializer(many=True)


class ReceiptLineSerializer(serializers.Serializer):
    product_id = serializers.CharField(max_length=64)
    quantity = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )


class ReceiptSerializer(serializers.Serializer):
    items = ReceiptLineSerializer(many=True)
