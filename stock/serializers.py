"""
Stock — Serializers

Ledger entries (read-only), stock adjustments and the two
reconciliation payloads: sales reports and inventory counts.

@file stock/serializers.py
"""

from decimal import Decimal

from rest_framework import serializers

from core.constants import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS

from .models import StockImportRecord, StockMovement

__all__ = [
    'StockMovementReadSerializer',
    'StockAdjustSerializer',
    'SalesLineSerializer',
    'SalesReportSerializer',
    'InventoryLineSerializer',
    'InventoryImportSerializer',
    'StockImportRecordSerializer',
]


def _quantity_field(**kwargs):
    return serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS,
        decimal_places=QUANTITY_DECIMAL_PLACES,
        min_value=Decimal('0'),
        **kwargs,
    )


class StockMovementReadSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)
    movement_type_display = serializers.CharField(
        source='get_movement_type_display', read_only=True,
    )

    class Meta:
        model = StockMovement
        fields = [
            'id', 'product', 'product_name',
            'movement_type', 'movement_type_display',
            'quantity', 'previous_stock', 'new_stock',
            'reference_id', 'notes', 'created_by', 'created_at',
        ]
        read_only_fields = fields


class StockAdjustSerializer(serializers.Serializer):
    new_stock = _quantity_field()
    notes = serializers.CharField(required=False, allow_blank=True, max_length=500)


class SalesLineSerializer(serializers.Serializer):
    product_name = serializers.CharField(max_length=255)
    quantity_sold = _quantity_field()


class SalesReportSerializer(serializers.Serializer):
    lines = SalesLineSerializer(many=True, allow_empty=False)


class InventoryLineSerializer(serializers.Serializer):
    product_name = serializers.CharField(max_length=255)
    new_stock = _quantity_field()


class InventoryImportSerializer(serializers.Serializer):
    file_name = serializers.CharField(max_length=255)
    updates = InventoryLineSerializer(many=True, allow_empty=False)


class StockImportRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = StockImportRecord
        fields = ['id', 'date', 'file_name', 'products_updated', 'created_by']
        read_only_fields = fields
