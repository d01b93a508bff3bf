"""
Stock — Django Admin Configuration

Read-only views of the stock ledger and the inventory import history.
Ledger rows are insert-only; the model blocks updates and deletes.

@file stock/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from core.admin import render_badge

from .models import StockImportRecord, StockMovement

MOVEMENT_COLORS = {
    StockMovement.MovementType.RECEIVE_ORDER: '#22c55e',
    StockMovement.MovementType.SALE: '#3b82f6',
    StockMovement.MovementType.ADJUSTMENT: '#eab308',
}


class ReadOnlyAdminMixin:

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(StockMovement)
class StockMovementAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = (
        'id', 'product', 'type_badge', 'quantity',
        'previous_stock', 'new_stock', 'reference_id', 'created_by', 'created_at',
    )
    list_filter = ('movement_type', 'created_at')
    search_fields = ('product__name', 'reference_id', 'notes')
    readonly_fields = (
        'id', 'product', 'movement_type', 'quantity', 'previous_stock', 'new_stock',
        'reference_id', 'notes', 'created_by', 'created_at',
    )
    list_select_related = ('product', 'created_by')
    show_full_result_count = False
    list_per_page = 50
    date_hierarchy = 'created_at'
    ordering = ('-id',)

    fieldsets = (
        (_('Movement'), {
            'fields': ('id', 'product', 'movement_type', 'quantity', 'previous_stock', 'new_stock'),
        }),
        (_('Reference'), {
            'fields': ('reference_id', 'notes'),
        }),
        (_('Audit'), {
            'fields': ('created_by', 'created_at'),
        }),
    )

    @admin.display(description=_('Type'), ordering='movement_type')
    def type_badge(self, obj):
        return render_badge(MOVEMENT_COLORS.get(obj.movement_type, '#6b7280'), obj.get_movement_type_display())


@admin.register(StockImportRecord)
class StockImportRecordAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ('date', 'file_name', 'products_updated', 'created_by')
    search_fields = ('file_name',)
    readonly_fields = ('id', 'date', 'file_name', 'products_updated', 'created_by')
    date_hierarchy = 'date'
    ordering = ('-date',)
