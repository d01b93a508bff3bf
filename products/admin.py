"""
Products — Django Admin Configuration

@file products/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from core.admin import render_badge
from suppliers.models import SupplierProduct

from .models import Product


class SupplierOfferInline(admin.TabularInline):
    model = SupplierProduct
    fk_name = 'product'
    extra = 0
    fields = ('supplier', 'supplier_sku', 'price')
    readonly_fields = fields
    can_delete = False
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'name', 'family', 'unit',
        'current_stock', 'min_stock', 'stock_badge', 'average_cost', 'is_deleted',
    )
    list_filter = ('family', 'is_deleted')
    search_fields = ('id', 'name', 'family')
    # Stock changes must go through the ledger (API or reconciliation).
    readonly_fields = ('current_stock', 'created_at', 'updated_at', 'deleted_at', 'deleted_by')
    inlines = [SupplierOfferInline]
    ordering = ('name',)

    fieldsets = (
        (_('Product'), {
            'fields': ('name', 'family', 'unit'),
        }),
        (_('Stock'), {
            'fields': ('current_stock', 'min_stock', 'average_cost'),
        }),
        (_('Status'), {
            'fields': ('is_deleted', 'deleted_at', 'deleted_by', 'created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(description=_('Level'))
    def stock_badge(self, obj):
        if obj.is_below_minimum:
            return render_badge('#ef4444', _('Low'))
        return render_badge('#22c55e', _('OK'))
