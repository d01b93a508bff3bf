"""
Orders — Django Admin Configuration

Orders are read-mostly here: status changes and receipts must go
through OrderService so that stock and the ledger follow.

@file orders/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from core.admin import render_badge

from .models import Order, OrderItem

STATUS_COLORS = {
    Order.StatusChoices.DRAFT: '#6b7280',
    Order.StatusChoices.SENT: '#3b82f6',
    Order.StatusChoices.CONFIRMED: '#8b5cf6',
    Order.StatusChoices.PARTIALLY_RECEIVED: '#eab308',
    Order.StatusChoices.FULLY_RECEIVED: '#22c55e',
    Order.StatusChoices.CANCELLED: '#ef4444',
}


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ('product', 'product_name', 'unit', 'quantity', 'received_quantity', 'price_per_unit')
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'supplier_name', 'date', 'status_badge', 'total')
    list_filter = ('status', 'date')
    search_fields = ('id', 'supplier_name')
    readonly_fields = (
        'id', 'supplier', 'supplier_name', 'date', 'status', 'total',
        'created_by', 'created_at', 'updated_by', 'updated_at',
    )
    inlines = [OrderItemInline]
    date_hierarchy = 'date'
    ordering = ('-date',)

    def has_add_permission(self, request):
        return False

    @admin.display(description=_('Status'), ordering='status')
    def status_badge(self, obj):
        return render_badge(STATUS_COLORS.get(obj.status, '#6b7280'), obj.get_status_display())
