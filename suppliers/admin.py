"""
Suppliers — Django Admin Configuration

@file suppliers/admin.py
"""

from django.contrib import admin

from .models import Supplier, SupplierProduct


class SupplierProductInline(admin.TabularInline):
    model = SupplierProduct
    extra = 0
    fields = ('position', 'product', 'supplier_sku', 'price')
    autocomplete_fields = ('product',)
    ordering = ('position',)


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'delivery_days', 'min_order', 'catalog_size', 'created_at')
    search_fields = ('id', 'name')
    readonly_fields = ('created_at', 'updated_at', 'created_by', 'updated_by')
    inlines = [SupplierProductInline]
    ordering = ('name',)

    @admin.display(description='Catalog lines')
    def catalog_size(self, obj):
        return obj.catalog.count()
