"""
Suppliers — Models

Supplier catalog: who delivers when, the minimum order amount, and the
per-supplier price / SKU of each internal product.

@file suppliers/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import AMOUNT_DECIMAL_PLACES, AMOUNT_MAX_DIGITS
from core.models import BaseModel


class Supplier(BaseModel):
    """A vendor the restaurant orders from."""

    name = models.CharField(_('name'), max_length=255, db_index=True)
    delivery_days = models.CharField(
        _('delivery days'), max_length=255, blank=True,
        help_text=_('Free text, e.g. "Mardi, Vendredi"'),
    )
    min_order = models.DecimalField(
        _('minimum order (EUR)'), max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES, default=0,
    )

    class Meta:
        verbose_name = _('supplier')
        verbose_name_plural = _('suppliers')
        ordering = ['name']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(min_order__gte=0),
                name='supplier_min_order_non_negative',
            ),
        ]

    def __str__(self):
        return self.name


class SupplierProduct(BaseModel):
    """
    Catalog line: the supplier's SKU and current price for one of our
    products. At most one line per (supplier, product).
    """

    supplier = models.ForeignKey(
        Supplier,
        on_delete=models.CASCADE,
        related_name='catalog',
        verbose_name=_('supplier'),
    )
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.CASCADE,
        related_name='supplier_offers',
        verbose_name=_('product'),
    )
    supplier_sku = models.CharField(_('supplier SKU'), max_length=100, blank=True)
    price = models.DecimalField(
        _('unit price (EUR)'), max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
    )
    position = models.PositiveIntegerField(_('position'), default=0)

    class Meta:
        verbose_name = _('supplier product')
        verbose_name_plural = _('supplier products')
        ordering = ['supplier', 'position', 'created_at']
        indexes = [
            models.Index(fields=['product', 'price']),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['supplier', 'product'],
                name='unique_supplier_product',
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name='supplier_product_price_non_negative',
            ),
        ]

    def __str__(self):
        return f'{self.supplier_id} — {self.product_id} @ {self.price}'
