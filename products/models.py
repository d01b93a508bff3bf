"""
Products — Models

Product registry: current stock level, minimum threshold and average
cost per product. current_stock is only ever changed through operations
that write a StockMovement (receipt, sale, adjustment, inventory import).

@file products/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX_DIGITS,
)
from core.models import ArchivableModel


class Product(ArchivableModel):
    """
    An ingredient or consumable the kitchen buys.

    Products are soft-deleted: the stock ledger keeps pointing at them.
    The name is unique among live products because sales and inventory
    exports are matched by exact name.
    """

    name = models.CharField(_('name'), max_length=255)
    family = models.CharField(
        _('family'), max_length=100, blank=True,
        help_text=_('Category, e.g. Poisson, Épicerie, Viande'),
        db_index=True,
    )
    unit = models.CharField(
        _('unit'), max_length=50,
        help_text=_('Unit of measure, e.g. kg, L, Sac de 10 kg'),
    )
    current_stock = models.DecimalField(
        _('current stock'), max_digits=QUANTITY_MAX_DIGITS,
        decimal_places=QUANTITY_DECIMAL_PLACES, default=0,
    )
    min_stock = models.DecimalField(
        _('minimum stock'), max_digits=QUANTITY_MAX_DIGITS,
        decimal_places=QUANTITY_DECIMAL_PLACES, default=0,
    )
    average_cost = models.DecimalField(
        _('average cost (EUR)'), max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES, default=0,
    )

    class Meta:
        verbose_name = _('product')
        verbose_name_plural = _('products')
        ordering = ['name']
        indexes = [
            models.Index(fields=['name', 'is_deleted']),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['name'],
                condition=models.Q(is_deleted=False),
                name='unique_active_product_name',
            ),
            models.CheckConstraint(
                condition=models.Q(current_stock__gte=0),
                name='product_stock_non_negative',
            ),
            models.CheckConstraint(
                condition=models.Q(min_stock__gte=0),
                name='product_min_stock_non_negative',
            ),
            models.CheckConstraint(
                condition=models.Q(average_cost__gte=0),
                name='product_cost_non_negative',
            ),
        ]

    def __str__(self):
        return f'{self.name} ({self.unit})'

    @property
    def is_below_minimum(self) -> bool:
        return self.current_stock < self.min_stock

    @property
    def stock_value(self):
        return self.current_stock * self.average_cost
