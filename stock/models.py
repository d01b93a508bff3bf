"""
Stock — Models

Append-only stock ledger. Every change to Product.current_stock is
recorded as one StockMovement carrying the signed delta and the
before/after balance, so a product's stock history can be replayed.
Records are INSERT ONLY — never update or delete.

@file stock/models.py
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS
from core.models import BaseModel


class StockMovement(models.Model):
    """
    A single immutable stock movement (insert only).

    quantity is signed: positive for receipts, negative for sales,
    either for adjustments. new_stock - previous_stock == quantity.
    The auto-increment id gives a total order for replay.
    """

    class MovementType(models.TextChoices):
        RECEIVE_ORDER = 'RECEIVE_ORDER', _('Order receipt')
        SALE = 'SALE', _('Sale')
        ADJUSTMENT = 'ADJUSTMENT', _('Adjustment')

    id = models.BigAutoField(primary_key=True)
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.PROTECT,
        related_name='stock_movements',
        verbose_name=_('product'),
    )
    movement_type = models.CharField(
        _('movement type'), max_length=16,
        choices=MovementType.choices, db_index=True,
    )
    quantity = models.DecimalField(
        _('quantity delta'), max_digits=QUANTITY_MAX_DIGITS,
        decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    previous_stock = models.DecimalField(
        _('previous stock'), max_digits=QUANTITY_MAX_DIGITS,
        decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    new_stock = models.DecimalField(
        _('new stock'), max_digits=QUANTITY_MAX_DIGITS,
        decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    reference_id = models.CharField(
        _('reference ID'), max_length=64, blank=True, db_index=True,
        help_text=_('Source record, e.g. the received order'),
    )
    notes = models.TextField(_('notes'), blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('created by'),
    )
    created_at = models.DateTimeField(
        _('created at'), auto_now_add=True, db_index=True,
    )
    # No updated_at: rows are immutable.

    class Meta:
        verbose_name = _('stock movement')
        verbose_name_plural = _('stock movements')
        ordering = ['-id']
        indexes = [
            models.Index(fields=['product', 'id'], name='stock_product_seq_idx'),
            models.Index(fields=['movement_type', 'created_at'], name='stock_type_created_idx'),
        ]

    def __str__(self):
        return f'{self.movement_type} {self.quantity:+} product={self.product_id}'

    def save(self, *args, **kwargs):
        if self.pk and StockMovement.objects.filter(pk=self.pk).exists():
            raise NotImplementedError('StockMovement is insert-only; updates are not allowed.')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise NotImplementedError('StockMovement records cannot be deleted.')


class StockImportRecord(BaseModel):
    """One physical-inventory import: which file, when, how many products changed."""

    date = models.DateTimeField(_('date'), auto_now_add=True, db_index=True)
    file_name = models.CharField(_('file name'), max_length=255)
    products_updated = models.PositiveIntegerField(_('products updated'), default=0)

    class Meta:
        verbose_name = _('stock import')
        verbose_name_plural = _('stock imports')
        ordering = ['-date']

    def __str__(self):
        return f'{self.file_name} ({self.products_updated} products)'
