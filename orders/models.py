"""
Orders — Models

Purchase orders sent to one supplier, with line items snapshotting the
product name, unit and unit price at order time. Receipts accumulate
received_quantity per line; the order status follows the state machine
in orders/services.py.

@file orders/models.py
"""

import uuid

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.constants import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX_DIGITS,
)
from core.models import BaseModel


def generate_order_id() -> str:
    return f'ORD-{timezone.now():%Y%m%d%H%M%S}-{uuid.uuid4().hex[:6].upper()}'


class Order(BaseModel):
    """
    A purchase order to a single supplier.

    supplier_name and the item snapshots are historical: they are not
    refreshed when the catalog changes. total is fixed at creation.
    """

    class StatusChoices(models.TextChoices):
        DRAFT = 'Brouillon', _('Draft')
        SENT = 'Envoyée', _('Sent')
        CONFIRMED = 'Confirmée', _('Confirmed')
        PARTIALLY_RECEIVED = 'Reçue partiellement', _('Partially received')
        FULLY_RECEIVED = 'Reçue totalement', _('Fully received')
        CANCELLED = 'Annulée', _('Cancelled')

    CLOSED_STATUSES = (StatusChoices.FULLY_RECEIVED, StatusChoices.CANCELLED)

    id = models.CharField(
        _('ID'), primary_key=True, max_length=64,
        default=generate_order_id,
    )
    supplier = models.ForeignKey(
        'suppliers.Supplier',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='orders',
        verbose_name=_('supplier'),
    )
    supplier_name = models.CharField(_('supplier name'), max_length=255)
    date = models.DateTimeField(_('date'), default=timezone.now, db_index=True)
    status = models.CharField(
        _('status'), max_length=24,
        choices=StatusChoices.choices,
        default=StatusChoices.DRAFT,
        db_index=True,
    )
    total = models.DecimalField(
        _('total (EUR)'), max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES, default=0,
    )

    class Meta:
        verbose_name = _('order')
        verbose_name_plural = _('orders')
        ordering = ['-date']
        indexes = [
            models.Index(fields=['supplier', 'status']),
            models.Index(fields=['status', 'date']),
        ]

    def __str__(self):
        return f'Order {self.pk} — {self.supplier_name} ({self.status})'

    @property
    def is_closed(self) -> bool:
        return self.status in self.CLOSED_STATUSES


class OrderItem(BaseModel):
    """
    Line item: quantity ordered and received so far, with the product
    name, unit and price captured when the order was created.
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name=_('order'),
    )
    product = models.ForeignKey(
        'products.Product',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='order_items',
        verbose_name=_('product'),
    )
    product_name = models.CharField(_('product name'), max_length=255)
    quantity = models.DecimalField(
        _('quantity ordered'), max_digits=QUANTITY_MAX_DIGITS,
        decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    received_quantity = models.DecimalField(
        _('quantity received'), max_digits=QUANTITY_MAX_DIGITS,
        decimal_places=QUANTITY_DECIMAL_PLACES, default=0,
    )
    unit = models.CharField(_('unit'), max_length=50)
    price_per_unit = models.DecimalField(
        _('unit price (EUR)'), max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES,
    )
    position = models.PositiveIntegerField(_('position'), default=0)

    class Meta:
        verbose_name = _('order item')
        verbose_name_plural = _('order items')
        ordering = ['order', 'position']
        constraints = [
            models.UniqueConstraint(
                fields=['order', 'product'],
                condition=models.Q(product__isnull=False),
                name='unique_order_product',
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name='order_item_quantity_positive',
            ),
            models.CheckConstraint(
                condition=models.Q(received_quantity__gte=0),
                name='order_item_received_non_negative',
            ),
            models.CheckConstraint(
                condition=models.Q(received_quantity__lte=models.F('quantity')),
                name='order_item_received_lte_ordered',
            ),
        ]

    def __str__(self):
        return f'{self.order_id} — {self.product_name} × {self.quantity}'

    @property
    def line_total(self):
        return self.quantity * self.price_per_unit

    @property
    def remaining_quantity(self):
        return self.quantity - self.received_quantity
