"""
Products — Signals

Audit logging for Product lifecycle events. Stock-only saves are
skipped: the stock ledger already records those.

@file products/signals.py
"""

import logging

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from core.constants import AUDIT_ACTION_CREATE, AUDIT_ACTION_SOFT_DELETE, AUDIT_ACTION_UPDATE
from core.services import AuditService
from stock.services import STOCK_FIELDS

from .models import Product

logger = logging.getLogger('econome')

_product_pre: dict = {}


def _is_stock_only(update_fields) -> bool:
    return bool(update_fields) and set(update_fields) <= STOCK_FIELDS


@receiver(pre_save, sender=Product)
def product_pre_save(sender, instance, update_fields=None, **kwargs):
    if instance.pk and not _is_stock_only(update_fields):
        try:
            old = Product.objects.get(pk=instance.pk)
            _product_pre[str(instance.pk)] = AuditService.snapshot(old)
        except Product.DoesNotExist:
            pass


@receiver(post_save, sender=Product)
def product_post_save(sender, instance, created, update_fields=None, **kwargs):
    if _is_stock_only(update_fields):
        return
    if created:
        action, actor = AUDIT_ACTION_CREATE, instance.created_by
    elif update_fields and 'is_deleted' in update_fields and instance.is_deleted:
        action, actor = AUDIT_ACTION_SOFT_DELETE, instance.deleted_by
    else:
        action, actor = AUDIT_ACTION_UPDATE, instance.updated_by
    old = _product_pre.pop(str(instance.pk), None)
    new = AuditService.snapshot(instance)
    if not created and old == new:
        return
    AuditService.log(
        actor=actor,
        action=action,
        model_name='Product',
        object_id=str(instance.pk),
        old_values=old,
        new_values=new,
    )
