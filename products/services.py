"""
Products — Service Layer

Registry management for Product. Stock levels are never written
directly here: initial stock and manual corrections go through the
stock ledger so that every balance can be replayed.

@file products/services.py
"""

import logging

from django.db import transaction
from django.db.models import F

from core.exceptions import ConflictError, NotFoundError, ValidationError
from stock.models import StockMovement
from stock.services import StockService, to_quantity

from .models import Product

logger = logging.getLogger('econome')

EDITABLE_FIELDS = ('name', 'family', 'unit', 'min_stock', 'average_cost')


def _ensure_name_available(name: str, exclude_pk=None) -> None:
    qs = Product.objects.filter(name=name, is_deleted=False)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise ConflictError(detail=f'A product named "{name}" already exists.')


def _validate_non_negative(fields: dict) -> dict:
    cleaned = dict(fields)
    for key in ('current_stock', 'min_stock', 'average_cost'):
        if key in cleaned and cleaned[key] is not None:
            places = 2 if key == 'average_cost' else 3
            value = to_quantity(cleaned[key], label=key, places=places)
            if value < 0:
                raise ValidationError(detail=f'{key} must be zero or positive.')
            cleaned[key] = value
    return cleaned


class ProductService:
    """Create / update / soft-delete products and query low stock."""

    @staticmethod
    def get_product(product_id) -> Product:
        try:
            return Product.objects.get(pk=product_id, is_deleted=False)
        except Product.DoesNotExist:
            raise NotFoundError(detail=f'Product {product_id} not found.')

    @staticmethod
    @transaction.atomic
    def create_product(*, actor=None, **fields) -> Product:
        fields = _validate_non_negative(fields)
        product_id = fields.pop('id', None)
        initial_stock = fields.pop('current_stock', None) or 0

        if product_id and Product.objects.filter(pk=product_id).exists():
            raise ConflictError(detail=f'Product with id {product_id} already exists.')
        _ensure_name_available(fields.get('name', ''))

        product = Product(**fields)
        if product_id:
            product.id = product_id
        product.created_by = actor if getattr(actor, 'is_authenticated', False) else None
        product.full_clean(validate_constraints=False)
        product.save()

        if initial_stock:
            StockService.apply_change(
                product=product,
                new_stock=initial_stock,
                movement_type=StockMovement.MovementType.ADJUSTMENT,
                actor=actor,
                notes='Initial stock',
            )
        logger.info('Product %s created (%s).', product.pk, product.name)
        return product

    @staticmethod
    @transaction.atomic
    def update_product(*, product_id, actor=None, **fields) -> Product:
        """
        Update descriptive fields. A changed current_stock is applied as
        a manual ADJUSTMENT through the ledger.
        """
        fields = _validate_non_negative(fields)
        product = StockService.lock_product(product_id)

        if 'name' in fields and fields['name'] != product.name:
            _ensure_name_available(fields['name'], exclude_pk=product.pk)

        changed = []
        for name in EDITABLE_FIELDS:
            if name in fields and fields[name] is not None:
                setattr(product, name, fields[name])
                changed.append(name)
        if changed:
            product.updated_by = actor if getattr(actor, 'is_authenticated', False) else None
            product.full_clean(validate_constraints=False)
            product.save(update_fields=changed + ['updated_by', 'updated_at'])

        new_stock = fields.get('current_stock')
        if new_stock is not None and new_stock != product.current_stock:
            StockService.apply_change(
                product=product,
                new_stock=new_stock,
                movement_type=StockMovement.MovementType.ADJUSTMENT,
                actor=actor,
                notes='Manual adjustment',
            )
        return product

    @staticmethod
    @transaction.atomic
    def delete_product(*, product_id, actor=None) -> Product:
        """Soft-delete; refused while an open order still references the product."""
        from orders.models import Order, OrderItem

        product = StockService.lock_product(product_id)
        open_orders = (
            OrderItem.objects
            .filter(product=product)
            .exclude(order__status__in=Order.CLOSED_STATUSES)
            .order_by()
            .values_list('order_id', flat=True)
            .distinct()
        )
        if open_orders:
            raise ConflictError(
                detail=(
                    f'Product {product.name} is referenced by open orders: '
                    f'{", ".join(sorted(open_orders))}.'
                ),
            )
        product.soft_delete(user=actor if getattr(actor, 'is_authenticated', False) else None)
        logger.info('Product %s soft-deleted.', product.pk)
        return product

    @staticmethod
    def low_stock():
        """Live products whose stock is strictly below their minimum."""
        return Product.objects.filter(
            is_deleted=False,
            current_stock__lt=F('min_stock'),
        ).order_by('family', 'name')
