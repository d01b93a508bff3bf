"""
Suppliers — Service Layer

Supplier lifecycle and catalog management. A catalog is replaced as a
whole (the ordered list of product mappings sent by the client) inside
the supplier's transaction. Price lookups used by the cart and the
order manager live here.

@file suppliers/services.py
"""

import logging

from django.db import transaction

from core.constants import AUDIT_ACTION_CREATE, AUDIT_ACTION_DELETE, AUDIT_ACTION_UPDATE
from core.exceptions import ConflictError, NotFoundError, ValidationError
from core.services import AuditService
from products.models import Product
from stock.services import to_quantity

from .models import Supplier, SupplierProduct

logger = logging.getLogger('econome')


def _actor_or_none(actor):
    return actor if getattr(actor, 'is_authenticated', False) else None


def _replace_catalog(supplier: Supplier, products: list[dict], actor=None) -> None:
    seen = set()
    lines = []
    for position, row in enumerate(products):
        product_id = row.get('product_id')
        if product_id in seen:
            raise ValidationError(
                detail=f'Product {product_id} appears twice in the catalog of {supplier.name}.',
            )
        seen.add(product_id)
        try:
            product = Product.objects.get(pk=product_id, is_deleted=False)
        except Product.DoesNotExist:
            raise NotFoundError(detail=f'Product {product_id} not found.')
        price = to_quantity(row.get('price'), label='price', places=2)
        if price < 0:
            raise ValidationError(detail='price must be zero or positive.')
        lines.append(SupplierProduct(
            supplier=supplier,
            product=product,
            supplier_sku=row.get('supplier_sku', '') or '',
            price=price,
            position=position,
            created_by=_actor_or_none(actor),
        ))
    supplier.catalog.all().delete()
    SupplierProduct.objects.bulk_create(lines)


class SupplierService:
    """Supplier CRUD, catalog replacement and price lookups."""

    @staticmethod
    def get_supplier(supplier_id) -> Supplier:
        try:
            return Supplier.objects.get(pk=supplier_id)
        except Supplier.DoesNotExist:
            raise NotFoundError(detail=f'Supplier {supplier_id} not found.')

    @staticmethod
    @transaction.atomic
    def create_supplier(*, actor=None, products: list[dict] | None = None, **fields) -> Supplier:
        supplier_id = fields.pop('id', None)
        if supplier_id and Supplier.objects.filter(pk=supplier_id).exists():
            raise ConflictError(detail=f'Supplier with id {supplier_id} already exists.')
        if 'min_order' in fields:
            fields['min_order'] = to_quantity(fields['min_order'], label='min_order', places=2)
            if fields['min_order'] < 0:
                raise ValidationError(detail='min_order must be zero or positive.')

        supplier = Supplier(**fields)
        if supplier_id:
            supplier.id = supplier_id
        supplier.created_by = _actor_or_none(actor)
        supplier.full_clean(validate_constraints=False)
        supplier.save()
        _replace_catalog(supplier, products or [], actor=actor)

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='Supplier',
            object_id=supplier.pk,
            new_values=AuditService.snapshot(supplier),
        )
        logger.info('Supplier %s created with %d catalog lines.', supplier.pk, len(products or []))
        return supplier

    @staticmethod
    @transaction.atomic
    def update_supplier(*, supplier_id, actor=None, products: list[dict] | None = None, **fields) -> Supplier:
        """Update fields; when products is given the catalog is replaced wholesale."""
        try:
            supplier = Supplier.objects.select_for_update().get(pk=supplier_id)
        except Supplier.DoesNotExist:
            raise NotFoundError(detail=f'Supplier {supplier_id} not found.')

        old_snapshot = AuditService.snapshot(supplier)
        if fields.get('min_order') is not None:
            fields['min_order'] = to_quantity(fields['min_order'], label='min_order', places=2)
            if fields['min_order'] < 0:
                raise ValidationError(detail='min_order must be zero or positive.')

        for name in ('name', 'delivery_days', 'min_order'):
            if fields.get(name) is not None:
                setattr(supplier, name, fields[name])
        supplier.updated_by = _actor_or_none(actor)
        supplier.full_clean(validate_constraints=False)
        supplier.save()

        if products is not None:
            _replace_catalog(supplier, products, actor=actor)

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_UPDATE,
            model_name='Supplier',
            object_id=supplier.pk,
            old_values=old_snapshot,
            new_values=AuditService.snapshot(supplier),
        )
        return supplier

    @staticmethod
    @transaction.atomic
    def delete_supplier(*, supplier_id, actor=None) -> None:
        """Hard delete. Existing orders keep their supplier_name snapshot."""
        supplier = SupplierService.get_supplier(supplier_id)
        snapshot = AuditService.snapshot(supplier)
        supplier.delete()
        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_DELETE,
            model_name='Supplier',
            object_id=str(supplier_id),
            old_values=snapshot,
        )
        logger.info('Supplier %s deleted.', supplier_id)

    @staticmethod
    def get_offer(supplier_id, product_id) -> SupplierProduct | None:
        """The supplier's catalog line for a product, or None."""
        return (
            SupplierProduct.objects
            .select_related('supplier', 'product')
            .filter(supplier_id=supplier_id, product_id=product_id)
            .first()
        )

    @staticmethod
    def compare_prices(product_id):
        """All offers for a product, cheapest first."""
        return (
            SupplierProduct.objects
            .select_related('supplier')
            .filter(product_id=product_id)
            .order_by('price', 'supplier__name')
        )

    @staticmethod
    def cheapest_offer(product_id) -> SupplierProduct | None:
        return SupplierService.compare_prices(product_id).first()
