"""
Stock — Service Layer

Ledger-backed stock bookkeeping: StockLedger.record (append-only
insert), StockService (locked read-modify-write of Product.current_stock
plus its ledger entry) and ReconciliationService (bulk corrections from
sales exports and physical inventory counts).

Every change to a product's stock writes exactly one StockMovement in
the same transaction. INSERT ONLY: movements are never updated or deleted.

@file stock/services.py
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from django.db import transaction

from core.constants import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS
from core.exceptions import NotFoundError, ValidationError
from products.models import Product

from .models import StockImportRecord, StockMovement

logger = logging.getLogger('econome')

STOCK_FIELDS = frozenset({'current_stock', 'updated_by', 'updated_at'})


def to_quantity(value, *, label: str = 'quantity', places: int = QUANTITY_DECIMAL_PLACES) -> Decimal:
    """Coerce an incoming quantity to a quantized Decimal, rejecting NaN / garbage."""
    if isinstance(value, bool):
        raise ValidationError(detail=f'Invalid {label}: {value!r}.')
    try:
        quantity = Decimal(str(value))
        if not quantity.is_finite():
            raise ValueError(value)
        quantity = quantity.quantize(Decimal(1).scaleb(-places))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(detail=f'Invalid {label}: {value!r}.')
    # Stored columns hold QUANTITY_MAX_DIGITS digits in total.
    if quantity.adjusted() >= QUANTITY_MAX_DIGITS - places:
        raise ValidationError(detail=f'{label} is too large: {value!r}.')
    return quantity


@dataclass
class ReconciliationResult:
    updated: list = field(default_factory=list)
    skipped: list = field(default_factory=list)
    record: StockImportRecord | None = None


class StockLedger:
    """Append-only log of stock-quantity changes."""

    @staticmethod
    def record(
        *,
        product: Product,
        movement_type: str,
        quantity: Decimal,
        previous_stock: Decimal,
        new_stock: Decimal,
        reference_id: str = '',
        notes: str = '',
        actor=None,
    ) -> StockMovement:
        if movement_type not in StockMovement.MovementType.values:
            raise ValidationError(detail=f'Invalid movement_type: {movement_type}')
        if new_stock < 0:
            raise ValidationError(detail='Stock cannot become negative.')
        if new_stock - previous_stock != quantity:
            raise ValidationError(
                detail=(
                    f'Movement delta {quantity} does not match '
                    f'{previous_stock} -> {new_stock}.'
                ),
            )

        movement = StockMovement(
            product=product,
            movement_type=movement_type,
            quantity=quantity,
            previous_stock=previous_stock,
            new_stock=new_stock,
            reference_id=reference_id or '',
            notes=notes or '',
            created_by=actor if getattr(actor, 'is_authenticated', False) else None,
        )
        movement.save()
        logger.info(
            'StockMovement %s %s qty=%s product=%s %s->%s ref=%s',
            movement_type, movement.pk, quantity, product.pk,
            previous_stock, new_stock, reference_id or '-',
        )
        return movement

    @staticmethod
    def history(product_id):
        """Movements for a product in chronological (replay) order."""
        if not Product.objects.filter(pk=product_id).exists():
            raise NotFoundError(detail='Product not found.')
        return StockMovement.objects.filter(product_id=product_id).order_by('id')


class StockService:
    """Locked stock updates, each paired with its ledger entry."""

    @staticmethod
    def lock_product(product_id) -> Product:
        try:
            return Product.objects.select_for_update().get(pk=product_id, is_deleted=False)
        except Product.DoesNotExist:
            raise NotFoundError(detail=f'Product {product_id} not found.')

    @staticmethod
    def apply_change(
        *,
        product: Product,
        new_stock: Decimal,
        movement_type: str,
        actor=None,
        reference_id: str = '',
        notes: str = '',
    ) -> StockMovement:
        """
        Set product.current_stock to new_stock and append the matching
        ledger entry. The caller must hold the row lock (lock_product)
        inside an atomic block.
        """
        previous_stock = product.current_stock
        if new_stock < 0:
            raise ValidationError(detail=f'Stock of {product.name} cannot become negative.')
        product.current_stock = new_stock
        product.updated_by = actor if getattr(actor, 'is_authenticated', False) else None
        product.save(update_fields=sorted(STOCK_FIELDS))
        return StockLedger.record(
            product=product,
            movement_type=movement_type,
            quantity=new_stock - previous_stock,
            previous_stock=previous_stock,
            new_stock=new_stock,
            reference_id=reference_id,
            notes=notes,
            actor=actor,
        )

    @staticmethod
    @transaction.atomic
    def adjust_stock(*, product_id, new_stock, actor=None, notes: str = 'Manual adjustment') -> Product:
        """Manual overwrite of a product's stock (ADJUSTMENT)."""
        new_stock = to_quantity(new_stock, label='new_stock')
        if new_stock < 0:
            raise ValidationError(detail='new_stock must be zero or positive.')
        product = StockService.lock_product(product_id)
        StockService.apply_change(
            product=product,
            new_stock=new_stock,
            movement_type=StockMovement.MovementType.ADJUSTMENT,
            actor=actor,
            notes=notes,
        )
        return product


class ReconciliationService:
    """Bulk stock corrections from sales reports and inventory counts."""

    @staticmethod
    def _find_by_name(name: str) -> Product | None:
        return Product.objects.select_for_update().filter(name=name, is_deleted=False).first()

    @staticmethod
    @transaction.atomic
    def apply_sales(*, lines: list[dict], actor=None) -> ReconciliationResult:
        """
        Decrement stock for each sold product, matched by exact name.

        Stock is clamped at zero and the SALE entry records the effective
        change, so ledger balances stay continuous; the requested quantity
        is kept in the notes.
        """
        parsed = []
        for line in lines:
            sold = to_quantity(line.get('quantity_sold'), label='quantity_sold')
            if sold < 0:
                raise ValidationError(detail='quantity_sold must be zero or positive.')
            parsed.append((line.get('product_name', ''), sold))

        result = ReconciliationResult()
        for name, sold in parsed:
            product = ReconciliationService._find_by_name(name)
            if product is None:
                logger.warning('Sales import: product not found: %s', name)
                result.skipped.append(name)
                continue
            if sold == 0:
                continue
            new_stock = max(Decimal('0'), product.current_stock - sold)
            StockService.apply_change(
                product=product,
                new_stock=new_stock,
                movement_type=StockMovement.MovementType.SALE,
                actor=actor,
                notes=f'Sale: {sold} {product.unit}',
            )
            result.updated.append(product)

        logger.info(
            'Sales applied: %d products updated, %d lines skipped.',
            len(result.updated), len(result.skipped),
        )
        return result

    @staticmethod
    @transaction.atomic
    def apply_inventory_import(*, file_name: str, updates: list[dict], actor=None) -> ReconciliationResult:
        """
        Overwrite stock levels from a physical count, matched by exact
        name. Writes one ADJUSTMENT per matched product and one
        StockImportRecord for the batch.
        """
        parsed = []
        for update in updates:
            new_stock = to_quantity(update.get('new_stock'), label='new_stock')
            if new_stock < 0:
                raise ValidationError(detail='new_stock must be zero or positive.')
            parsed.append((update.get('product_name', ''), new_stock))

        result = ReconciliationResult()
        for name, new_stock in parsed:
            product = ReconciliationService._find_by_name(name)
            if product is None:
                logger.warning('Inventory import %s: product not found: %s', file_name, name)
                result.skipped.append(name)
                continue
            StockService.apply_change(
                product=product,
                new_stock=new_stock,
                movement_type=StockMovement.MovementType.ADJUSTMENT,
                actor=actor,
                notes=f'Inventory import: {file_name}',
            )
            result.updated.append(product)

        record = StockImportRecord(
            file_name=file_name,
            products_updated=len(result.updated),
        )
        if getattr(actor, 'is_authenticated', False):
            record.created_by = actor
        record.save()
        result.record = record
        logger.info(
            'Inventory import %s recorded: %d products updated, %d lines skipped.',
            file_name, len(result.updated), len(result.skipped),
        )
        return result

    @staticmethod
    def import_history():
        return StockImportRecord.objects.order_by('-date')
