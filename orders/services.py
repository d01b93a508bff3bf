"""
Orders — Service Layer

Purchase order lifecycle: create (DRAFT, from the cart or explicitly),
send, confirm, cancel, receive (partial or full, with stock increments
and ledger entries) and the administrative hard delete.
State machine enforced here.

@file orders/services.py
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction

from core.constants import (
    AMOUNT_DECIMAL_PLACES,
    AUDIT_ACTION_CREATE,
    AUDIT_ACTION_DELETE,
    AUDIT_ACTION_STATUS_CHANGE,
)
from core.exceptions import ConflictError, InvalidStateError, NotFoundError, ValidationError
from core.services import AuditService
from products.models import Product
from stock.models import StockMovement
from stock.services import StockService, to_quantity
from suppliers.models import Supplier
from suppliers.services import SupplierService

from .models import Order, OrderItem

logger = logging.getLogger('econome')

Status = Order.StatusChoices

# Valid status transitions: from_status -> set of allowed to_status
ORDER_TRANSITIONS = {
    Status.DRAFT: {
        Status.SENT,
        Status.CANCELLED,
        Status.PARTIALLY_RECEIVED,
        Status.FULLY_RECEIVED,
    },
    Status.SENT: {
        Status.CONFIRMED,
        Status.CANCELLED,
        Status.PARTIALLY_RECEIVED,
        Status.FULLY_RECEIVED,
    },
    Status.CONFIRMED: {Status.PARTIALLY_RECEIVED, Status.FULLY_RECEIVED},
    Status.PARTIALLY_RECEIVED: {Status.PARTIALLY_RECEIVED, Status.FULLY_RECEIVED},
    Status.FULLY_RECEIVED: set(),
    Status.CANCELLED: set(),
}


def _assert_transition(order: Order, new_status: str) -> None:
    allowed = ORDER_TRANSITIONS.get(order.status, set())
    if new_status not in allowed:
        raise InvalidStateError(
            detail=f'Cannot transition order {order.pk} from {order.status} to {new_status}.',
        )


def _change_status(order: Order, new_status: str, actor=None) -> Order:
    _assert_transition(order, new_status)
    old_status = order.status
    order.status = new_status
    order.updated_by = actor if getattr(actor, 'is_authenticated', False) else None
    order.save(update_fields=['status', 'updated_by', 'updated_at'])
    AuditService.log(
        actor=actor,
        action=AUDIT_ACTION_STATUS_CHANGE,
        model_name='Order',
        object_id=order.pk,
        old_values={'status': old_status},
        new_values={'status': order.status},
    )
    logger.info('Order %s: %s -> %s', order.pk, old_status, order.status)
    return order


def _lock_order(order_id) -> Order:
    try:
        return Order.objects.select_for_update().get(pk=order_id)
    except Order.DoesNotExist:
        raise NotFoundError(detail=f'Order {order_id} not found.')


def _positive_quantity(value) -> Decimal:
    quantity = to_quantity(value)
    if quantity <= 0:
        raise ValidationError(detail=f'Quantity must be positive, got {value}.')
    return quantity


def _build_order(*, supplier: Supplier, lines: list[dict], actor=None, order_id=None) -> Order:
    """
    Persist a DRAFT order and its items. Each line carries product,
    product_name, unit, quantity and price_per_unit.
    """
    creator = actor if getattr(actor, 'is_authenticated', False) else None
    order = Order(
        supplier=supplier,
        supplier_name=supplier.name,
        status=Status.DRAFT,
        created_by=creator,
    )
    if order_id:
        order.id = order_id

    total = Decimal('0')
    items = []
    for position, line in enumerate(lines):
        items.append(OrderItem(
            order=order,
            product=line['product'],
            product_name=line['product_name'],
            unit=line['unit'],
            quantity=line['quantity'],
            price_per_unit=line['price_per_unit'],
            position=position,
            created_by=creator,
        ))
        total += line['quantity'] * line['price_per_unit']
    order.total = total.quantize(Decimal(1).scaleb(-AMOUNT_DECIMAL_PLACES), rounding=ROUND_HALF_UP)
    order.save()
    OrderItem.objects.bulk_create(items)

    AuditService.log(
        actor=actor,
        action=AUDIT_ACTION_CREATE,
        model_name='Order',
        object_id=order.pk,
        new_values={
            'supplier': supplier.pk,
            'status': order.status,
            'total': str(order.total),
            'items': len(items),
        },
    )
    logger.info(
        'Order %s created for %s: %d items, total %s.',
        order.pk, supplier.name, len(items), order.total,
    )
    return order


class OrderService:
    """Purchase order lifecycle and receipt bookkeeping."""

    @staticmethod
    def get_order(order_id) -> Order:
        try:
            return Order.objects.prefetch_related('items').get(pk=order_id)
        except Order.DoesNotExist:
            raise NotFoundError(detail=f'Order {order_id} not found.')

    @staticmethod
    @transaction.atomic
    def create_from_cart(*, cart_items: list[dict], actor=None) -> list[Order]:
        """
        One DRAFT order per supplier. Items whose product, supplier or
        catalog mapping cannot be resolved are skipped with a warning;
        a supplier left without items gets no order.
        """
        groups: dict[str, list] = {}
        for item in cart_items:
            quantity = _positive_quantity(item.get('quantity'))
            groups.setdefault(str(item.get('supplier_id')), []).append(
                (str(item.get('product_id')), quantity),
            )

        orders = []
        for supplier_id, rows in groups.items():
            supplier = Supplier.objects.filter(pk=supplier_id).first()
            if supplier is None:
                logger.warning(
                    'Cart checkout: supplier %s not found, %d items skipped.',
                    supplier_id, len(rows),
                )
                continue

            merged: dict[str, dict] = {}
            for product_id, quantity in rows:
                if product_id in merged:
                    merged[product_id]['quantity'] += quantity
                    continue
                offer = SupplierService.get_offer(supplier_id, product_id)
                if offer is None or offer.product.is_deleted:
                    logger.warning(
                        'Cart checkout: product %s unavailable from supplier %s, skipped.',
                        product_id, supplier_id,
                    )
                    continue
                merged[product_id] = {
                    'product': offer.product,
                    'product_name': offer.product.name,
                    'unit': offer.product.unit,
                    'quantity': quantity,
                    'price_per_unit': offer.price,
                }

            if not merged:
                continue
            orders.append(_build_order(supplier=supplier, lines=list(merged.values()), actor=actor))
        return orders

    @staticmethod
    @transaction.atomic
    def create_order(*, supplier_id, items: list[dict], order_id=None, actor=None) -> Order:
        """
        Explicit creation. Each item names a product_id and a quantity;
        product_name, unit and price_per_unit default to the registry and
        the supplier's catalog when omitted.
        """
        if order_id and Order.objects.filter(pk=order_id).exists():
            raise ConflictError(detail=f'Order with id {order_id} already exists.')
        supplier = SupplierService.get_supplier(supplier_id)
        if not items:
            raise ValidationError(detail='An order needs at least one item.')

        lines = []
        seen = set()
        for row in items:
            product_id = row.get('product_id')
            if product_id in seen:
                raise ValidationError(detail=f'Product {product_id} appears twice in the order.')
            seen.add(product_id)
            try:
                product = Product.objects.get(pk=product_id, is_deleted=False)
            except Product.DoesNotExist:
                raise NotFoundError(detail=f'Product {product_id} not found.')

            price = row.get('price_per_unit')
            if price is None:
                offer = SupplierService.get_offer(supplier.pk, product.pk)
                if offer is None:
                    raise ValidationError(
                        detail=f'No price given and {supplier.name} does not list {product.name}.',
                    )
                price = offer.price
            price = to_quantity(price, label='price_per_unit', places=AMOUNT_DECIMAL_PLACES)
            if price < 0:
                raise ValidationError(detail='price_per_unit must be zero or positive.')

            lines.append({
                'product': product,
                'product_name': row.get('product_name') or product.name,
                'unit': row.get('unit') or product.unit,
                'quantity': _positive_quantity(row.get('quantity')),
                'price_per_unit': price,
            })
        return _build_order(supplier=supplier, lines=lines, actor=actor, order_id=order_id)

    @staticmethod
    @transaction.atomic
    def send(*, order_id, actor=None) -> Order:
        order = _lock_order(order_id)
        if order.status != Status.DRAFT:
            raise InvalidStateError(detail=f'Only draft orders can be sent; {order.pk} is {order.status}.')
        return _change_status(order, Status.SENT, actor=actor)

    @staticmethod
    @transaction.atomic
    def confirm(*, order_id, actor=None) -> Order:
        order = _lock_order(order_id)
        if order.status != Status.SENT:
            raise InvalidStateError(detail=f'Only sent orders can be confirmed; {order.pk} is {order.status}.')
        return _change_status(order, Status.CONFIRMED, actor=actor)

    @staticmethod
    @transaction.atomic
    def cancel(*, order_id, actor=None) -> Order:
        """DRAFT or SENT only. Nothing was received, so stock is untouched."""
        order = _lock_order(order_id)
        return _change_status(order, Status.CANCELLED, actor=actor)

    @staticmethod
    @transaction.atomic
    def receive_items(*, order_id, lines: list[dict], actor=None) -> Order:
        """
        Record a (partial) delivery.

        Each line adds to the matching item's received_quantity and to
        the product's stock, with one RECEIVE_ORDER ledger entry
        referencing the order. Lines for products not on the order are
        skipped. Receiving more than was ordered is rejected and the
        whole receipt rolls back.
        """
        order = _lock_order(order_id)
        if order.is_closed:
            raise InvalidStateError(detail=f'Order {order.pk} is {order.status}; it cannot receive goods.')

        parsed = []
        for line in lines:
            quantity = to_quantity(line.get('quantity'))
            if quantity < 0:
                raise ValidationError(detail='Received quantity must be zero or positive.')
            parsed.append((str(line.get('product_id')), quantity))

        items = {
            item.product_id: item
            for item in order.items.select_for_update().filter(product__isnull=False)
        }
        received: dict[str, Decimal] = {}
        for product_id, quantity in parsed:
            item = items.get(product_id)
            if item is None:
                logger.warning('Receipt for order %s: product %s is not on the order, skipped.', order.pk, product_id)
                continue
            if quantity == 0:
                continue
            if item.received_quantity + quantity > item.quantity:
                raise ValidationError(
                    detail=(
                        f'Receiving {quantity} {item.unit} of {item.product_name} exceeds the '
                        f'ordered quantity ({item.received_quantity} of {item.quantity} already received).'
                    ),
                )
            item.received_quantity += quantity
            received[product_id] = received.get(product_id, Decimal('0')) + quantity

        if not received:
            logger.warning('Receipt for order %s applied no lines.', order.pk)
            return order

        for product_id in received:
            items[product_id].save(update_fields=['received_quantity', 'updated_at'])

        all_items = list(order.items.all())
        total_ordered = sum((item.quantity for item in all_items), Decimal('0'))
        total_received = sum((item.received_quantity for item in all_items), Decimal('0'))
        new_status = Status.FULLY_RECEIVED if total_received >= total_ordered else Status.PARTIALLY_RECEIVED
        _change_status(order, new_status, actor=actor)

        for product_id in sorted(received):
            product = StockService.lock_product(product_id)
            StockService.apply_change(
                product=product,
                new_stock=product.current_stock + received[product_id],
                movement_type=StockMovement.MovementType.RECEIVE_ORDER,
                actor=actor,
                reference_id=order.pk,
                notes=f'Received from {order.supplier_name}',
            )
        return order

    @staticmethod
    @transaction.atomic
    def delete(*, order_id, actor=None) -> None:
        """Administrative hard delete, regardless of status. Stock is not reverted."""
        order = _lock_order(order_id)
        snapshot = {'status': order.status, 'supplier_name': order.supplier_name, 'total': str(order.total)}
        order.delete()
        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_DELETE,
            model_name='Order',
            object_id=str(order_id),
            old_values=snapshot,
        )
        logger.info('Order %s deleted.', order_id)

    @staticmethod
    def movements(order_id):
        """Ledger entries written by receipts of this order."""
        if not Order.objects.filter(pk=order_id).exists():
            raise NotFoundError(detail=f'Order {order_id} not found.')
        return (
            StockMovement.objects
            .select_related('product')
            .filter(reference_id=order_id, movement_type=StockMovement.MovementType.RECEIVE_ORDER)
            .order_by('id')
        )
