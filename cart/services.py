"""
Cart — Service Layer

Session-held purchasing cart. Lines are (product, supplier, quantity)
triples merged on (product_id, supplier_id); prices are resolved from the
supplier catalog when the cart is displayed, and the cart turns into one
DRAFT order per supplier at checkout.

@file cart/services.py
"""

import logging
from decimal import Decimal

from core.constants import CART_SESSION_KEY
from core.exceptions import NotFoundError, ValidationError
from orders.services import OrderService
from stock.services import to_quantity
from suppliers.models import Supplier
from suppliers.services import SupplierService

logger = logging.getLogger('econome')


class Cart:
    """
    Cart bound to a Django session. Quantities are stored as strings so
    the session stays JSON-serialisable.
    """

    def __init__(self, session):
        self.session = session
        self._lines = list(session.get(CART_SESSION_KEY, []))

    def __len__(self):
        return len(self._lines)

    @property
    def items(self) -> list[dict]:
        return [
            {
                'product_id': line['product_id'],
                'supplier_id': line['supplier_id'],
                'quantity': Decimal(line['quantity']),
            }
            for line in self._lines
        ]

    def _save(self) -> None:
        self.session[CART_SESSION_KEY] = self._lines
        self.session.modified = True

    def _find(self, product_id, supplier_id):
        for line in self._lines:
            if line['product_id'] == str(product_id) and line['supplier_id'] == str(supplier_id):
                return line
        return None

    def add_item(self, product_id, supplier_id, quantity) -> dict:
        quantity = to_quantity(quantity)
        if quantity <= 0:
            raise ValidationError(detail='Quantity must be positive.')
        line = self._find(product_id, supplier_id)
        if line is not None:
            line['quantity'] = str(Decimal(line['quantity']) + quantity)
        else:
            line = {
                'product_id': str(product_id),
                'supplier_id': str(supplier_id),
                'quantity': str(quantity),
            }
            self._lines.append(line)
        self._save()
        return line

    def update_quantity(self, product_id, supplier_id, new_quantity) -> dict | None:
        """Overwrite a line's quantity; zero or less removes the line."""
        new_quantity = to_quantity(new_quantity)
        line = self._find(product_id, supplier_id)
        if line is None:
            raise NotFoundError(
                detail=f'Product {product_id} from supplier {supplier_id} is not in the cart.',
            )
        if new_quantity <= 0:
            self._lines.remove(line)
            self._save()
            return None
        line['quantity'] = str(new_quantity)
        self._save()
        return line

    def add_cheapest(self, product_id, quantity) -> dict:
        """Add the product from whichever supplier lists it cheapest."""
        offer = SupplierService.cheapest_offer(product_id)
        if offer is None:
            raise NotFoundError(detail=f'No supplier lists product {product_id}.')
        return self.add_item(product_id, offer.supplier_id, quantity)

    def clear(self) -> None:
        self._lines = []
        self._save()

    def group_by_supplier(self) -> list[dict]:
        """
        Cart lines grouped per supplier with catalog prices, totals and
        a below_min_order flag. Lines whose supplier or catalog mapping
        no longer exists are left out.
        """
        groups: dict[str, dict] = {}
        for item in self.items:
            offer = SupplierService.get_offer(item['supplier_id'], item['product_id'])
            if offer is None or offer.product.is_deleted:
                logger.warning(
                    'Cart: product %s unavailable from supplier %s, hidden.',
                    item['product_id'], item['supplier_id'],
                )
                continue
            supplier: Supplier = offer.supplier
            group = groups.get(supplier.pk)
            if group is None:
                group = groups[supplier.pk] = {
                    'supplier_id': supplier.pk,
                    'supplier_name': supplier.name,
                    'delivery_days': supplier.delivery_days,
                    'min_order': supplier.min_order,
                    'lines': [],
                    'total': Decimal('0'),
                }
            line_total = item['quantity'] * offer.price
            group['lines'].append({
                'product_id': offer.product_id,
                'product_name': offer.product.name,
                'unit': offer.product.unit,
                'quantity': item['quantity'],
                'unit_price': offer.price,
                'line_total': line_total,
            })
            group['total'] += line_total

        for group in groups.values():
            group['below_min_order'] = group['total'] < group['min_order']
        return list(groups.values())

    def checkout(self, actor=None) -> list:
        """
        Turn the cart into DRAFT orders, then empty it. When no line
        resolves to an order the cart is left untouched.
        """
        if not self._lines:
            raise ValidationError(detail='The cart is empty.')
        orders = OrderService.create_from_cart(cart_items=self.items, actor=actor)
        if not orders:
            raise ValidationError(
                detail='None of the cart lines is available from its supplier; no order was created.',
            )
        self.clear()
        logger.info('Cart checked out into %d orders.', len(orders))
        return orders
