"""
Tests — Order and OrderItem models.

@file orders/tests/test_models.py
"""

import re
from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from orders.models import Order, generate_order_id
from tests.factories import OrderFactory, OrderItemFactory, ProductFactory


pytestmark = pytest.mark.django_db


def test_generated_order_id_format():
    assert re.fullmatch(r'ORD-\d{14}-[0-9A-F]{6}', generate_order_id())


class TestOrder:

    def test_default_id_and_status(self):
        order = OrderFactory()
        assert order.pk.startswith('ORD-')
        assert order.status == Order.StatusChoices.DRAFT

    @pytest.mark.parametrize('status, closed', [
        (Order.StatusChoices.DRAFT, False),
        (Order.StatusChoices.SENT, False),
        (Order.StatusChoices.PARTIALLY_RECEIVED, False),
        (Order.StatusChoices.FULLY_RECEIVED, True),
        (Order.StatusChoices.CANCELLED, True),
    ])
    def test_is_closed(self, status, closed):
        assert OrderFactory.build(status=status).is_closed is closed


class TestOrderItem:

    def test_line_total_and_remaining(self):
        item = OrderItemFactory(quantity=Decimal('10'), received_quantity=Decimal('6'), price_per_unit=Decimal('25'))
        assert item.line_total == Decimal('250')
        assert item.remaining_quantity == Decimal('4')

    def test_product_once_per_order(self):
        order = OrderFactory()
        product = ProductFactory()
        OrderItemFactory(order=order, product=product)
        with pytest.raises(IntegrityError), transaction.atomic():
            OrderItemFactory(order=order, product=product)

    def test_quantity_must_be_positive(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            OrderItemFactory(quantity=Decimal('0'))

    def test_received_cannot_exceed_ordered(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            OrderItemFactory(quantity=Decimal('10'), received_quantity=Decimal('11'))

    def test_items_cascade_with_order(self):
        item = OrderItemFactory()
        item.order.delete()
        assert not type(item).objects.filter(pk=item.pk).exists()
