"""
Tests — Product model: derived flags, constraints.

@file products/tests/test_models.py
"""

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from products.models import Product
from tests.factories import ProductFactory


pytestmark = pytest.mark.django_db


class TestProduct:

    def test_str(self):
        product = ProductFactory(name='Sel de Guérande', unit='kg')
        assert str(product) == 'Sel de Guérande (kg)'

    def test_below_minimum_is_strict(self):
        assert ProductFactory(current_stock=Decimal('4'), min_stock=Decimal('5')).is_below_minimum
        assert not ProductFactory(current_stock=Decimal('2'), min_stock=Decimal('2')).is_below_minimum

    def test_stock_value(self):
        product = ProductFactory(current_stock=Decimal('4'), average_cost=Decimal('26'))
        assert product.stock_value == Decimal('104')

    def test_live_names_are_unique(self):
        ProductFactory(name='Côte de Boeuf')
        with pytest.raises(IntegrityError), transaction.atomic():
            ProductFactory(name='Côte de Boeuf')

    def test_deleted_name_can_be_reused(self):
        old = ProductFactory(name='Côte de Boeuf')
        old.soft_delete()
        ProductFactory(name='Côte de Boeuf')
        assert Product.objects.filter(name='Côte de Boeuf').count() == 2

    def test_negative_stock_rejected_by_database(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            ProductFactory(current_stock=Decimal('-1'))
