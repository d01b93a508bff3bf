"""
Tests — Supplier and SupplierProduct models.

@file suppliers/tests/test_models.py
"""

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from tests.factories import ProductFactory, SupplierFactory, SupplierProductFactory


pytestmark = pytest.mark.django_db


class TestSupplier:

    def test_str(self):
        assert str(SupplierFactory(name='Metro')) == 'Metro'

    def test_catalog_related_name(self):
        supplier = SupplierFactory()
        SupplierProductFactory.create_batch(2, supplier=supplier)
        assert supplier.catalog.count() == 2


class TestSupplierProduct:

    def test_one_mapping_per_product(self):
        supplier = SupplierFactory()
        product = ProductFactory()
        SupplierProductFactory(supplier=supplier, product=product)
        with pytest.raises(IntegrityError), transaction.atomic():
            SupplierProductFactory(supplier=supplier, product=product)

    def test_negative_price_rejected(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            SupplierProductFactory(price=Decimal('-1'))
