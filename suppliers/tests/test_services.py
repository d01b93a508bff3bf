"""
Tests — SupplierService: CRUD, catalog replacement, price comparison.

@file suppliers/tests/test_services.py
"""

from decimal import Decimal

import pytest

from core.exceptions import ConflictError, NotFoundError, ValidationError
from core.models import AuditLog
from orders.models import Order
from suppliers.models import Supplier, SupplierProduct
from suppliers.services import SupplierService
from tests.factories import OrderFactory, ProductFactory, SupplierFactory, SupplierProductFactory


pytestmark = pytest.mark.django_db


class TestCreateSupplier:

    def test_create_with_catalog(self):
        p1 = ProductFactory(id='p1')
        p3 = ProductFactory(id='p3')
        supplier = SupplierService.create_supplier(
            id='s1', name='Le Pêcheur Local', delivery_days='Mardi, Vendredi', min_order='50',
            products=[
                {'product_id': 'p1', 'supplier_sku': 'SAL-LR-01', 'price': '25'},
                {'product_id': 'p3', 'supplier_sku': 'MAQ-FIL-01', 'price': 12},
            ],
        )
        assert supplier.pk == 's1'
        assert supplier.min_order == Decimal('50')
        catalog = list(supplier.catalog.order_by('position'))
        assert [line.product for line in catalog] == [p1, p3]
        assert catalog[0].price == Decimal('25')
        assert AuditLog.objects.filter(model_name='Supplier', object_id='s1', action='CREATE').exists()

    def test_duplicate_id_conflicts(self):
        SupplierFactory(id='s1')
        with pytest.raises(ConflictError):
            SupplierService.create_supplier(id='s1', name='Metro')

    def test_unknown_product_in_catalog(self):
        with pytest.raises(NotFoundError):
            SupplierService.create_supplier(name='Metro', products=[{'product_id': 'nope', 'price': 1}])
        assert not Supplier.objects.filter(name='Metro').exists()

    def test_duplicate_product_in_catalog(self):
        ProductFactory(id='p1')
        with pytest.raises(ValidationError):
            SupplierService.create_supplier(
                name='Metro',
                products=[{'product_id': 'p1', 'price': 1}, {'product_id': 'p1', 'price': 2}],
            )

    def test_negative_min_order(self):
        with pytest.raises(ValidationError):
            SupplierService.create_supplier(name='Metro', min_order=-5)


class TestUpdateSupplier:

    def test_update_replaces_catalog(self):
        supplier = SupplierFactory()
        SupplierProductFactory(supplier=supplier)
        new_product = ProductFactory()
        SupplierService.update_supplier(
            supplier_id=supplier.pk,
            name='Metro Cash',
            products=[{'product_id': new_product.pk, 'price': '3.10'}],
        )
        supplier.refresh_from_db()
        assert supplier.name == 'Metro Cash'
        assert list(supplier.catalog.values_list('product_id', flat=True)) == [new_product.pk]

    def test_update_without_products_keeps_catalog(self):
        supplier = SupplierFactory()
        SupplierProductFactory.create_batch(2, supplier=supplier)
        SupplierService.update_supplier(supplier_id=supplier.pk, delivery_days='Lundi')
        assert supplier.catalog.count() == 2

    def test_unknown_supplier(self):
        with pytest.raises(NotFoundError):
            SupplierService.update_supplier(supplier_id='missing', name='x')


class TestDeleteSupplier:

    def test_hard_delete_keeps_order_snapshot(self):
        supplier = SupplierFactory(name='Fumoir & Co')
        SupplierProductFactory(supplier=supplier)
        order = OrderFactory(supplier=supplier, status=Order.StatusChoices.SENT)
        SupplierService.delete_supplier(supplier_id=supplier.pk)
        assert not Supplier.objects.filter(pk=supplier.pk).exists()
        assert not SupplierProduct.objects.filter(supplier_id=supplier.pk).exists()
        order.refresh_from_db()
        assert order.supplier is None
        assert order.supplier_name == 'Fumoir & Co'


class TestPriceLookups:

    def test_compare_prices_cheapest_first(self):
        product = ProductFactory()
        metro = SupplierProductFactory(product=product, price=Decimal('27'))
        local = SupplierProductFactory(product=product, price=Decimal('25'))
        assert list(SupplierService.compare_prices(product.pk)) == [local, metro]
        assert SupplierService.cheapest_offer(product.pk) == local

    def test_get_offer(self):
        offer = SupplierProductFactory()
        assert SupplierService.get_offer(offer.supplier_id, offer.product_id) == offer
        assert SupplierService.get_offer(offer.supplier_id, 'other') is None
