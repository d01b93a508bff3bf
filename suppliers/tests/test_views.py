"""
Tests — Supplier API endpoints.

@file suppliers/tests/test_views.py
"""

from decimal import Decimal

import pytest
from django.urls import reverse

from suppliers.models import Supplier
from tests.factories import ProductFactory, SupplierFactory, SupplierProductFactory


pytestmark = pytest.mark.django_db


class TestSupplierAPI:

    def test_list_requires_auth(self, api_client):
        resp = api_client.get(reverse('api-v1:suppliers:supplier-list'))
        assert resp.status_code == 401

    def test_list_with_catalog(self, authenticated_client):
        offer = SupplierProductFactory()
        resp = authenticated_client.get(reverse('api-v1:suppliers:supplier-list'))
        assert resp.status_code == 200
        supplier = resp.data['results'][0]
        assert supplier['products'][0]['product_id'] == offer.product_id

    def test_create(self, authenticated_client):
        ProductFactory(id='p4')
        resp = authenticated_client.post(
            reverse('api-v1:suppliers:supplier-list'),
            {
                'id': 's4', 'name': 'Fumoir & Co', 'delivery_days': 'Lundi', 'min_order': '0',
                'products': [{'product_id': 'p4', 'supplier_sku': 'FUM-HETRE-10', 'price': '20'}],
            },
            format='json',
        )
        assert resp.status_code == 201
        assert resp.data['id'] == 's4'
        assert resp.data['products'][0]['price'] == Decimal('20.00')

    def test_update_catalog(self, authenticated_client):
        supplier = SupplierFactory()
        SupplierProductFactory(supplier=supplier)
        product = ProductFactory()
        resp = authenticated_client.put(
            reverse('api-v1:suppliers:supplier-detail', kwargs={'pk': supplier.pk}),
            {'name': supplier.name, 'products': [{'product_id': product.pk, 'price': '4.20'}]},
            format='json',
        )
        assert resp.status_code == 200
        assert [p['product_id'] for p in resp.data['products']] == [product.pk]

    def test_delete(self, authenticated_client):
        supplier = SupplierFactory()
        resp = authenticated_client.delete(reverse('api-v1:suppliers:supplier-detail', kwargs={'pk': supplier.pk}))
        assert resp.status_code == 204
        assert not Supplier.objects.filter(pk=supplier.pk).exists()

    def test_compare(self, authenticated_client):
        product = ProductFactory()
        SupplierProductFactory(product=product, price=Decimal('12'), supplier=SupplierFactory(name='Metro'))
        SupplierProductFactory(product=product, price=Decimal('11.50'), supplier=SupplierFactory(name='Épices du Monde'))
        resp = authenticated_client.get(
            reverse('api-v1:suppliers:supplier-compare', kwargs={'product_id': product.pk}),
        )
        assert resp.status_code == 200
        assert [row['supplier_name'] for row in resp.data] == ['Épices du Monde', 'Metro']

    def test_compare_unknown_product(self, authenticated_client):
        resp = authenticated_client.get(
            reverse('api-v1:suppliers:supplier-compare', kwargs={'product_id': 'nope'}),
        )
        assert resp.status_code == 404
