"""
Tests — Product API endpoints.

@file products/tests/test_views.py
"""

from decimal import Decimal

import pytest
from django.core.management import call_command
from django.urls import reverse

from orders.models import Order
from products.models import Product
from stock.models import StockMovement
from suppliers.models import Supplier, SupplierProduct
from tests.factories import OrderFactory, OrderItemFactory, ProductFactory


pytestmark = pytest.mark.django_db


class TestProductAPI:

    def test_list_requires_auth(self, api_client):
        resp = api_client.get(reverse('api-v1:products:product-list'))
        assert resp.status_code == 401

    def test_list_hides_deleted(self, authenticated_client):
        ProductFactory.create_batch(2)
        ProductFactory().soft_delete()
        resp = authenticated_client.get(reverse('api-v1:products:product-list'))
        assert resp.status_code == 200
        assert len(resp.data['results']) == 2

    def test_envelope(self, authenticated_client):
        ProductFactory()
        resp = authenticated_client.get(reverse('api-v1:products:product-list'))
        body = resp.json()
        assert body['success'] is True
        assert body['meta']['count'] == 1
        assert len(body['data']) == 1

    def test_create(self, authenticated_client):
        resp = authenticated_client.post(
            reverse('api-v1:products:product-list'),
            {
                'id': 'p2', 'name': "Huile d'olive vierge extra", 'family': 'Épicerie',
                'unit': 'L', 'current_stock': '1', 'min_stock': '3', 'average_cost': '11.75',
            },
            format='json',
        )
        assert resp.status_code == 201
        assert resp.data['id'] == 'p2'
        assert resp.data['is_below_minimum'] is True
        assert StockMovement.objects.filter(product_id='p2').count() == 1

    def test_create_duplicate_id_conflicts(self, authenticated_client):
        ProductFactory(id='p1')
        resp = authenticated_client.post(
            reverse('api-v1:products:product-list'),
            {'id': 'p1', 'name': 'Autre', 'unit': 'kg'},
            format='json',
        )
        assert resp.status_code == 409
        assert resp.data['code'] == 'CONFLICT'

    def test_create_negative_rejected(self, authenticated_client):
        resp = authenticated_client.post(
            reverse('api-v1:products:product-list'),
            {'name': 'Thym', 'unit': 'botte', 'min_stock': '-2'},
            format='json',
        )
        assert resp.status_code == 400

    def test_partial_update(self, authenticated_client):
        product = ProductFactory(min_stock=Decimal('5'))
        resp = authenticated_client.patch(
            reverse('api-v1:products:product-detail', kwargs={'pk': product.pk}),
            {'min_stock': '12'},
            format='json',
        )
        assert resp.status_code == 200
        assert resp.data['min_stock'] == Decimal('12.000')

    def test_delete_is_soft(self, authenticated_client):
        product = ProductFactory()
        resp = authenticated_client.delete(reverse('api-v1:products:product-detail', kwargs={'pk': product.pk}))
        assert resp.status_code == 204
        assert Product.objects.get(pk=product.pk).is_deleted

    def test_delete_blocked_by_open_order(self, authenticated_client):
        product = ProductFactory()
        OrderItemFactory(product=product, order=OrderFactory(status=Order.StatusChoices.DRAFT))
        resp = authenticated_client.delete(reverse('api-v1:products:product-detail', kwargs={'pk': product.pk}))
        assert resp.status_code == 409

    def test_low_stock(self, authenticated_client):
        low = ProductFactory(current_stock=Decimal('1'), min_stock=Decimal('3'))
        ProductFactory(current_stock=Decimal('3'), min_stock=Decimal('3'))
        resp = authenticated_client.get(reverse('api-v1:products:product-low-stock'))
        assert resp.status_code == 200
        assert [p['id'] for p in resp.data] == [low.pk]

    def test_adjust_stock_and_movements(self, authenticated_client):
        product = ProductFactory(current_stock=Decimal('10'))
        resp = authenticated_client.patch(
            reverse('api-v1:products:product-stock', kwargs={'pk': product.pk}),
            {'new_stock': '7'},
            format='json',
        )
        assert resp.status_code == 200
        assert resp.data['current_stock'] == Decimal('7.000')

        resp = authenticated_client.get(reverse('api-v1:products:product-movements', kwargs={'pk': product.pk}))
        assert resp.status_code == 200
        assert len(resp.data) == 1
        assert resp.data[0]['quantity'] == Decimal('-3.000')

    def test_adjust_stock_negative_rejected(self, authenticated_client):
        product = ProductFactory()
        resp = authenticated_client.patch(
            reverse('api-v1:products:product-stock', kwargs={'pk': product.pk}),
            {'new_stock': '-1'},
            format='json',
        )
        assert resp.status_code == 400


class TestSeedDemo:

    def test_seed_is_idempotent(self):
        call_command('seed_demo')
        call_command('seed_demo')
        assert Product.objects.count() == 7
        assert Supplier.objects.count() == 4
        assert SupplierProduct.objects.filter(supplier_id='s2').count() == 5
        assert Product.objects.get(pk='p6').current_stock == Decimal('0.8')
        assert StockMovement.objects.count() == 7
