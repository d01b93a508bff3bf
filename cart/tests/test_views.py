"""
Tests — Cart API endpoints.

@file cart/tests/test_views.py
"""

from decimal import Decimal

import pytest
from django.urls import reverse

from orders.models import Order
from tests.factories import ProductFactory, SupplierFactory, SupplierProductFactory


pytestmark = pytest.mark.django_db

CART_URL = 'api-v1:cart:cart'
ITEMS_URL = 'api-v1:cart:cart-items'
CHECKOUT_URL = 'api-v1:cart:cart-checkout'


@pytest.fixture
def catalog():
    local = SupplierFactory(id='s1', name='Le Pêcheur Local', min_order=Decimal('50'))
    metro = SupplierFactory(id='s2', name='Metro', min_order=Decimal('100'))
    salmon = ProductFactory(id='p1')
    SupplierProductFactory(supplier=local, product=salmon, price=Decimal('25'))
    SupplierProductFactory(supplier=metro, product=salmon, price=Decimal('27'))


class TestCartAPI:

    def test_requires_auth(self, api_client):
        assert api_client.get(reverse(CART_URL)).status_code == 401

    def test_empty_cart(self, authenticated_client):
        resp = authenticated_client.get(reverse(CART_URL))
        assert resp.status_code == 200
        assert resp.data == {'suppliers': [], 'item_count': 0, 'total': Decimal('0')}

    def test_add_merge_and_view(self, authenticated_client, catalog):
        url = reverse(ITEMS_URL)
        authenticated_client.post(url, {'product_id': 'p1', 'supplier_id': 's2', 'quantity': '1'}, format='json')
        resp = authenticated_client.post(
            url, {'product_id': 'p1', 'supplier_id': 's2', 'quantity': '2'}, format='json',
        )
        assert resp.status_code == 201
        assert resp.data['item_count'] == 1
        group = resp.data['suppliers'][0]
        assert group['lines'][0]['quantity'] == Decimal('3')
        assert group['total'] == Decimal('81')
        assert group['below_min_order'] is True

    def test_add_without_supplier_picks_cheapest(self, authenticated_client, catalog):
        resp = authenticated_client.post(reverse(ITEMS_URL), {'product_id': 'p1', 'quantity': '2'}, format='json')
        assert resp.status_code == 201
        assert resp.data['suppliers'][0]['supplier_id'] == 's1'

    def test_update_to_zero_removes(self, authenticated_client, catalog):
        authenticated_client.post(
            reverse(ITEMS_URL), {'product_id': 'p1', 'supplier_id': 's1', 'quantity': '2'}, format='json',
        )
        resp = authenticated_client.patch(
            reverse(ITEMS_URL), {'product_id': 'p1', 'supplier_id': 's1', 'quantity': '0'}, format='json',
        )
        assert resp.status_code == 200
        assert resp.data['item_count'] == 0

    def test_update_missing_line(self, authenticated_client):
        resp = authenticated_client.patch(
            reverse(ITEMS_URL), {'product_id': 'p1', 'supplier_id': 's1', 'quantity': '2'}, format='json',
        )
        assert resp.status_code == 404

    def test_checkout(self, authenticated_client, catalog):
        url = reverse(ITEMS_URL)
        authenticated_client.post(url, {'product_id': 'p1', 'supplier_id': 's1', 'quantity': '2'}, format='json')
        authenticated_client.post(url, {'product_id': 'p1', 'supplier_id': 's2', 'quantity': '1'}, format='json')

        resp = authenticated_client.post(reverse(CHECKOUT_URL))
        assert resp.status_code == 201
        assert len(resp.data) == 2
        assert Order.objects.filter(status=Order.StatusChoices.DRAFT).count() == 2
        assert authenticated_client.get(reverse(CART_URL)).data['item_count'] == 0

    def test_clear(self, authenticated_client, catalog):
        authenticated_client.post(
            reverse(ITEMS_URL), {'product_id': 'p1', 'supplier_id': 's1', 'quantity': '2'}, format='json',
        )
        assert authenticated_client.delete(reverse(CART_URL)).status_code == 204
        assert authenticated_client.get(reverse(CART_URL)).data['item_count'] == 0

    def test_checkout_unavailable_lines_kept(self, authenticated_client, catalog):
        SupplierFactory(id='s3')
        authenticated_client.post(
            reverse(ITEMS_URL), {'product_id': 'p1', 'supplier_id': 's3', 'quantity': '2'}, format='json',
        )
        resp = authenticated_client.post(reverse(CHECKOUT_URL))
        assert resp.status_code == 400
        assert not Order.objects.exists()
        assert authenticated_client.get(reverse(CART_URL)).data['item_count'] == 1
