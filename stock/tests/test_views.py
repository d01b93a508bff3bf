"""
Tests — Stock API endpoints: ledger listing, sales report, inventory imports.

@file stock/tests/test_views.py
"""

from decimal import Decimal

import pytest
from django.urls import reverse

from products.services import ProductService
from stock.models import StockImportRecord, StockMovement


pytestmark = pytest.mark.django_db


def _widget(stock='10'):
    return ProductService.create_product(name='Widget', unit='kg', current_stock=Decimal(stock))


class TestStockMovementAPI:

    def test_requires_auth(self, api_client):
        resp = api_client.get(reverse('api-v1:stock:movement-list'))
        assert resp.status_code == 401

    def test_list_movements(self, authenticated_client):
        product = _widget()
        resp = authenticated_client.get(reverse('api-v1:stock:movement-list'))
        assert resp.status_code == 200
        assert len(resp.data['results']) == 1
        entry = resp.data['results'][0]
        assert entry['product'] == product.pk
        assert entry['product_name'] == 'Widget'
        assert entry['movement_type'] == StockMovement.MovementType.ADJUSTMENT

    def test_filter_by_type(self, authenticated_client):
        _widget()
        url = reverse('api-v1:stock:movement-list')
        resp = authenticated_client.get(url, {'movement_type': StockMovement.MovementType.SALE})
        assert resp.status_code == 200
        assert resp.data['results'] == []

    def test_ledger_is_read_only(self, admin_client):
        resp = admin_client.post(reverse('api-v1:stock:movement-list'), {}, format='json')
        assert resp.status_code == 405


class TestSalesAPI:

    def test_apply_sales(self, authenticated_client):
        product = _widget('3')
        resp = authenticated_client.post(
            reverse('api-v1:stock:sales-list'),
            {'lines': [
                {'product_name': 'Widget', 'quantity_sold': 5},
                {'product_name': 'Unknown', 'quantity_sold': 1},
            ]},
            format='json',
        )
        assert resp.status_code == 200
        assert resp.data['skipped'] == ['Unknown']
        assert resp.data['updated'][0]['id'] == product.pk
        product.refresh_from_db()
        assert product.current_stock == Decimal('0')

    def test_negative_quantity_rejected(self, authenticated_client):
        _widget()
        resp = authenticated_client.post(
            reverse('api-v1:stock:sales-list'),
            {'lines': [{'product_name': 'Widget', 'quantity_sold': -2}]},
            format='json',
        )
        assert resp.status_code == 400
        assert resp.data['success'] is False

    def test_empty_report_rejected(self, authenticated_client):
        resp = authenticated_client.post(reverse('api-v1:stock:sales-list'), {'lines': []}, format='json')
        assert resp.status_code == 400


class TestStockImportAPI:

    def test_import_then_history(self, authenticated_client):
        product = _widget()
        url = reverse('api-v1:stock:import-list')
        resp = authenticated_client.post(
            url,
            {'file_name': 'inventaire.xlsx', 'updates': [{'product_name': 'Widget', 'new_stock': '4.5'}]},
            format='json',
        )
        assert resp.status_code == 201
        assert resp.data['import']['products_updated'] == 1
        product.refresh_from_db()
        assert product.current_stock == Decimal('4.5')

        resp = authenticated_client.get(url)
        assert resp.status_code == 200
        assert resp.data['results'][0]['file_name'] == 'inventaire.xlsx'
        assert StockImportRecord.objects.count() == 1
