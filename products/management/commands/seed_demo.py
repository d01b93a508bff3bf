"""
Products — Management Command: seed_demo

Loads the demo restaurant catalog: seven products and the four
suppliers that list them.

Usage::

    python manage.py seed_demo

Idempotent: records whose id already exists are left untouched.
Initial stock goes through the ledger as an ADJUSTMENT.

@file products/management/commands/seed_demo.py
"""

import logging
from collections import Counter
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from products.models import Product
from products.services import ProductService
from suppliers.models import Supplier
from suppliers.services import SupplierService

logger = logging.getLogger('econome')

DEMO_PRODUCTS = [
    ('p1', 'Saumon Frais Label Rouge', 'Poisson', 'kg', '4', '5', '26'),
    ('p2', "Huile d'olive vierge extra", 'Épicerie', 'L', '1', '3', '11.75'),
    ('p3', 'Filet de maquereau', 'Poisson', 'kg', '8', '5', '12'),
    ('p4', 'Bois de Hêtre (fumage)', 'Fumage', 'Sac de 10 kg', '2', '2', '20'),
    ('p5', 'Sel de Guérande', 'Épicerie', 'kg', '12', '10', '2.25'),
    ('p6', 'Poivre noir en grains', 'Épicerie', 'kg', '0.8', '1', '14.5'),
    ('p7', 'Côte de Boeuf', 'Viande', 'kg', '15', '10', '35'),
]

DEMO_SUPPLIERS = [
    {
        'id': 's1', 'name': 'Le Pêcheur Local', 'delivery_days': 'Mardi, Vendredi', 'min_order': '50',
        'products': [('p1', 'SAL-LR-01', '25'), ('p3', 'MAQ-FIL-01', '12')],
    },
    {
        'id': 's2', 'name': 'Metro', 'delivery_days': 'Tous les jours sauf Dimanche', 'min_order': '100',
        'products': [
            ('p1', 'MET-SAL-88', '27'),
            ('p2', 'MET-HUI-12', '12'),
            ('p5', 'MET-SEL-01', '2'),
            ('p6', 'MET-POI-02', '15'),
            ('p7', 'MET-BOEUF-45', '35'),
        ],
    },
    {
        'id': 's3', 'name': 'Épices du Monde', 'delivery_days': 'Mercredi', 'min_order': '30',
        'products': [('p2', 'EDM-OLIVE-IT', '11.50'), ('p5', 'EDM-SEL-FR', '2.5'), ('p6', 'EDM-POIVRE-VN', '14')],
    },
    {
        'id': 's4', 'name': 'Fumoir & Co', 'delivery_days': 'Lundi', 'min_order': '0',
        'products': [('p4', 'FUM-HETRE-10', '20')],
    },
]


class Command(BaseCommand):
    help = 'Seed the demo products and suppliers.'

    def handle(self, *args, **options):
        counter = Counter()
        with transaction.atomic():
            self._seed_products(counter)
            self._seed_suppliers(counter)

        self.stdout.write(self.style.SUCCESS(
            f'Done. Products created: {counter["products"]}, '
            f'suppliers created: {counter["suppliers"]}, skipped: {counter["skipped"]}'
        ))

    def _seed_products(self, counter):
        for pk, name, family, unit, stock, minimum, cost in DEMO_PRODUCTS:
            if Product.objects.filter(pk=pk).exists():
                counter['skipped'] += 1
                continue
            ProductService.create_product(
                id=pk,
                name=name,
                family=family,
                unit=unit,
                current_stock=Decimal(stock),
                min_stock=Decimal(minimum),
                average_cost=Decimal(cost),
            )
            counter['products'] += 1

    def _seed_suppliers(self, counter):
        for row in DEMO_SUPPLIERS:
            if Supplier.objects.filter(pk=row['id']).exists():
                counter['skipped'] += 1
                continue
            SupplierService.create_supplier(
                id=row['id'],
                name=row['name'],
                delivery_days=row['delivery_days'],
                min_order=row['min_order'],
                products=[
                    {'product_id': product_id, 'supplier_sku': sku, 'price': price}
                    for product_id, sku, price in row['products']
                ],
            )
            counter['suppliers'] += 1
        logger.info('Demo catalog seeded: %s', dict(counter))
