"""
Econome — Test Factories

Factory Boy factories for generating test data. Used across all test
modules.

@file tests/factories.py
"""

from decimal import Decimal

import factory
from django.contrib.auth import get_user_model

from core.models import AuditLog
from orders.models import Order, OrderItem
from products.models import Product
from stock.models import StockImportRecord
from suppliers.models import Supplier, SupplierProduct


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = get_user_model()
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f'user{n}')
    email = factory.LazyAttribute(lambda o: f'{o.username}@econome.test')
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    is_active = True

    @factory.post_generation
    def password(self, create, extracted, **kwargs):
        password = extracted or 'TestPass2026!'
        self.set_password(password)
        if create:
            self.save(update_fields=['password'])


class SuperuserFactory(UserFactory):
    is_staff = True
    is_superuser = True


# ---------------------------------------------------------------------------
# Products & suppliers
# ---------------------------------------------------------------------------

class ProductFactory(factory.django.DjangoModelFactory):
    """
    Writes current_stock directly, without a ledger entry. Tests that
    check ledger continuity create products through ProductService.
    """

    class Meta:
        model = Product

    id = factory.Sequence(lambda n: f'p{n + 100}')
    name = factory.Sequence(lambda n: f'Product {n}')
    family = 'Épicerie'
    unit = 'kg'
    current_stock = Decimal('10')
    min_stock = Decimal('5')
    average_cost = Decimal('2.50')


class SupplierFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Supplier

    id = factory.Sequence(lambda n: f's{n + 100}')
    name = factory.Sequence(lambda n: f'Supplier {n}')
    delivery_days = 'Mardi, Vendredi'
    min_order = Decimal('50')


class SupplierProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SupplierProduct

    supplier = factory.SubFactory(SupplierFactory)
    product = factory.SubFactory(ProductFactory)
    supplier_sku = factory.Sequence(lambda n: f'SKU-{n:04d}')
    price = Decimal('10.00')


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    supplier = factory.SubFactory(SupplierFactory)
    supplier_name = factory.LazyAttribute(lambda o: o.supplier.name if o.supplier else 'Unknown')
    status = Order.StatusChoices.DRAFT
    total = Decimal('0')


class OrderItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory(ProductFactory)
    product_name = factory.LazyAttribute(lambda o: o.product.name)
    unit = factory.LazyAttribute(lambda o: o.product.unit)
    quantity = Decimal('10')
    received_quantity = Decimal('0')
    price_per_unit = Decimal('10.00')


# ---------------------------------------------------------------------------
# Stock & audit
# ---------------------------------------------------------------------------

class StockImportRecordFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = StockImportRecord

    file_name = factory.Sequence(lambda n: f'inventaire-{n}.csv')
    products_updated = 0


class AuditLogFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = AuditLog

    actor = factory.SubFactory(UserFactory)
    action = AuditLog.ActionChoices.CREATE
    model_name = 'Product'
    object_id = factory.Sequence(lambda n: f'p{n}')
    old_values = None
    new_values = factory.LazyFunction(lambda: {'name': 'Sel de Guérande'})
