"""
Core — Model Tests

Tests for AuditLog, the audit service and the base model mixins.

@file core/tests/test_models.py
"""

from decimal import Decimal

import pytest

from core.models import AuditLog
from core.services import AuditService
from tests.factories import AuditLogFactory, ProductFactory, UserFactory


@pytest.mark.django_db
class TestAuditLog:
    def test_create_audit_log(self):
        user = UserFactory()
        log = AuditService.log(
            actor=user,
            action=AuditLog.ActionChoices.CREATE,
            model_name='TestModel',
            object_id='test-123',
            new_values={'key': 'value'},
        )
        assert log.pk is not None
        assert log.action == 'CREATE'
        assert log.model_name == 'TestModel'
        assert log.actor == user

    def test_anonymous_actor_is_stored_as_none(self):
        from django.contrib.auth.models import AnonymousUser

        log = AuditService.log(
            actor=AnonymousUser(),
            action=AuditLog.ActionChoices.UPDATE,
            model_name='Supplier',
            object_id='s1',
        )
        assert log.actor is None

    def test_factory(self):
        log = AuditLogFactory()
        assert log.pk is not None
        assert str(log).startswith('CREATE Product:')

    def test_snapshot_stringifies_decimals(self):
        product = ProductFactory(average_cost=Decimal('11.75'))
        snapshot = AuditService.snapshot(product)
        assert snapshot['average_cost'] == '11.75'
        assert snapshot['name'] == product.name

    def test_product_create_triggers_audit(self):
        before = AuditLog.objects.filter(model_name='Product').count()
        ProductFactory()
        assert AuditLog.objects.filter(model_name='Product').count() == before + 1


@pytest.mark.django_db
class TestSoftDelete:
    def test_soft_delete(self):
        user = UserFactory()
        product = ProductFactory()
        product.soft_delete(user=user)
        product.refresh_from_db()
        assert product.is_deleted is True
        assert product.deleted_by == user
        assert product.deleted_at is not None

    def test_soft_delete_is_audited(self):
        product = ProductFactory()
        product.soft_delete()
        assert AuditLog.objects.filter(
            model_name='Product', object_id=product.pk, action=AuditLog.ActionChoices.SOFT_DELETE,
        ).exists()

    def test_generated_identifier(self):
        from products.models import Product

        product = Product.objects.create(name='Thym', unit='botte')
        assert isinstance(product.pk, str)
        assert len(product.pk) == 32
