"""
Tests — reconcile_stock management command and Celery task.

@file stock/tests/test_commands.py
"""

from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from catalog.models import Product
from stock.tasks import reconcile_stock


pytestmark = pytest.mark.django_db


class TestReconcileCommand:

    def test_clean(self, product, stock_up):
        stock_up(product, 4)
        out = StringIO()
        call_command('reconcile_stock', stdout=out)
        assert 'match' in out.getvalue()

    def test_mismatch_fails(self, product, stock_up):
        stock_up(product, 4)
        Product.objects.filter(pk=product.pk).update(quantity=Decimal('9'))
        out = StringIO()
        with pytest.raises(CommandError):
            call_command('reconcile_stock', stdout=out)
        assert product.code in out.getvalue()

    def test_product_filter(self, product, stock_up):
        other = stock_up(Product.objects.create(code='OTHER', name='Other'), 1)
        Product.objects.filter(pk=other.pk).update(quantity=Decimal('9'))
        call_command('reconcile_stock', '--product', str(product.pk), stdout=StringIO())

    def test_invalid_product_id(self):
        with pytest.raises(CommandError, match='Invalid product id: not-a-uuid'):
            call_command('reconcile_stock', '--product', 'not-a-uuid', stdout=StringIO())


class TestReconcileTask:

    def test_returns_count(self, product, stock_up):
        stock_up(product, 2)
        Product.objects.filter(pk=product.pk).update(quantity=Decimal('0'))
        assert reconcile_stock() == {'discrepancies': 1}

