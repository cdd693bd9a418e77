"""
Tests — stock endpoints: movement history, transfers, adjustments,
balances and the staff-only reconciliation report.

@file stock/tests/test_views.py
"""

from decimal import Decimal

import pytest
from django.urls import reverse
from django.utils import timezone

from catalog.models import Product
from tests.factories import WarehouseFactory


pytestmark = pytest.mark.django_db


class TestMovementList:

    def test_requires_authentication(self, api_client, product):
        response = api_client.get(reverse('api-v1:stock:movement-list'), {'product': product.pk})
        assert response.status_code == 401

    def test_lists_newest_first(self, authenticated_client, product, stock_up):
        stock_up(product, 1)
        stock_up(product, 2)
        response = authenticated_client.get(reverse('api-v1:stock:movement-list'), {'product': product.pk})
        assert response.status_code == 200
        assert [row['quantity'] for row in response.data] == [Decimal('2.000'), Decimal('1.000')]

    def test_product_is_required(self, authenticated_client):
        response = authenticated_client.get(reverse('api-v1:stock:movement-list'))
        assert response.status_code == 400

    def test_date_range(self, authenticated_client, product, stock_up):
        stock_up(product, 1)
        today = timezone.localdate().isoformat()
        response = authenticated_client.get(
            reverse('api-v1:stock:movement-by-date-range'), {'start': today, 'end': today},
        )
        assert response.status_code == 200
        assert len(response.data) == 1

    def test_balances(self, authenticated_client, product, stock_up):
        stock_up(product, 5)
        response = authenticated_client.get(reverse('api-v1:stock:movement-balances'), {'product': product.pk})
        assert response.status_code == 200
        assert response.data[0]['quantity'] == Decimal('5')


class TestTransferEndpoint:

    def test_creates_both_legs(self, authenticated_client, product, warehouse, stock_up):
        other = WarehouseFactory(code='SECOND')
        stock_up(product, 10)
        response = authenticated_client.post(reverse('api-v1:stock:transfer-list'), {
            'product_id': str(product.pk),
            'quantity': '4',
            'from_warehouse_id': str(warehouse.pk),
            'to_warehouse_id': str(other.pk),
        }, format='json')
        assert response.status_code == 201
        assert len(response.data) == 2

    def test_insufficient_stock_is_409(self, authenticated_client, product, warehouse):
        other = WarehouseFactory(code='SECOND')
        response = authenticated_client.post(reverse('api-v1:stock:transfer-list'), {
            'product_id': str(product.pk),
            'quantity': '4',
            'from_warehouse_id': str(warehouse.pk),
            'to_warehouse_id': str(other.pk),
        }, format='json')
        assert response.status_code == 409
        assert response.data['code'] == 'INSUFFICIENT_STOCK'


class TestAdjustmentEndpoint:

    def test_adjusts(self, authenticated_client, product, warehouse, stock_up):
        stock_up(product, 12)
        response = authenticated_client.post(reverse('api-v1:stock:adjustment-list'), {
            'product_id': str(product.pk),
            'warehouse_id': str(warehouse.pk),
            'new_quantity': '7',
        }, format='json')
        assert response.status_code == 201
        assert response.data['quantity'] == Decimal('-5.000')

    def test_no_change(self, authenticated_client, product, warehouse):
        response = authenticated_client.post(reverse('api-v1:stock:adjustment-list'), {
            'product_id': str(product.pk),
            'warehouse_id': str(warehouse.pk),
            'new_quantity': '0',
        }, format='json')
        assert response.status_code == 200
        assert response.data == {'adjusted': False}


class TestReconcileEndpoint:

    def test_staff_only(self, authenticated_client):
        response = authenticated_client.get(reverse('api-v1:stock:movement-reconcile'))
        assert response.status_code == 403

    def test_lists_discrepancies(self, admin_client, product, stock_up):
        stock_up(product, 3)
        Product.objects.filter(pk=product.pk).update(quantity=Decimal('5'))
        response = admin_client.get(reverse('api-v1:stock:movement-reconcile'))
        assert response.status_code == 200
        assert response.data[0]['product_code'] == product.code
