"""
Tests — recipe and production order endpoints.

@file production/tests/test_views.py
"""

from decimal import Decimal

import pytest
from django.urls import reverse

from production.models import ProductionOrder
from tests.factories import ProductFactory


pytestmark = pytest.mark.django_db


class TestProductionEndpoints:

    def test_recipe_order_and_process(self, authenticated_client, warehouse, stock_up):
        flour = stock_up(ProductFactory(), 10)
        bread = ProductFactory()
        recipe = authenticated_client.post(reverse('api-v1:production:recipe-list'), {
            'product_id': str(bread.pk),
            'ingredients': [{'product_id': str(flour.pk), 'quantity': '0.5'}],
        }, format='json')
        assert recipe.status_code == 201

        order = authenticated_client.post(reverse('api-v1:production:order-list'), {
            'recipe_id': recipe.data['id'],
            'quantity_to_produce': '4',
        }, format='json')
        assert order.status_code == 201

        processed = authenticated_client.post(
            reverse('api-v1:production:order-process', args=[order.data['id']]),
        )
        assert processed.status_code == 200
        assert processed.data['status'] == ProductionOrder.StatusChoices.COMPLETED
        flour.refresh_from_db()
        bread.refresh_from_db()
        assert flour.quantity == Decimal('8')
        assert bread.quantity == Decimal('4')

        movements = authenticated_client.get(
            reverse('api-v1:production:order-movements', args=[order.data['id']]),
        )
        assert len(movements.data) == 2
