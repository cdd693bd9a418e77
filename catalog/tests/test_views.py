"""
Tests — catalog endpoints. Product quantity cannot be written through
the API.

@file catalog/tests/test_views.py
"""

import pytest
from django.urls import reverse

from catalog.models import Product


pytestmark = pytest.mark.django_db


class TestProductEndpoints:

    def test_create_ignores_quantity(self, authenticated_client, user):
        response = authenticated_client.post(reverse('api-v1:catalog:product-list'), {
            'code': 'P-1', 'name': 'Widget', 'quantity': '500',
        }, format='json')
        assert response.status_code == 201
        product = Product.objects.get(code='P-1')
        assert product.quantity == 0
        assert product.created_by == user

    def test_patch_quantity_has_no_effect(self, authenticated_client, product):
        url = reverse('api-v1:catalog:product-detail', args=[product.pk])
        response = authenticated_client.patch(url, {'quantity': '10', 'name': 'Renamed'}, format='json')
        assert response.status_code == 200
        product.refresh_from_db()
        assert product.name == 'Renamed'
        assert product.quantity == 0

    def test_delete_not_allowed(self, authenticated_client, product):
        url = reverse('api-v1:catalog:product-detail', args=[product.pk])
        assert authenticated_client.delete(url).status_code == 405


class TestWarehouseEndpoints:

    def test_list(self, authenticated_client, warehouse):
        response = authenticated_client.get(reverse('api-v1:catalog:warehouse-list'))
        assert response.status_code == 200
        assert response.data['count'] == 1
