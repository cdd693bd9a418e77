"""
Tests — invoice endpoints and workflow actions.

@file invoicing/tests/test_views.py
"""

from decimal import Decimal

import pytest
from django.urls import reverse

from invoicing.models import Invoice
from tests.factories import PartnerFactory, ProductFactory


pytestmark = pytest.mark.django_db


def _create(client, product, quantity='2', **extra):
    return client.post(reverse('api-v1:invoicing:invoice-list'), {
        'partner_id': str(PartnerFactory().pk),
        'items': [{'product_id': str(product.pk), 'quantity': quantity, 'unit_price': '10.00'}],
        **extra,
    }, format='json')


class TestInvoiceEndpoints:

    def test_create_draft(self, authenticated_client, warehouse):
        response = _create(authenticated_client, ProductFactory())
        assert response.status_code == 201
        assert response.data['status'] == Invoice.StatusChoices.DRAFT
        assert len(response.data['items']) == 1

    def test_issue_and_cancel(self, authenticated_client, warehouse, stock_up):
        product = stock_up(ProductFactory(), 10)
        invoice_id = _create(authenticated_client, product, '4').data['id']

        issued = authenticated_client.post(reverse('api-v1:invoicing:invoice-issue', args=[invoice_id]))
        assert issued.status_code == 200
        assert issued.data['status'] == Invoice.StatusChoices.ISSUED
        product.refresh_from_db()
        assert product.quantity == Decimal('6')

        movements = authenticated_client.get(reverse('api-v1:invoicing:invoice-movements', args=[invoice_id]))
        assert len(movements.data) == 1

        cancelled = authenticated_client.post(reverse('api-v1:invoicing:invoice-cancel', args=[invoice_id]))
        assert cancelled.data['status'] == Invoice.StatusChoices.CANCELLED
        product.refresh_from_db()
        assert product.quantity == Decimal('10')

    def test_issue_without_stock_is_409(self, authenticated_client, warehouse):
        product = ProductFactory()
        invoice_id = _create(authenticated_client, product).data['id']
        response = authenticated_client.post(reverse('api-v1:invoicing:invoice-issue', args=[invoice_id]))
        assert response.status_code == 409
        assert response.data['code'] == 'INSUFFICIENT_STOCK'
        assert response.data['errors']['product_id'] == str(product.pk)

    def test_pay_draft_is_400(self, authenticated_client, warehouse):
        invoice_id = _create(authenticated_client, ProductFactory()).data['id']
        response = authenticated_client.post(reverse('api-v1:invoicing:invoice-pay', args=[invoice_id]))
        assert response.status_code == 400
        assert response.data['code'] == 'INVALID_STATE_TRANSITION'

    def test_destroy_draft_hides_it(self, authenticated_client, warehouse):
        invoice_id = _create(authenticated_client, ProductFactory()).data['id']
        url = reverse('api-v1:invoicing:invoice-detail', args=[invoice_id])
        assert authenticated_client.delete(url).status_code == 204
        assert authenticated_client.get(url).status_code == 404

    def test_patch_draft(self, authenticated_client, warehouse):
        invoice_id = _create(authenticated_client, ProductFactory()).data['id']
        url = reverse('api-v1:invoicing:invoice-detail', args=[invoice_id])
        response = authenticated_client.patch(url, {'notes': 'call first'}, format='json')
        assert response.status_code == 200
        assert response.data['notes'] == 'call first'
