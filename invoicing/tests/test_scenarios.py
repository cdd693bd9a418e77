"""
Tests — receipt, sale and cancellation end to end. After every step
the cached quantity equals the movement sum.

@file invoicing/tests/test_scenarios.py
"""

from decimal import Decimal

import pytest

from invoicing.services import InvoiceService
from receiving.services import GoodsReceiptService
from stock.models import DocumentType, StockMovement
from stock.services import StockLedger
from tests.factories import PartnerFactory, ProductFactory, SupplierFactory


pytestmark = pytest.mark.django_db


def _assert_balanced(product):
    product.refresh_from_db()
    assert StockLedger().reconcile(product_ids=[product.pk]) == []
    return product.quantity


class TestReceiveSellCancel:

    def test_hundred_seventy_hundred(self, warehouse):
        product = ProductFactory(name='P')
        GoodsReceiptService().create_receipt(
            supplier_id=SupplierFactory().pk,
            items=[{'product_id': product.pk, 'quantity': '100', 'unit_price': '1.00'}],
        ).unwrap()
        assert _assert_balanced(product) == Decimal('100')

        invoices = InvoiceService()
        invoice = invoices.create_invoice(
            partner_id=PartnerFactory().pk,
            items=[{'product_id': product.pk, 'quantity': '30', 'unit_price': '2.00'}],
            issue=True,
        ).unwrap()
        assert _assert_balanced(product) == Decimal('70')

        invoices.cancel_invoice(invoice_id=invoice.pk).unwrap()
        assert _assert_balanced(product) == Decimal('100')

        linked = StockMovement.objects.filter(
            document_type=DocumentType.INVOICE, document_id=invoice.pk,
        ).order_by('id')
        assert [m.quantity for m in linked] == [Decimal('-30'), Decimal('30')]
        assert 'Cancellation' in linked[1].notes
