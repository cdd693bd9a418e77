"""
Tests — Competing invoices on one product. Two invoices that each take
70 of 100 units are issued from separate threads; the product row lock
lets exactly one through and the other sees the reduced quantity.

Needs real row locks, so it only runs against PostgreSQL
(TEST_DATABASE_URL=postgres://...).

@file invoicing/tests/test_concurrency.py
"""

import threading
from decimal import Decimal

import pytest
from django.db import connection

from core.exceptions import InsufficientStockError
from invoicing.models import Invoice
from invoicing.services import InvoiceService
from stock.models import DocumentType, StockMovement
from stock.services import StockLedger
from tests.factories import PartnerFactory, ProductFactory, WarehouseFactory


pytestmark = [
    pytest.mark.django_db(transaction=True),
    pytest.mark.skipif(connection.vendor != 'postgresql', reason='row locking needs PostgreSQL'),
]


def _issue_concurrently(invoice_ids):
    barrier = threading.Barrier(len(invoice_ids))
    results = {}

    def worker(invoice_id):
        try:
            barrier.wait(timeout=10)
            results[invoice_id] = InvoiceService().issue_invoice(invoice_id=invoice_id)
        finally:
            connection.close()

    threads = [threading.Thread(target=worker, args=(pk,)) for pk in invoice_ids]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return results


def test_only_one_of_two_competing_invoices_is_issued(settings):
    warehouse = WarehouseFactory(code=settings.DEFAULT_WAREHOUSE_CODE)
    product = ProductFactory()
    StockLedger().increase(
        product_id=product.pk, warehouse_id=warehouse.pk,
        quantity=Decimal('100'), document_type=DocumentType.ADJUSTMENT,
    ).unwrap()
    service = InvoiceService()
    partner = PartnerFactory()
    drafts = [
        service.create_invoice(
            partner_id=partner.pk,
            items=[{'product_id': product.pk, 'quantity': '70', 'unit_price': '1.00'}],
        ).unwrap()
        for _ in range(2)
    ]

    results = _issue_concurrently([draft.pk for draft in drafts])

    assert len(results) == 2
    succeeded = [r for r in results.values() if r.ok]
    failed = [r for r in results.values() if not r.ok]
    assert len(succeeded) == 1
    assert isinstance(failed[0].error, InsufficientStockError)
    assert failed[0].error.available == Decimal('30')

    product.refresh_from_db()
    assert product.quantity == Decimal('30')
    assert Invoice.objects.filter(status=Invoice.StatusChoices.ISSUED).count() == 1
    assert StockMovement.objects.filter(document_type=DocumentType.INVOICE).count() == 1
