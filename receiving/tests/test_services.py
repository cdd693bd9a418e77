"""
Tests — GoodsReceiptService.create_receipt: numbering, one IN movement
per line, header totals, and validation that leaves nothing behind.

@file receiving/tests/test_services.py
"""

import uuid
from datetime import date
from decimal import Decimal

import pytest

from core.exceptions import ResourceNotFoundError, ValidationFailed
from receiving.models import GoodsReceipt
from receiving.services import GoodsReceiptService
from sequences.models import DocumentSequence
from stock.models import DocumentType, MovementType, StockMovement
from tests.factories import ProductFactory, SupplierFactory, UserFactory, WarehouseFactory


pytestmark = pytest.mark.django_db


def _line(product, quantity='10', unit_price='2.50', **extra):
    return {'product_id': product.pk, 'quantity': quantity, 'unit_price': unit_price, **extra}


class TestCreateReceipt:

    def test_books_stock_and_numbers_document(self, warehouse):
        supplier = SupplierFactory()
        a, b = ProductFactory(name='Aspirin'), ProductFactory()
        user = UserFactory()

        receipt = GoodsReceiptService().create_receipt(
            supplier_id=supplier.pk,
            items=[_line(a, '10', '2.50', vat_rate='9'), _line(b, '4', '10.00')],
            receipt_date=date(2026, 3, 1),
            supplier_document_number='F-123',
            actor=user,
        ).unwrap()

        assert receipt.full_number == 'NIR 000001'
        assert receipt.fiscal_year == 2026
        assert receipt.items.count() == 2

        a.refresh_from_db()
        b.refresh_from_db()
        assert a.quantity == Decimal('10')
        assert b.quantity == Decimal('4')

        movements = StockMovement.objects.filter(document_id=receipt.pk).order_by('id')
        assert [m.movement_type for m in movements] == [MovementType.IN, MovementType.IN]
        assert all(m.document_type == DocumentType.GOODS_RECEIPT for m in movements)
        assert movements[0].notes == 'Goods receipt NIR 000001 - Aspirin'
        assert movements[0].warehouse_id == warehouse.pk
        assert movements[0].created_by == user

    def test_totals(self, warehouse):
        product = ProductFactory()
        receipt = GoodsReceiptService().create_receipt(
            supplier_id=SupplierFactory().pk,
            items=[_line(product, '10', '2.50', vat_rate='9'), _line(product, '2', '1.00', vat_rate='19')],
        ).unwrap()
        # 25.00 + 2.25 VAT, 2.00 + 0.38 VAT
        assert receipt.total_amount == Decimal('27.00')
        assert receipt.total_vat == Decimal('2.63')
        assert receipt.total_with_vat == Decimal('29.63')

    def test_numbers_increase(self, warehouse):
        service = GoodsReceiptService()
        supplier = SupplierFactory()
        product = ProductFactory()
        first = service.create_receipt(supplier_id=supplier.pk, items=[_line(product)]).unwrap()
        second = service.create_receipt(supplier_id=supplier.pk, items=[_line(product)]).unwrap()
        assert second.number == first.number + 1

    def test_explicit_warehouse(self, warehouse):
        other = WarehouseFactory(code='DEP2')
        product = ProductFactory()
        receipt = GoodsReceiptService().create_receipt(
            supplier_id=SupplierFactory().pk,
            items=[_line(product, warehouse_id=other.pk)],
        ).unwrap()
        assert StockMovement.objects.get(document_id=receipt.pk).warehouse_id == other.pk


class TestCreateReceiptValidation:

    def _assert_nothing_written(self):
        assert GoodsReceipt.objects.count() == 0
        assert StockMovement.objects.count() == 0
        assert not DocumentSequence.objects.exists()

    def test_unknown_supplier(self, warehouse):
        result = GoodsReceiptService().create_receipt(
            supplier_id=uuid.uuid4(), items=[_line(ProductFactory())],
        )
        assert isinstance(result.error, ResourceNotFoundError)
        self._assert_nothing_written()

    def test_inactive_supplier(self, warehouse):
        result = GoodsReceiptService().create_receipt(
            supplier_id=SupplierFactory(is_active=False).pk, items=[_line(ProductFactory())],
        )
        assert isinstance(result.error, ResourceNotFoundError)

    def test_no_lines(self, warehouse):
        result = GoodsReceiptService().create_receipt(supplier_id=SupplierFactory().pk, items=[])
        assert isinstance(result.error, ValidationFailed)
        assert result.error.field == 'items'
        self._assert_nothing_written()

    @pytest.mark.parametrize('field,value', [
        ('quantity', '0'),
        ('quantity', '-3'),
        ('unit_price', '0'),
        ('vat_rate', '-1'),
    ])
    def test_bad_line_values(self, warehouse, field, value):
        line = _line(ProductFactory(), **{field: value})
        result = GoodsReceiptService().create_receipt(supplier_id=SupplierFactory().pk, items=[line])
        assert isinstance(result.error, ValidationFailed)
        assert result.error.field == f'items[0].{field}'
        self._assert_nothing_written()

    def test_discount_not_allowed(self, warehouse):
        line = _line(ProductFactory(), discount_percent='10')
        result = GoodsReceiptService().create_receipt(supplier_id=SupplierFactory().pk, items=[line])
        assert result.error.field == 'items[0].discount_percent'

    def test_unknown_product_on_second_line(self, warehouse):
        result = GoodsReceiptService().create_receipt(
            supplier_id=SupplierFactory().pk,
            items=[_line(ProductFactory()), {'product_id': uuid.uuid4(), 'quantity': 1, 'unit_price': 1}],
        )
        assert isinstance(result.error, ResourceNotFoundError)
        self._assert_nothing_written()

    def test_default_vat_rate(self, warehouse, settings):
        settings.DEFAULT_VAT_RATE = Decimal('19.00')
        receipt = GoodsReceiptService().create_receipt(
            supplier_id=SupplierFactory().pk, items=[_line(ProductFactory())],
        ).unwrap()
        assert receipt.items.get().vat_rate == Decimal('19.00')
