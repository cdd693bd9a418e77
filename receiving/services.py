"""
Receiving — Service Layer

Goods receipt workflow: validate supplier and lines, take the next
NIR number, book one IN movement per line and store the document, all
in a single transaction.

@file receiving/services.py
"""

import logging

from django.db import transaction
from django.utils import timezone

from catalog.services import PartnerDirectory, ProductDirectory, WarehouseDirectory
from core.constants import AUDIT_ACTION_CREATE
from core.exceptions import ResourceNotFoundError, ValidationFailed
from core.results import Result
from core.services import AuditService, resolve_actor
from sequences.services import DocumentSequencer
from stock.documents import as_uuid, normalize_lines
from stock.models import DocumentType
from stock.services import StockLedger

from .models import GoodsReceipt, GoodsReceiptItem

logger = logging.getLogger('stockbook')


class GoodsReceiptService:

    def __init__(
        self,
        *,
        ledger: StockLedger | None = None,
        sequencer: DocumentSequencer | None = None,
        products: ProductDirectory | None = None,
        partners: PartnerDirectory | None = None,
        warehouses: WarehouseDirectory | None = None,
    ):
        self.ledger = ledger or StockLedger()
        self.sequencer = sequencer or DocumentSequencer()
        self.products = products or ProductDirectory()
        self.partners = partners or PartnerDirectory()
        self.warehouses = warehouses or WarehouseDirectory()

    def create_receipt(
        self,
        *,
        supplier_id,
        items: list[dict],
        receipt_date=None,
        supplier_document_number: str = '',
        supplier_document_date=None,
        series: str | None = None,
        notes: str = '',
        actor=None,
    ) -> Result:
        supplier_id = as_uuid(supplier_id)
        if supplier_id is None:
            return Result.failure(ValidationFailed('Supplier is required.', field='supplier_id'))
        if not self.partners.is_valid(supplier_id):
            return Result.failure(ResourceNotFoundError(f'Supplier {supplier_id} not found or inactive.'))

        lines = normalize_lines(items, products=self.products, warehouses=self.warehouses)
        if not lines.ok:
            return lines

        receipt_date = receipt_date or timezone.localdate()

        with transaction.atomic():
            numbered = self.sequencer.next_number(
                DocumentType.GOODS_RECEIPT, year=receipt_date.year, series=series,
            )
            if not numbered.ok:
                transaction.set_rollback(True)
                return numbered
            doc_number = numbered.value

            receipt = GoodsReceipt.objects.create(
                series=doc_number.series,
                number=doc_number.number,
                fiscal_year=doc_number.year,
                supplier_id=supplier_id,
                receipt_date=receipt_date,
                supplier_document_number=supplier_document_number or '',
                supplier_document_date=supplier_document_date,
                notes=notes or '',
                created_by=resolve_actor(actor),
            )

            for position, line in enumerate(lines.value, start=1):
                GoodsReceiptItem.objects.create(
                    receipt=receipt,
                    position=position,
                    product_id=line.product_id,
                    warehouse_id=line.warehouse_id,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    vat_rate=line.vat_rate,
                    batch_number=line.batch_number,
                    expiry_date=line.expiry_date,
                    created_by=resolve_actor(actor),
                )
                moved = self.ledger.increase(
                    product_id=line.product_id,
                    warehouse_id=line.warehouse_id,
                    quantity=line.quantity,
                    document_type=DocumentType.GOODS_RECEIPT,
                    document_id=receipt.pk,
                    notes=f'Goods receipt {receipt.full_number} - {line.product_name}',
                    unit_price=line.unit_price,
                    batch_number=line.batch_number,
                    actor=actor,
                )
                if not moved.ok:
                    transaction.set_rollback(True)
                    return moved

            receipt.recompute_totals()
            AuditService.log(
                actor=actor,
                action=AUDIT_ACTION_CREATE,
                model_name='GoodsReceipt',
                object_id=receipt.pk,
                new_values={
                    'number': receipt.full_number,
                    'supplier_id': str(supplier_id),
                    'total_with_vat': str(receipt.total_with_vat),
                },
            )

        logger.info(
            'Goods receipt %s created: %s lines, total %s',
            receipt.full_number, len(lines.value), receipt.total_with_vat,
        )
        return Result.success(receipt)
