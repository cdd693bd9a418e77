"""
Invoicing — Service Layer

Invoice lifecycle: create (DRAFT, optionally issued right away),
update draft lines, issue (stock out), cancel (stock back in when it
had been issued), mark paid, discard draft.

Issuing locks every product on the invoice in primary-key order and
checks the summed requirement per product against the locked
quantities before the first decrement, so a shortfall leaves no
movement behind and the invoice stays DRAFT.

@file invoicing/services.py
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from catalog.services import PartnerDirectory, ProductDirectory, WarehouseDirectory
from core.constants import AUDIT_ACTION_CREATE, AUDIT_ACTION_SOFT_DELETE, AUDIT_ACTION_STATUS_CHANGE, AUDIT_ACTION_UPDATE
from core.exceptions import InsufficientStockError, InvalidStateTransition, ResourceNotFoundError, ValidationFailed
from core.results import Result
from core.services import AuditService, resolve_actor
from sequences.services import DocumentSequencer
from stock.availability import aggregate_requirements, check_availability
from stock.documents import as_uuid, normalize_lines
from stock.models import DocumentType
from stock.services import StockLedger, lock_products

from .models import Invoice, InvoiceItem

logger = logging.getLogger('stockbook')

Status = Invoice.StatusChoices

TRANSITIONS = {
    Status.DRAFT: {Status.ISSUED, Status.CANCELLED},
    Status.ISSUED: {Status.PAID, Status.CANCELLED},
    Status.PAID: set(),
    Status.CANCELLED: set(),
}


def _transition_error(invoice: Invoice, new_status: str) -> InvalidStateTransition | None:
    if new_status in TRANSITIONS.get(invoice.status, set()):
        return None
    return InvalidStateTransition(current=invoice.status, requested=new_status)


class InvoiceService:

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

    # -- creation ----------------------------------------------------------

    def create_invoice(
        self,
        *,
        partner_id,
        items: list[dict],
        issue_date=None,
        due_date=None,
        series: str | None = None,
        notes: str = '',
        issue: bool = False,
        actor=None,
    ) -> Result:
        partner_id = as_uuid(partner_id)
        if partner_id is None:
            return Result.failure(ValidationFailed('Partner is required.', field='partner_id'))
        if not self.partners.is_valid(partner_id):
            return Result.failure(ResourceNotFoundError(f'Partner {partner_id} not found or inactive.'))

        lines = normalize_lines(
            items, products=self.products, warehouses=self.warehouses, allow_discount=True,
        )
        if not lines.ok:
            return lines

        issue_date = issue_date or timezone.localdate()
        due_date = due_date or issue_date + timedelta(days=settings.INVOICE_DUE_DAYS)
        if due_date < issue_date:
            return Result.failure(ValidationFailed('Due date cannot precede the issue date.', field='due_date'))

        with transaction.atomic():
            numbered = self.sequencer.next_number(DocumentType.INVOICE, year=issue_date.year, series=series)
            if not numbered.ok:
                transaction.set_rollback(True)
                return numbered
            doc_number = numbered.value

            invoice = Invoice.objects.create(
                series=doc_number.series,
                number=doc_number.number,
                fiscal_year=doc_number.year,
                partner_id=partner_id,
                issue_date=issue_date,
                due_date=due_date,
                status=Status.DRAFT,
                notes=notes or '',
                created_by=resolve_actor(actor),
            )
            self._write_items(invoice, lines.value, actor)
            invoice.recompute_totals()
            AuditService.log(
                actor=actor,
                action=AUDIT_ACTION_CREATE,
                model_name='Invoice',
                object_id=invoice.pk,
                new_values={
                    'number': invoice.full_number,
                    'partner_id': str(partner_id),
                    'total_with_vat': str(invoice.total_with_vat),
                },
            )

            if issue:
                issued = self._issue(invoice, actor)
                if not issued.ok:
                    transaction.set_rollback(True)
                    return issued

        logger.info('Invoice %s created (%s)', invoice.full_number, invoice.status)
        return Result.success(invoice)

    def update_draft_invoice(
        self,
        *,
        invoice_id,
        items: list[dict] | None = None,
        due_date=None,
        notes: str | None = None,
        actor=None,
    ) -> Result:
        """Replace lines and/or header fields of a DRAFT invoice."""
        lines = None
        if items is not None:
            lines = normalize_lines(
                items, products=self.products, warehouses=self.warehouses, allow_discount=True,
            )
            if not lines.ok:
                return lines

        with transaction.atomic():
            invoice = self._locked(invoice_id)
            if invoice is None:
                return Result.failure(ResourceNotFoundError('Invoice not found.'))
            if invoice.status != Status.DRAFT:
                return Result.failure(InvalidStateTransition(
                    current=invoice.status, requested=Status.DRAFT,
                    detail='Only DRAFT invoices can be updated.',
                ))
            if due_date is not None and due_date < invoice.issue_date:
                return Result.failure(ValidationFailed(
                    'Due date cannot precede the issue date.', field='due_date',
                ))

            tracked = ['due_date', 'notes', 'total_with_vat']
            before = AuditService.snapshot(invoice, tracked)
            fields = ['updated_by', 'updated_at']
            if due_date is not None:
                invoice.due_date = due_date
                fields.append('due_date')
            if notes is not None:
                invoice.notes = notes
                fields.append('notes')
            invoice.updated_by = resolve_actor(actor)
            invoice.save(update_fields=fields)

            if lines is not None:
                invoice.items.all().delete()
                self._write_items(invoice, lines.value, actor)
            invoice.recompute_totals()

            AuditService.log(
                actor=actor,
                action=AUDIT_ACTION_UPDATE,
                model_name='Invoice',
                object_id=invoice.pk,
                old_values=before,
                new_values=AuditService.snapshot(invoice, tracked),
            )
        return Result.success(invoice)

    # -- lifecycle ---------------------------------------------------------

    def issue_invoice(self, *, invoice_id, actor=None) -> Result:
        with transaction.atomic():
            invoice = self._locked(invoice_id)
            if invoice is None:
                return Result.failure(ResourceNotFoundError('Invoice not found.'))
            result = self._issue(invoice, actor)
            if not result.ok:
                transaction.set_rollback(True)
        return result

    def cancel_invoice(self, *, invoice_id, actor=None) -> Result:
        """
        DRAFT invoices are simply cancelled. ISSUED invoices first put
        every line back into stock, linked to the same invoice id.
        """
        with transaction.atomic():
            invoice = self._locked(invoice_id)
            if invoice is None:
                return Result.failure(ResourceNotFoundError('Invoice not found.'))
            error = _transition_error(invoice, Status.CANCELLED)
            if error is not None:
                return Result.failure(error)

            if invoice.status == Status.ISSUED:
                for item in invoice.items.select_related('product').order_by('position'):
                    moved = self.ledger.increase(
                        product_id=item.product_id,
                        warehouse_id=item.warehouse_id,
                        quantity=item.quantity,
                        document_type=DocumentType.INVOICE,
                        document_id=invoice.pk,
                        notes=f'Cancellation of invoice {invoice.full_number} - {item.product.name}',
                        unit_price=item.unit_price,
                        batch_number=item.batch_number,
                        actor=actor,
                    )
                    if not moved.ok:
                        transaction.set_rollback(True)
                        return moved

            self._set_status(invoice, Status.CANCELLED, actor, cancelled_at=timezone.now())

        logger.info('Invoice %s cancelled', invoice.full_number)
        return Result.success(invoice)

    def mark_paid(self, *, invoice_id, actor=None) -> Result:
        with transaction.atomic():
            invoice = self._locked(invoice_id)
            if invoice is None:
                return Result.failure(ResourceNotFoundError('Invoice not found.'))
            error = _transition_error(invoice, Status.PAID)
            if error is not None:
                return Result.failure(error)
            self._set_status(invoice, Status.PAID, actor, paid_at=timezone.now())
        return Result.success(invoice)

    def discard_draft_invoice(self, *, invoice_id, actor=None) -> Result:
        """Soft-delete a DRAFT invoice. Its number stays consumed."""
        with transaction.atomic():
            invoice = self._locked(invoice_id)
            if invoice is None:
                return Result.failure(ResourceNotFoundError('Invoice not found.'))
            if invoice.status != Status.DRAFT:
                return Result.failure(InvalidStateTransition(
                    current=invoice.status, requested='DELETED',
                    detail='Only DRAFT invoices can be deleted.',
                ))
            invoice.soft_delete()
            AuditService.log(
                actor=actor,
                action=AUDIT_ACTION_SOFT_DELETE,
                model_name='Invoice',
                object_id=invoice.pk,
                old_values={'number': invoice.full_number},
            )
        return Result.success(invoice)

    # -- internals ---------------------------------------------------------

    @staticmethod
    def _locked(invoice_id) -> Invoice | None:
        invoice_id = as_uuid(invoice_id)
        if invoice_id is None:
            return None
        return Invoice.objects.select_for_update().filter(pk=invoice_id, is_deleted=False).first()

    @staticmethod
    def _write_items(invoice: Invoice, lines, actor) -> None:
        InvoiceItem.objects.bulk_create([
            InvoiceItem(
                invoice=invoice,
                position=position,
                product_id=line.product_id,
                warehouse_id=line.warehouse_id,
                quantity=line.quantity,
                unit_price=line.unit_price,
                discount_percent=line.discount_percent,
                vat_rate=line.vat_rate,
                batch_number=line.batch_number,
                expiry_date=line.expiry_date,
                created_by=resolve_actor(actor),
            )
            for position, line in enumerate(lines, start=1)
        ])

    def _issue(self, invoice: Invoice, actor) -> Result:
        """Caller holds the invoice lock and owns the transaction."""
        error = _transition_error(invoice, Status.ISSUED)
        if error is not None:
            return Result.failure(error)

        items = list(invoice.items.select_related('product').order_by('position'))
        if not items:
            return Result.failure(ValidationFailed('Invoice has no lines.', field='items'))

        locked = lock_products(item.product_id for item in items)
        requirements = aggregate_requirements((item.product_id, item.quantity) for item in items)
        shortfall = check_availability(requirements, lambda pid: locked[pid].quantity)
        if shortfall is not None:
            product = locked[shortfall.product_id]
            logger.warning(
                'Invoice %s not issued: %s short by %s',
                invoice.full_number, product.code, shortfall.missing,
            )
            return Result.failure(InsufficientStockError(
                shortfall.product_id, shortfall.required, shortfall.available,
                product_name=product.name,
            ))

        for item in items:
            moved = self.ledger.decrease(
                product_id=item.product_id,
                warehouse_id=item.warehouse_id,
                quantity=item.quantity,
                document_type=DocumentType.INVOICE,
                document_id=invoice.pk,
                notes=f'Invoice {invoice.full_number} - {item.product.name}',
                unit_price=item.unit_price,
                batch_number=item.batch_number,
                actor=actor,
            )
            if not moved.ok:
                return moved

        invoice.recompute_totals()
        self._set_status(invoice, Status.ISSUED, actor, issued_at=timezone.now())
        logger.info('Invoice %s issued, total %s', invoice.full_number, invoice.total_with_vat)
        return Result.success(invoice)

    @staticmethod
    def _set_status(invoice: Invoice, new_status: str, actor, **timestamps) -> None:
        old_status = invoice.status
        invoice.status = new_status
        invoice.updated_by = resolve_actor(actor)
        for field, value in timestamps.items():
            setattr(invoice, field, value)
        invoice.save(update_fields=['status', 'updated_by', 'updated_at', *timestamps])
        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_STATUS_CHANGE,
            model_name='Invoice',
            object_id=invoice.pk,
            old_values={'status': old_status},
            new_values={'status': new_status},
        )
