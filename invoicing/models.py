"""
Invoicing — Models

Sales invoices and their lines. Header totals are persisted for
listing and reporting but are always recomputed from the lines before
a write that touches them commits.

@file invoicing/models.py
"""

from decimal import ROUND_HALF_UP, Decimal

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.constants import (
    MONEY_DECIMAL_PLACES,
    MONEY_MAX_DIGITS,
    MONEY_PLACES,
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX_DIGITS,
)
from core.models import BaseModel, DocumentModel


class Invoice(DocumentModel):
    """
    Lifecycle: DRAFT -> ISSUED -> PAID, with CANCELLED reachable from
    DRAFT and ISSUED. Stock leaves the warehouse on ISSUE and comes
    back on cancellation of an issued invoice.
    """

    class StatusChoices(models.TextChoices):
        DRAFT = 'DRAFT', _('Draft')
        ISSUED = 'ISSUED', _('Issued')
        PAID = 'PAID', _('Paid')
        CANCELLED = 'CANCELLED', _('Cancelled')

    partner = models.ForeignKey(
        'catalog.Partner',
        on_delete=models.PROTECT,
        related_name='invoices',
        verbose_name=_('partner'),
    )
    issue_date = models.DateField(_('issue date'), default=timezone.localdate)
    due_date = models.DateField(_('due date'))
    status = models.CharField(
        _('status'), max_length=10,
        choices=StatusChoices.choices,
        default=StatusChoices.DRAFT,
        db_index=True,
    )
    issued_at = models.DateTimeField(_('issued at'), null=True, blank=True)
    paid_at = models.DateTimeField(_('paid at'), null=True, blank=True)
    cancelled_at = models.DateTimeField(_('cancelled at'), null=True, blank=True)

    class Meta:
        db_table = 'invoices'
        verbose_name = _('invoice')
        verbose_name_plural = _('invoices')
        ordering = ['-issue_date', '-number']
        indexes = [
            models.Index(fields=['partner', 'status']),
            models.Index(fields=['status', 'issue_date']),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['series', 'number', 'fiscal_year'],
                name='unique_invoice_number',
            ),
            models.CheckConstraint(
                condition=models.Q(due_date__gte=models.F('issue_date')),
                name='invoice_due_after_issue',
            ),
        ]

    def __str__(self):
        return f'Invoice {self.full_number} ({self.status})'


class InvoiceItem(BaseModel):
    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name=_('invoice'),
    )
    position = models.PositiveSmallIntegerField(_('position'))
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('product'),
    )
    warehouse = models.ForeignKey(
        'catalog.Warehouse',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('warehouse'),
    )
    quantity = models.DecimalField(
        _('quantity'), max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    unit_price = models.DecimalField(
        _('unit price'), max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES,
    )
    discount_percent = models.DecimalField(
        _('discount (%)'), max_digits=5, decimal_places=2, default=Decimal('0'),
    )
    vat_rate = models.DecimalField(_('VAT rate (%)'), max_digits=5, decimal_places=2)
    batch_number = models.CharField(_('batch number'), max_length=100, blank=True, default='')
    expiry_date = models.DateField(_('expiry date'), null=True, blank=True)

    class Meta:
        db_table = 'invoice_items'
        verbose_name = _('invoice item')
        verbose_name_plural = _('invoice items')
        ordering = ['invoice', 'position']

    def __str__(self):
        return f'{self.invoice_id}#{self.position} {self.product_id} x {self.quantity}'

    @property
    def net_amount(self) -> Decimal:
        """quantity x price, less the line discount."""
        gross = self.quantity * self.unit_price
        discounted = gross * (Decimal('100') - self.discount_percent) / Decimal('100')
        return discounted.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)

    @property
    def vat_amount(self) -> Decimal:
        return (self.net_amount * self.vat_rate / Decimal('100')).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)

    @property
    def gross_amount(self) -> Decimal:
        return self.net_amount + self.vat_amount
