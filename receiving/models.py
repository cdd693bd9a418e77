"""
Receiving — Models

Goods receipts ("NIR"): incoming deliveries from a supplier. A receipt
is final as soon as it is saved; each line produced one IN movement
linked to the receipt id.

@file receiving/models.py
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


class GoodsReceipt(DocumentModel):
    supplier = models.ForeignKey(
        'catalog.Partner',
        on_delete=models.PROTECT,
        related_name='goods_receipts',
        verbose_name=_('supplier'),
    )
    receipt_date = models.DateField(_('receipt date'), default=timezone.localdate)
    supplier_document_number = models.CharField(_('supplier document number'), max_length=50, blank=True)
    supplier_document_date = models.DateField(_('supplier document date'), null=True, blank=True)

    class Meta:
        db_table = 'goods_receipts'
        verbose_name = _('goods receipt')
        verbose_name_plural = _('goods receipts')
        ordering = ['-receipt_date', '-number']
        constraints = [
            models.UniqueConstraint(
                fields=['series', 'number', 'fiscal_year'],
                name='unique_goods_receipt_number',
            ),
        ]

    def __str__(self):
        return f'NIR {self.full_number}'


class GoodsReceiptItem(BaseModel):
    receipt = models.ForeignKey(
        GoodsReceipt,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name=_('goods receipt'),
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
    vat_rate = models.DecimalField(_('VAT rate (%)'), max_digits=5, decimal_places=2)
    batch_number = models.CharField(_('batch number'), max_length=100, blank=True, default='')
    expiry_date = models.DateField(_('expiry date'), null=True, blank=True)

    class Meta:
        db_table = 'goods_receipt_items'
        verbose_name = _('goods receipt item')
        verbose_name_plural = _('goods receipt items')
        ordering = ['receipt', 'position']

    def __str__(self):
        return f'{self.receipt_id}#{self.position} {self.product_id} x {self.quantity}'

    @property
    def net_amount(self) -> Decimal:
        return (self.quantity * self.unit_price).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)

    @property
    def vat_amount(self) -> Decimal:
        return (self.net_amount * self.vat_rate / 100).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)

    @property
    def gross_amount(self) -> Decimal:
        return self.net_amount + self.vat_amount
