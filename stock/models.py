"""
Stock — Models

Append-only movement log. Every change to a product's on-hand
quantity is one signed StockMovement row; catalog.Product.quantity is
the running sum of those rows and is kept in step by the ledger
service inside the same transaction.

Rows are INSERT ONLY: save() refuses updates and delete() always
raises. Corrections are new movements.

@file stock/models.py
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import (
    MONEY_DECIMAL_PLACES,
    MONEY_MAX_DIGITS,
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX_DIGITS,
)


class MovementType(models.TextChoices):
    IN = 'IN', _('In')
    OUT = 'OUT', _('Out')
    TRANSFER = 'TRANSFER', _('Transfer')
    ADJUSTMENT = 'ADJUSTMENT', _('Adjustment')


class DocumentType(models.TextChoices):
    GOODS_RECEIPT = 'GOODS_RECEIPT', _('Goods receipt')
    INVOICE = 'INVOICE', _('Invoice')
    TRANSFER = 'TRANSFER', _('Transfer')
    ADJUSTMENT = 'ADJUSTMENT', _('Adjustment')
    PRODUCTION = 'PRODUCTION', _('Production')


class StockMovement(models.Model):
    """
    One signed change of a product's quantity in one warehouse.

    ``quantity`` is positive for IN, negative for OUT, and either sign
    for TRANSFER and ADJUSTMENT. ``document_id`` points at the document
    that caused the movement (invoice, goods receipt, production order,
    transfer pair); it is resolved in the application layer.
    """

    # Integer key so ties on created_at still sort in insertion order.
    id = models.BigAutoField(primary_key=True)

    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='stock_movements',
        verbose_name=_('product'),
    )
    warehouse = models.ForeignKey(
        'catalog.Warehouse',
        on_delete=models.PROTECT,
        related_name='stock_movements',
        verbose_name=_('warehouse'),
    )
    movement_type = models.CharField(
        _('movement type'), max_length=12,
        choices=MovementType.choices, db_index=True,
    )
    document_type = models.CharField(
        _('document type'), max_length=16,
        choices=DocumentType.choices, db_index=True,
    )
    document_id = models.UUIDField(_('document ID'), null=True, blank=True, db_index=True)
    quantity = models.DecimalField(
        _('quantity'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    unit_price = models.DecimalField(
        _('unit price'),
        max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES,
        null=True, blank=True,
    )
    batch_number = models.CharField(_('batch number'), max_length=100, blank=True, default='')
    notes = models.TextField(_('notes'), blank=True, default='')
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('created by'),
    )
    created_at = models.DateTimeField(_('created at'), auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'stock_movements'
        verbose_name = _('stock movement')
        verbose_name_plural = _('stock movements')
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['product', 'created_at'], name='stock_product_created_idx'),
            models.Index(fields=['document_type', 'document_id'], name='stock_document_idx'),
            models.Index(fields=['warehouse', 'product'], name='stock_warehouse_product_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(quantity=0),
                name='stock_movement_non_zero',
            ),
        ]

    def __str__(self):
        return f'{self.movement_type} {self.quantity} product={self.product_id} wh={self.warehouse_id}'

    def save(self, *args, **kwargs):
        if self.pk and StockMovement.objects.filter(pk=self.pk).exists():
            raise NotImplementedError('StockMovement is insert-only; updates are not allowed.')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise NotImplementedError('StockMovement records cannot be deleted.')
