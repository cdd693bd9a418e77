"""
Catalog — Models

Products, trading partners and warehouses referenced by stock
documents. Catalog maintenance is plain CRUD; the only field with
rules attached is Product.quantity, which is a projection of the
stock ledger and is written by nothing else.

@file catalog/models.py
"""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS
from core.models import BaseModel


class Product(BaseModel):
    """
    A stockable article.

    ``quantity`` caches the signed sum of the product's stock movements
    across all warehouses. It is read-only everywhere except
    stock.services.StockLedger.
    """

    code = models.CharField(_('code'), max_length=50, unique=True)
    name = models.CharField(_('name'), max_length=255)
    unit_of_measure = models.CharField(_('unit of measure'), max_length=20, default='buc')
    quantity = models.DecimalField(
        _('quantity on hand'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
        default=Decimal('0'), editable=False,
    )
    is_active = models.BooleanField(_('active'), default=True, db_index=True)

    class Meta:
        db_table = 'catalog_product'
        verbose_name = _('product')
        verbose_name_plural = _('products')
        ordering = ['name']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name='product_quantity_non_negative',
            ),
        ]

    def __str__(self):
        return f'{self.code} {self.name}'


class Partner(BaseModel):

    class PartnerType(models.TextChoices):
        CLIENT = 'CLIENT', _('Client')
        SUPPLIER = 'SUPPLIER', _('Supplier')
        BOTH = 'BOTH', _('Client & supplier')

    name = models.CharField(_('name'), max_length=255)
    tax_code = models.CharField(_('tax code'), max_length=32, blank=True, db_index=True)
    partner_type = models.CharField(
        _('partner type'), max_length=10,
        choices=PartnerType.choices, default=PartnerType.CLIENT,
    )
    address = models.TextField(_('address'), blank=True)
    is_active = models.BooleanField(_('active'), default=True, db_index=True)

    class Meta:
        db_table = 'catalog_partner'
        verbose_name = _('partner')
        verbose_name_plural = _('partners')
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def can_buy(self) -> bool:
        return self.partner_type in (self.PartnerType.CLIENT, self.PartnerType.BOTH)

    @property
    def can_supply(self) -> bool:
        return self.partner_type in (self.PartnerType.SUPPLIER, self.PartnerType.BOTH)


class Warehouse(BaseModel):
    """A storage location ("gestiune"). Movements are attributed to one."""

    code = models.CharField(_('code'), max_length=20, unique=True)
    name = models.CharField(_('name'), max_length=255)
    is_active = models.BooleanField(_('active'), default=True)

    class Meta:
        db_table = 'catalog_warehouse'
        verbose_name = _('warehouse')
        verbose_name_plural = _('warehouses')
        ordering = ['code']

    def __str__(self):
        return f'{self.code} {self.name}'
