"""
Core — Base Models & Audit Trail

Abstract bases shared by every Stockbook app (UUID key, timestamps,
actor columns, soft delete for financial documents) and the AuditLog
table that records each status change and stock movement.

@file core/models.py
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.constants import MONEY_DECIMAL_PLACES, MONEY_MAX_DIGITS


# ---------------------------------------------------------------------------
# Abstract bases
# ---------------------------------------------------------------------------

class TimestampMixin(models.Model):
    created_at = models.DateTimeField(_('created at'), auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        abstract = True


class AuditFieldsMixin(models.Model):
    """Who created and who last touched the row."""

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('created by'),
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('updated by'),
    )

    class Meta:
        abstract = True


class SoftDeleteMixin(models.Model):
    """
    Issued documents carry accounting weight, so they are hidden
    rather than removed. Only drafts may be soft-deleted (see the
    invoicing service).
    """

    is_deleted = models.BooleanField(_('deleted'), default=False, db_index=True)
    deleted_at = models.DateTimeField(_('deleted at'), null=True, blank=True)

    class Meta:
        abstract = True

    def soft_delete(self):
        self.is_deleted = True
        self.deleted_at = timezone.now()
        self.save(update_fields=['is_deleted', 'deleted_at', 'updated_at'])


class BaseModel(TimestampMixin, AuditFieldsMixin):
    """UUID primary key, timestamps and actor columns."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True


class DocumentModel(BaseModel, SoftDeleteMixin):
    """
    Base for numbered documents (invoices, goods receipts).

    The (series, number, fiscal_year) triple is handed out by the
    document sequencer and is unique per concrete table.
    """

    series = models.CharField(_('series'), max_length=20)
    number = models.PositiveIntegerField(_('number'))
    fiscal_year = models.PositiveSmallIntegerField(_('fiscal year'))
    notes = models.TextField(_('notes'), blank=True, default='')

    total_amount = models.DecimalField(
        _('total (net)'), max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES, default=0,
    )
    total_vat = models.DecimalField(
        _('total VAT'), max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES, default=0,
    )
    total_with_vat = models.DecimalField(
        _('total with VAT'), max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES, default=0,
    )

    class Meta:
        abstract = True

    @property
    def full_number(self) -> str:
        return f'{self.series} {self.number:06d}'

    def recompute_totals(self, *, save: bool = True) -> Decimal:
        """Sum line amounts into the header. Lines must expose the
        net_amount / vat_amount properties."""
        net = vat = Decimal('0')
        for item in self.items.all():
            net += item.net_amount
            vat += item.vat_amount
        self.total_amount = net
        self.total_vat = vat
        self.total_with_vat = net + vat
        if save:
            self.save(update_fields=['total_amount', 'total_vat', 'total_with_vat', 'updated_at'])
        return self.total_with_vat


# ---------------------------------------------------------------------------
# Audit log
# ---------------------------------------------------------------------------

class AuditLog(models.Model):
    """
    Append-only trail of writes. Old and new values are kept as JSON
    so a document's life can be replayed from the log alone.
    """

    class ActionChoices(models.TextChoices):
        CREATE = 'CREATE', _('Create')
        UPDATE = 'UPDATE', _('Update')
        SOFT_DELETE = 'SOFT_DELETE', _('Soft Delete')
        STATUS_CHANGE = 'STATUS_CHANGE', _('Status Change')
        STOCK_MOVEMENT = 'STOCK_MOVEMENT', _('Stock Movement')

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='audit_logs',
        verbose_name=_('actor'),
    )
    action = models.CharField(
        _('action'), max_length=20,
        choices=ActionChoices.choices, db_index=True,
    )
    model_name = models.CharField(_('model'), max_length=100, db_index=True)
    object_id = models.CharField(_('object ID'), max_length=40, db_index=True)

    old_values = models.JSONField(_('old values'), null=True, blank=True)
    new_values = models.JSONField(_('new values'), null=True, blank=True)

    timestamp = models.DateTimeField(_('timestamp'), auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _('audit log')
        verbose_name_plural = _('audit logs')
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['model_name', 'object_id']),
            models.Index(fields=['action', 'timestamp']),
        ]

    def __str__(self):
        return f'{self.action} {self.model_name}:{self.object_id}'
