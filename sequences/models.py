"""
Sequences — Models

One counter row per (series, document type, year). ``next_number`` is
the number the next document will receive; it only ever grows.

@file sequences/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import TimestampMixin
from stock.models import DocumentType


class DocumentSequence(TimestampMixin):
    series = models.CharField(_('series'), max_length=20)
    document_type = models.CharField(
        _('document type'), max_length=16, choices=DocumentType.choices,
    )
    year = models.PositiveSmallIntegerField(_('year'))
    next_number = models.PositiveIntegerField(_('next number'), default=1)

    class Meta:
        db_table = 'document_sequences'
        verbose_name = _('document sequence')
        verbose_name_plural = _('document sequences')
        ordering = ['document_type', '-year', 'series']
        constraints = [
            models.UniqueConstraint(
                fields=['series', 'document_type', 'year'],
                name='unique_document_sequence',
            ),
            models.CheckConstraint(
                condition=models.Q(next_number__gte=1),
                name='document_sequence_positive',
            ),
        ]

    def __str__(self):
        return f'{self.document_type} {self.series}/{self.year} next={self.next_number}'
