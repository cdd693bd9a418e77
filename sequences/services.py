"""
Sequences — Document Sequencer

Hands out document numbers that are unique and strictly increasing
within (series, document type, year), starting at 1.

The counter row is read and bumped under SELECT ... FOR UPDATE inside
the caller's transaction, so concurrent callers queue on the row and
a rollback returns the number to the pool. Numbers consumed by a
transaction that later commits are never handed out again.

@file sequences/services.py
"""

import logging
from dataclasses import dataclass

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from core.exceptions import ValidationFailed
from core.results import Result
from stock.models import DocumentType

from .models import DocumentSequence

logger = logging.getLogger('stockbook')

DEFAULT_SERIES = {
    DocumentType.GOODS_RECEIPT: 'NIR',
    DocumentType.INVOICE: 'INV',
    DocumentType.TRANSFER: 'TRF',
    DocumentType.ADJUSTMENT: 'ADJ',
    DocumentType.PRODUCTION: 'PRD',
}


@dataclass(frozen=True)
class DocumentNumber:
    series: str
    number: int
    year: int

    def __str__(self):
        return f'{self.series} {self.number:06d}'


class DocumentSequencer:

    def resolve_series(self, document_type: str, series: str | None = None) -> str:
        """Explicit series, else the configured one, else the built-in default."""
        if series:
            return series.strip().upper()
        configured = getattr(settings, 'DOCUMENT_SERIES', {}).get(document_type)
        return configured or DEFAULT_SERIES[document_type]

    def next_number(self, document_type: str, year: int | None = None, series: str | None = None) -> Result:
        if document_type not in DocumentType.values:
            return Result.failure(ValidationFailed(
                f'Unknown document type {document_type!r}.', field='document_type',
            ))
        year = year or timezone.localdate().year
        series = self.resolve_series(document_type, series)

        with transaction.atomic():
            sequence = self._locked(series, document_type, year)
            if sequence is None:
                sequence = self._create(series, document_type, year)

            number = sequence.next_number
            sequence.next_number = number + 1
            sequence.save(update_fields=['next_number', 'updated_at'])

        logger.debug('Allocated %s %s/%s #%s', document_type, series, year, number)
        return Result.success(DocumentNumber(series=series, number=number, year=year))

    def peek(self, document_type: str, year: int | None = None, series: str | None = None) -> int:
        """Number the next call would return, without consuming it."""
        year = year or timezone.localdate().year
        series = self.resolve_series(document_type, series)
        sequence = DocumentSequence.objects.filter(
            series=series, document_type=document_type, year=year,
        ).first()
        return sequence.next_number if sequence else 1

    @staticmethod
    def _locked(series, document_type, year):
        return DocumentSequence.objects.select_for_update().filter(
            series=series, document_type=document_type, year=year,
        ).first()

    def _create(self, series, document_type, year) -> DocumentSequence:
        # A concurrent first use may win the insert; the savepoint keeps
        # the caller's transaction usable so we can lock the winner's row.
        try:
            with transaction.atomic():
                return DocumentSequence.objects.create(
                    series=series, document_type=document_type, year=year, next_number=1,
                )
        except IntegrityError:
            logger.debug('Sequence %s %s/%s created concurrently, retrying', document_type, series, year)
            return self._locked(series, document_type, year)
