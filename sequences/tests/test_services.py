"""
Tests — DocumentSequencer: numbers start at 1, grow by one, are kept
apart per (series, type, year), and a rolled-back allocation is handed
out again.

@file sequences/tests/test_services.py
"""

import pytest
from django.db import transaction

from core.exceptions import ValidationFailed
from sequences.models import DocumentSequence
from sequences.services import DocumentNumber, DocumentSequencer
from stock.models import DocumentType


pytestmark = pytest.mark.django_db


class TestNextNumber:

    def test_starts_at_one_and_increments(self):
        sequencer = DocumentSequencer()
        numbers = [
            sequencer.next_number(DocumentType.INVOICE, year=2026).unwrap().number
            for _ in range(3)
        ]
        assert numbers == [1, 2, 3]

    def test_default_series(self):
        number = DocumentSequencer().next_number(DocumentType.GOODS_RECEIPT, year=2026).unwrap()
        assert number == DocumentNumber(series='NIR', number=1, year=2026)
        assert str(number) == 'NIR 000001'

    def test_configured_series(self, settings):
        settings.DOCUMENT_SERIES = {'INVOICE': 'FCT'}
        assert DocumentSequencer().next_number(DocumentType.INVOICE, year=2026).unwrap().series == 'FCT'

    def test_explicit_series_is_normalised(self):
        number = DocumentSequencer().next_number(DocumentType.INVOICE, year=2026, series=' b ').unwrap()
        assert number.series == 'B'

    def test_independent_per_series_type_and_year(self):
        sequencer = DocumentSequencer()
        sequencer.next_number(DocumentType.INVOICE, year=2026)
        sequencer.next_number(DocumentType.INVOICE, year=2026)
        assert sequencer.next_number(DocumentType.INVOICE, year=2027).unwrap().number == 1
        assert sequencer.next_number(DocumentType.INVOICE, year=2026, series='B').unwrap().number == 1
        assert sequencer.next_number(DocumentType.GOODS_RECEIPT, year=2026).unwrap().number == 1
        assert DocumentSequence.objects.count() == 4

    def test_unknown_document_type(self):
        result = DocumentSequencer().next_number('RECEIPT_VOUCHER', year=2026)
        assert isinstance(result.error, ValidationFailed)

    def test_rolled_back_number_is_reused(self):
        sequencer = DocumentSequencer()
        sequencer.next_number(DocumentType.INVOICE, year=2026)
        with transaction.atomic():
            assert sequencer.next_number(DocumentType.INVOICE, year=2026).unwrap().number == 2
            transaction.set_rollback(True)
        assert sequencer.next_number(DocumentType.INVOICE, year=2026).unwrap().number == 2


class TestPeek:

    def test_peek_does_not_consume(self):
        sequencer = DocumentSequencer()
        assert sequencer.peek(DocumentType.INVOICE, year=2026) == 1
        sequencer.next_number(DocumentType.INVOICE, year=2026)
        assert sequencer.peek(DocumentType.INVOICE, year=2026) == 2
        assert sequencer.peek(DocumentType.INVOICE, year=2026) == 2
