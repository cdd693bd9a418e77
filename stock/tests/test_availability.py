"""
Tests — requirement aggregation and availability check (no database).

@file stock/tests/test_availability.py
"""

import uuid
from decimal import Decimal

from stock.availability import Requirement, aggregate_requirements, check_availability


A = uuid.uuid4()
B = uuid.uuid4()


class TestAggregateRequirements:

    def test_sums_duplicates_in_first_seen_order(self):
        result = aggregate_requirements([
            (B, Decimal('2')), (A, Decimal('1')), (B, Decimal('3')),
        ])
        assert result == (
            Requirement(product_id=B, required=Decimal('5')),
            Requirement(product_id=A, required=Decimal('1')),
        )

    def test_empty(self):
        assert aggregate_requirements([]) == ()


class TestCheckAvailability:

    def test_all_available(self):
        stock = {A: Decimal('10'), B: Decimal('5')}
        requirements = [Requirement(A, Decimal('10')), Requirement(B, Decimal('1'))]
        assert check_availability(requirements, stock.__getitem__) is None

    def test_reports_first_shortfall(self):
        stock = {A: Decimal('10'), B: Decimal('5')}
        requirements = [Requirement(A, Decimal('3')), Requirement(B, Decimal('6'))]
        shortfall = check_availability(requirements, stock.__getitem__)
        assert shortfall.product_id == B
        assert shortfall.available == Decimal('5')
        assert shortfall.missing == Decimal('1')
