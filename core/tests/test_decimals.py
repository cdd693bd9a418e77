"""
Core — Decimal helper tests

@file core/tests/test_decimals.py
"""

from decimal import Decimal

from core.decimals import to_decimal, to_money, to_quantity


class TestDecimalHelpers:
    def test_to_decimal_rejects_garbage(self):
        assert to_decimal('abc') is None
        assert to_decimal('') is None
        assert to_decimal(float('nan')) is None

    def test_to_quantity_three_places(self):
        assert to_quantity('1.23456') == Decimal('1.235')

    def test_to_money_half_up(self):
        assert to_money('0.125') == Decimal('0.13')
        assert to_money(10) == Decimal('10.00')

    def test_beyond_context_precision_is_rejected(self):
        assert to_quantity('1e30') is None
        assert to_money('1e30') is None

    def test_column_width_bounds(self):
        assert to_quantity('99999999999.999') == Decimal('99999999999.999')
        assert to_quantity('100000000000') is None
        assert to_quantity('99999999999.9996') is None
        assert to_money('999999999999.99') == Decimal('999999999999.99')
        assert to_money('1000000000000') is None
        assert to_quantity('-100000000000') is None
