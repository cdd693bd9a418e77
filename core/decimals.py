"""
Core — Decimal Helpers

Quantities and amounts arrive as str, int, float or Decimal from
serializers, factories and management commands. Everything is
normalised here before it reaches a model field.

A value that cannot be parsed, or that would not fit the model
column once rounded, comes back as None so callers report it as a
validation error.

@file core/decimals.py
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from core.constants import (
    MONEY_DECIMAL_PLACES,
    MONEY_MAX_DIGITS,
    MONEY_PLACES,
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX_DIGITS,
    QUANTITY_PLACES,
)

# Exclusive upper bounds of the integer part a column can hold.
QUANTITY_LIMIT = Decimal(10) ** (QUANTITY_MAX_DIGITS - QUANTITY_DECIMAL_PLACES)
MONEY_LIMIT = Decimal(10) ** (MONEY_MAX_DIGITS - MONEY_DECIMAL_PLACES)


def to_decimal(value) -> Decimal | None:
    if value is None or value == '':
        return None
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def _rounded(value, places: Decimal, limit: Decimal) -> Decimal | None:
    number = to_decimal(value)
    if number is None or abs(number) >= limit:
        return None
    try:
        rounded = number.quantize(places, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None
    # 99999999999.9996 rounds up past the column width
    return rounded if abs(rounded) < limit else None


def to_quantity(value) -> Decimal | None:
    return _rounded(value, QUANTITY_PLACES, QUANTITY_LIMIT)


def to_money(value) -> Decimal | None:
    return _rounded(value, MONEY_PLACES, MONEY_LIMIT)
