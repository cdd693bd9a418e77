"""
Core — Shared Constants

@file core/constants.py
"""

from decimal import Decimal

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 200

# Quantities are stored with three decimals (kg, litres), money with two.
QUANTITY_PLACES = Decimal('0.001')
MONEY_PLACES = Decimal('0.01')

QUANTITY_MAX_DIGITS = 14
QUANTITY_DECIMAL_PLACES = 3
MONEY_MAX_DIGITS = 14
MONEY_DECIMAL_PLACES = 2

AUDIT_ACTION_CREATE = 'CREATE'
AUDIT_ACTION_UPDATE = 'UPDATE'
AUDIT_ACTION_SOFT_DELETE = 'SOFT_DELETE'
AUDIT_ACTION_STATUS_CHANGE = 'STATUS_CHANGE'
AUDIT_ACTION_STOCK_MOVEMENT = 'STOCK_MOVEMENT'
