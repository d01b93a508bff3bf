"""
Core — Shared Constants

@file core/constants.py
"""

AUDIT_ACTION_CREATE = 'CREATE'
AUDIT_ACTION_UPDATE = 'UPDATE'
AUDIT_ACTION_DELETE = 'DELETE'
AUDIT_ACTION_SOFT_DELETE = 'SOFT_DELETE'
AUDIT_ACTION_STATUS_CHANGE = 'STATUS_CHANGE'

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 200

# Stock quantities are fractional (kg, L): 12 digits, 3 decimals.
QUANTITY_MAX_DIGITS = 12
QUANTITY_DECIMAL_PLACES = 3

# Currency amounts (EUR).
AMOUNT_MAX_DIGITS = 12
AMOUNT_DECIMAL_PLACES = 2

CART_SESSION_KEY = 'cart'
