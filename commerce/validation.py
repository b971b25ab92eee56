# commerce/validation.py
"""
Precondition checks for account and order creation.

Every check either returns a normalized value or raises a ValidationError
subclass; services translate the error into the INVALID_ID sentinel.
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from commerce.errors import (
    InvalidAmountError,
    InvalidContactError,
    InvalidDescriptionError,
    InvalidNameError,
)

# order amounts must lie within [1e-12, 1e16) so per-owner totals never overflow
MIN_AMOUNT_EXPONENT = -12
MAX_AMOUNT_EXPONENT = 15


def _to_decimal_or_none(x: Any) -> Optional[Decimal]:
    if x is None or isinstance(x, bool):
        return None
    if isinstance(x, Decimal):
        return x
    if isinstance(x, (int, float)):
        try:
            x = str(x)
        except ValueError:
            # int past the interpreter's str-conversion digit limit
            return None
    if not isinstance(x, str):
        return None
    x = x.strip()
    if not x:
        return None
    try:
        return Decimal(x)
    except (InvalidOperation, ValueError):
        return None


def check_name(name: Any) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidNameError("name must be a non-empty string", name=name)
    return name


def check_contact(contact: Any, *, strict: bool = True, separator: str = "@") -> str:
    """
    strict=True  -> contact must contain `separator` (documented contract)
    strict=False -> any non-empty string (legacy behaviour)
    """
    if not isinstance(contact, str) or not contact:
        raise InvalidContactError("contact must be a non-empty string", contact=contact)
    if strict and separator not in contact:
        raise InvalidContactError(f"contact must contain {separator!r}", contact=contact)
    return contact


def check_description(description: Any) -> str:
    if not isinstance(description, str) or not description:
        raise InvalidDescriptionError("item_description must be a non-empty string",
                                      item_description=description)
    return description


def check_amount(amount: Any) -> Decimal:
    value = _to_decimal_or_none(amount)
    if value is None or not value.is_finite():
        raise InvalidAmountError("amount must be a finite number", amount=amount)
    if value <= 0:
        raise InvalidAmountError("amount must be greater than zero", amount=amount)
    if not MIN_AMOUNT_EXPONENT <= value.adjusted() <= MAX_AMOUNT_EXPONENT:
        raise InvalidAmountError("amount magnitude out of range", amount=amount)
    return value
