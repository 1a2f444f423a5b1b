"""
Custom Validators
Phone and amount checks shared by the request schemas, the payment
service and the CLI
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from feepay.errors.exceptions import InvalidAmount

COUNTRY_CODE = '254'
CANONICAL_PHONE_LENGTH = 12

_NON_DIGITS = re.compile(r'\D')


def normalize_phone(raw: Any) -> Optional[str]:
    """
    Convert a locally formatted mobile number to the gateway's canonical form

    Accepts: 0712345678, 254712345678, +254 712 345 678, 0712-345-678

    Args:
        raw: Phone number as typed by the applicant

    Returns:
        The 12-digit number (254XXXXXXXXX) or None if it cannot be normalized
    """
    if raw is None:
        return None

    cleaned = _NON_DIGITS.sub('', str(raw))

    if cleaned.startswith('0'):
        normalized = COUNTRY_CODE + cleaned[1:]
    elif cleaned.startswith(COUNTRY_CODE):
        normalized = cleaned
    else:
        return None

    if len(normalized) != CANONICAL_PHONE_LENGTH:
        return None

    return normalized


def is_valid_phone(raw: Any) -> bool:
    return normalize_phone(raw) is not None


def validate_amount(amount: Any) -> Union[int, float]:
    """
    Validate a payment amount

    Args:
        amount: Amount as received (number, Decimal or numeric string)

    Returns:
        The amount as int when integral, float otherwise

    Raises:
        InvalidAmount: If the amount is not a finite number greater than 0
    """
    if isinstance(amount, bool) or amount is None:
        raise InvalidAmount("Invalid amount")

    try:
        if isinstance(amount, Decimal):
            value = float(amount)
        elif isinstance(amount, (int, float)):
            value = float(amount)
        elif isinstance(amount, str):
            value = float(Decimal(amount.strip()))
        else:
            raise InvalidAmount(f"Amount must be a number, got {type(amount).__name__}")
    except (InvalidOperation, ValueError):
        raise InvalidAmount("Invalid amount")

    if not math.isfinite(value) or value <= 0:
        raise InvalidAmount("Invalid amount")

    if value.is_integer():
        return int(value)
    return value
