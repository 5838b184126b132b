# src/eurofx/application/conversion.py
"""
Conversion Calculator - Foreign Currency to EUR

Stored rates are "units of foreign currency per 1 EUR", so an amount in a
foreign currency converts to EUR as amount / rate, rounded half-up to four
decimal places.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from eurofx.domain.errors import ValidationError

CONVERSION_SCALE = 4
_QUANTUM = Decimal(1).scaleb(-CONVERSION_SCALE)  # Decimal("0.0001")


def convert(amount: Decimal, rate: Decimal) -> Decimal:
    """
    Convert a foreign currency amount to EUR.
    
    Args:
        amount: Amount in the foreign currency (> 0)
        rate: Units of the foreign currency per 1 EUR (> 0)
        
    Returns:
        EUR amount rounded half-up to 4 decimal places
        
    Raises:
        ValidationError: If amount or rate is not strictly positive
    """
    if amount is None or amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    if rate is None or rate <= 0:
        raise ValidationError("Rate must be greater than zero")
    return (Decimal(amount) / Decimal(rate)).quantize(_QUANTUM, rounding=ROUND_HALF_UP)
