"""
Money Utilities - Safe Decimal operations for prices.

Avoids float precision issues by using Decimal throughout.
Floats appear only at the JSON boundary (see to_float).
"""
import math
from decimal import Decimal, InvalidOperation
from typing import Union

Numeric = Union[str, int, float, Decimal, None]

ZERO = Decimal("0")


def to_decimal(value: Numeric) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return ZERO

    if isinstance(value, Decimal):
        return value

    try:
        # Convert via string to avoid float precision issues
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return ZERO


def to_price(value: object) -> Decimal:
    """
    Convert catalog price data to a usable unit price.

    Missing, malformed, non-finite and negative values all degrade to 0
    so incomplete catalog rows still land in the cart. So do values too
    large to survive the float conversion at the JSON boundary.
    """
    if isinstance(value, bool):
        return ZERO
    price = to_decimal(value)  # type: ignore[arg-type]
    if not price.is_finite() or price < 0 or not math.isfinite(float(price)):
        return ZERO
    return price


def multiply(value: Numeric, factor: Numeric) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def to_float(value: Numeric) -> float:
    """
    Convert Decimal to float for JSON serialization.

    Use only at API/storage boundaries, not for internal calculations.
    Values beyond float range map to 0.0 so the output stays valid JSON.
    """
    result = float(to_decimal(value))
    return result if math.isfinite(result) else 0.0
