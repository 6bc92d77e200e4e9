"""Helpers for Decimal normalization."""

from decimal import Decimal


ZERO = Decimal("0")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from storage or callers.

    Returns:
        Decimal: Normalized numeric value.

    Raises:
        InvalidOperation: If the value cannot be parsed as a number.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return Decimal(int(value))
    return Decimal(str(value))


def decimal_to_str(value: Decimal) -> str:
    """Serialize a Decimal for JSON payloads without exponent noise.

    No context rounding is applied, so magnitudes beyond the context
    precision serialize exactly.
    """
    if value == value.to_integral_value():
        return format(value.to_integral_value(), "f")
    return format(value, "f").rstrip("0")


__all__ = ["ZERO", "coerce_decimal", "decimal_to_str"]
