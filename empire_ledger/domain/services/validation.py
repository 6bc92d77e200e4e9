"""Domain validation helpers."""

from decimal import Decimal
from logging import Logger

from empire_ledger.domain.errors import CalculationError
from empire_ledger.domain.models.records import parse_amount


def finite_or_zero(
    value,
    field_name: str,
    record_id: str,
    logger: Logger,
) -> Decimal:
    """Return the value as a finite Decimal, or zero with a warning.

    Args:
        value: Raw numeric value from a record.
        field_name: Field being folded, used in the warning.
        record_id: Identifier of the owning record.
        logger: Logger used for warnings.

    Returns:
        Decimal: The finite value, or ``Decimal("0")`` when it was missing
        or non-finite.
    """
    amount = parse_amount(value)
    if amount.is_finite():
        return amount
    error = CalculationError(
        f"Non-finite {field_name} on record {record_id}; using 0",
        {"field": field_name, "record_id": record_id, "value": str(value)},
    )
    logger.warning(error.message)
    return Decimal("0")


__all__ = ["finite_or_zero"]
