"""Error taxonomy for the asset engine.

Only ``PersistenceError`` is raised: storage adapters raise it and the owning
component catches it, logs it, and falls back to a safe default. The other
classes are never raised. They are built as structured log payloads for
recoverable conditions (cash drift, coerced numbers, price misses, reset
residue); the component logs their ``message`` and carries on.
"""

from datetime import datetime
from typing import Any


class EmpireLedgerError(Exception):
    """Base class for engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now()
        super().__init__(message)


class PersistenceError(EmpireLedgerError):
    """Storage read or write failure."""


class ConsistencyError(EmpireLedgerError):
    """Cash mismatch between the ledger and the character facade."""


class CalculationError(EmpireLedgerError):
    """Non-finite or missing numeric field met during a recompute."""


class ResetVerificationFailure(EmpireLedgerError):
    """Residual state found after a reset."""


class LookupMiss(EmpireLedgerError):
    """Asset id not found in any price source."""


__all__ = [
    "EmpireLedgerError",
    "PersistenceError",
    "ConsistencyError",
    "CalculationError",
    "ResetVerificationFailure",
    "LookupMiss",
]
