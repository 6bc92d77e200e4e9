"""Domain package for business rules and core models."""

from .constants import (
    CASH_RECONCILIATION_TOLERANCE,
    DEFAULT_STARTING_CASH,
    LEDGER_STORAGE_KEYS,
    OWNERSHIP_STORAGE_KEYS,
)
from .errors import (
    CalculationError,
    ConsistencyError,
    EmpireLedgerError,
    LookupMiss,
    PersistenceError,
    ResetVerificationFailure,
)
from .models import (
    AggregateSnapshot,
    AssetCategory,
    OwnershipBreakdown,
    WealthTier,
)
from .services import (
    WEALTH_TIERS,
    classify_wealth_tier,
    compute_aggregate_snapshot,
    is_market_open,
)

__all__ = [
    "AggregateSnapshot",
    "AssetCategory",
    "CASH_RECONCILIATION_TOLERANCE",
    "CalculationError",
    "ConsistencyError",
    "DEFAULT_STARTING_CASH",
    "EmpireLedgerError",
    "LEDGER_STORAGE_KEYS",
    "LookupMiss",
    "OWNERSHIP_STORAGE_KEYS",
    "OwnershipBreakdown",
    "PersistenceError",
    "ResetVerificationFailure",
    "WEALTH_TIERS",
    "WealthTier",
    "classify_wealth_tier",
    "compute_aggregate_snapshot",
    "is_market_open",
]
