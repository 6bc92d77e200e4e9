"""Domain models package."""

from .control import (
    RefreshControlState,
    RefreshResult,
    RefreshStatus,
    ResetPhase,
    ResetReport,
)
from .ownership import (
    F1Staff,
    F1Team,
    F1Upgrade,
    Horse,
    HorseLine,
    OwnershipBreakdown,
    OwnershipLine,
    SportsTeam,
)
from .records import (
    AssetCategory,
    AssetRecord,
    BondHolding,
    CashBalance,
    CryptoHolding,
    LifestyleItem,
    OtherInvestment,
    PropertyHolding,
    StockHolding,
)
from .snapshot import AggregateSnapshot, NetWorthBreakdown
from .wealth import TierProgress, WealthTier

__all__ = [
    "AggregateSnapshot",
    "AssetCategory",
    "AssetRecord",
    "BondHolding",
    "CashBalance",
    "CryptoHolding",
    "F1Staff",
    "F1Team",
    "F1Upgrade",
    "Horse",
    "HorseLine",
    "LifestyleItem",
    "NetWorthBreakdown",
    "OtherInvestment",
    "OwnershipBreakdown",
    "OwnershipLine",
    "PropertyHolding",
    "RefreshControlState",
    "RefreshResult",
    "RefreshStatus",
    "ResetPhase",
    "ResetReport",
    "SportsTeam",
    "StockHolding",
    "TierProgress",
    "WealthTier",
]
