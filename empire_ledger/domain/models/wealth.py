"""Wealth tier models."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class WealthTier:
    """Named net worth band.

    Attributes:
        id: Stable identifier stored in snapshots.
        name: Display name.
        description: Flavor text for status displays.
        min_net_worth: Inclusive lower bound of the band.
    """

    id: str
    name: str
    description: str
    min_net_worth: Decimal


@dataclass(frozen=True)
class TierProgress:
    """Progress from the current tier toward the next one."""

    current_tier: WealthTier
    next_tier: WealthTier | None
    progress: Decimal


__all__ = ["WealthTier", "TierProgress"]
