"""Domain services package."""

from .aggregation import compute_aggregate_snapshot, default_snapshot
from .market_hours import is_market_open, is_weekday
from .validation import finite_or_zero
from .valuation import (
    calculate_f1_team_value,
    calculate_horse_value,
    calculate_horses_value,
    calculate_sports_team_value,
)
from .wealth_tiers import (
    WEALTH_TIERS,
    classify_wealth_tier,
    get_next_tier_progress,
    validate_tiers,
)

__all__ = [
    "WEALTH_TIERS",
    "calculate_f1_team_value",
    "calculate_horse_value",
    "calculate_horses_value",
    "calculate_sports_team_value",
    "classify_wealth_tier",
    "compute_aggregate_snapshot",
    "default_snapshot",
    "finite_or_zero",
    "get_next_tier_progress",
    "is_market_open",
    "is_weekday",
    "validate_tiers",
]
