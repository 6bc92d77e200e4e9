"""Wealth tier classification."""

from collections.abc import Sequence
from decimal import Decimal

from empire_ledger.domain.models.wealth import TierProgress, WealthTier


WEALTH_TIERS: tuple[WealthTier, ...] = (
    WealthTier(
        "beginner",
        "Beginner",
        "Just starting your journey to financial independence.",
        Decimal("0"),
    ),
    WealthTier(
        "saver",
        "Saver",
        "You've started building a safety net.",
        Decimal("50000"),
    ),
    WealthTier(
        "investor",
        "Investor",
        "Your money is working for you now.",
        Decimal("250000"),
    ),
    WealthTier(
        "entrepreneur",
        "Entrepreneur",
        "Successfully building your wealth empire.",
        Decimal("1000000"),
    ),
    WealthTier(
        "millionaire",
        "Millionaire",
        "You've joined the millionaire club.",
        Decimal("5000000"),
    ),
    WealthTier(
        "tycoon",
        "Tycoon",
        "Your business empire is expanding.",
        Decimal("25000000"),
    ),
    WealthTier(
        "mogul",
        "Mogul",
        "A key player in the financial world.",
        Decimal("100000000"),
    ),
    WealthTier(
        "magnate",
        "Magnate",
        "Among the wealthiest in the world.",
        Decimal("500000000"),
    ),
    WealthTier(
        "titan",
        "Titan",
        "Your influence spans industries and nations.",
        Decimal("1000000000"),
    ),
    WealthTier(
        "legend",
        "Legend",
        "Your name is synonymous with extreme wealth.",
        Decimal("10000000000"),
    ),
)


def validate_tiers(tiers: Sequence[WealthTier]) -> None:
    """Ensure tiers are non-empty and strictly increasing.

    Raises:
        ValueError: If the table is empty or out of order.
    """
    if not tiers:
        raise ValueError("Wealth tier table is empty")
    for lower, upper in zip(tiers, tiers[1:]):
        if upper.min_net_worth <= lower.min_net_worth:
            raise ValueError(
                f"Wealth tier {upper.id} must start above {lower.id}"
            )


def classify_wealth_tier(
    net_worth: Decimal,
    tiers: Sequence[WealthTier] = WEALTH_TIERS,
) -> WealthTier:
    """Return the highest tier whose minimum is at or below the net worth.

    Net worth below the first band resolves to the first band.
    """
    current = tiers[0]
    for tier in tiers:
        if net_worth >= tier.min_net_worth:
            current = tier
        else:
            break
    return current


def get_next_tier_progress(
    net_worth: Decimal,
    tiers: Sequence[WealthTier] = WEALTH_TIERS,
) -> TierProgress:
    """Return progress toward the next tier as a percentage in [0, 100]."""
    current = classify_wealth_tier(net_worth, tiers)
    index = tiers.index(current)
    if index == len(tiers) - 1:
        return TierProgress(current, None, Decimal("100"))
    next_tier = tiers[index + 1]
    span = next_tier.min_net_worth - current.min_net_worth
    progress = (net_worth - current.min_net_worth) / span * Decimal("100")
    progress = min(Decimal("100"), max(Decimal("0"), progress))
    return TierProgress(current, next_tier, progress)


__all__ = [
    "WEALTH_TIERS",
    "classify_wealth_tier",
    "get_next_tier_progress",
    "validate_tiers",
]
