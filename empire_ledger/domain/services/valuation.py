"""Valuation formulas for ownership assets."""

from collections.abc import Iterable
from decimal import Decimal

from empire_ledger.domain.constants import (
    F1_PRIMARY_DRIVER_VALUE,
    F1_REPUTATION_POINT_VALUE,
    F1_SECONDARY_DRIVER_VALUE,
    F1_STAFF_MEMBER_VALUE,
    F1_UPGRADE_VALUE,
    HORSE_EARNINGS_WEIGHT,
    SPORTS_TEAM_REVENUE_MULTIPLE,
    SPORTS_TEAM_SALARY_MULTIPLE,
)
from empire_ledger.domain.models.ownership import F1Team, Horse, SportsTeam


def calculate_f1_team_value(team: F1Team | None) -> Decimal:
    """Value a Formula 1 team.

    budget + funds + 50,000 per staff member + 500,000 with a primary
    driver + 250,000 with a secondary driver + 10,000 per reputation point
    + 100,000 per purchased upgrade.
    """
    if team is None:
        return Decimal("0")
    value = team.budget + team.funds
    value += F1_STAFF_MEMBER_VALUE * team.staff.total
    if team.primary_driver:
        value += F1_PRIMARY_DRIVER_VALUE
    if team.secondary_driver:
        value += F1_SECONDARY_DRIVER_VALUE
    value += F1_REPUTATION_POINT_VALUE * team.reputation
    value += F1_UPGRADE_VALUE * team.purchased_upgrades
    return value


def calculate_horse_value(horse: Horse) -> Decimal:
    """Value one horse as price plus half of its earnings."""
    return horse.price + HORSE_EARNINGS_WEIGHT * horse.earnings


def calculate_horses_value(horses: Iterable[Horse]) -> Decimal:
    return sum(
        (calculate_horse_value(horse) for horse in horses),
        Decimal("0"),
    )


def calculate_sports_team_value(team: SportsTeam | None) -> Decimal:
    """Value a sports franchise.

    The stored value wins; otherwise 5x revenue plus 3x player salaries.
    """
    if team is None:
        return Decimal("0")
    if team.value is not None:
        return team.value
    return (
        SPORTS_TEAM_REVENUE_MULTIPLE * team.revenue
        + SPORTS_TEAM_SALARY_MULTIPLE * team.player_salaries
    )


__all__ = [
    "calculate_f1_team_value",
    "calculate_horse_value",
    "calculate_horses_value",
    "calculate_sports_team_value",
]
