"""Specialty ownership assets read by the ownership registry."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class F1Staff:
    """Head counts per Formula 1 staff role."""

    engineers: int = 0
    mechanics: int = 0
    aerodynamicists: int = 0
    strategists: int = 0

    @property
    def total(self) -> int:
        return self.engineers + self.mechanics + self.aerodynamicists + self.strategists


@dataclass(frozen=True)
class F1Upgrade:
    """Car upgrade available to a Formula 1 team."""

    id: str
    purchased: bool = False


@dataclass(frozen=True)
class F1Team:
    """Formula 1 team owned by the player."""

    name: str
    budget: Decimal = Decimal("0")
    funds: Decimal = Decimal("0")
    staff: F1Staff = field(default_factory=F1Staff)
    primary_driver: str | None = None
    secondary_driver: str | None = None
    reputation: Decimal = Decimal("0")
    upgrades: tuple[F1Upgrade, ...] = ()

    @property
    def purchased_upgrades(self) -> int:
        return sum(1 for upgrade in self.upgrades if upgrade.purchased)


@dataclass(frozen=True)
class Horse:
    """Racehorse in the player's stable."""

    id: str
    name: str
    price: Decimal = Decimal("0")
    earnings: Decimal = Decimal("0")


@dataclass(frozen=True)
class SportsTeam:
    """Sports franchise owned by the player.

    An explicit ``value`` wins over the revenue and payroll estimate.
    """

    name: str
    value: Decimal | None = None
    revenue: Decimal = Decimal("0")
    player_salaries: Decimal = Decimal("0")


@dataclass(frozen=True)
class OwnershipLine:
    """Single owned asset line in the breakdown."""

    name: str
    value: Decimal
    owned: bool


@dataclass(frozen=True)
class HorseLine:
    """Aggregated stable line in the breakdown."""

    count: int
    value: Decimal
    items: tuple[OwnershipLine, ...] = ()


@dataclass(frozen=True)
class OwnershipBreakdown:
    """Itemized ownership values plus grand total."""

    f1_team: OwnershipLine
    horses: HorseLine
    sports_team: OwnershipLine
    total: Decimal


__all__ = [
    "F1Staff",
    "F1Upgrade",
    "F1Team",
    "Horse",
    "SportsTeam",
    "OwnershipLine",
    "HorseLine",
    "OwnershipBreakdown",
]
