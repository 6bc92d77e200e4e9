"""Read-only registry of specialty ownership assets.

Racing teams, horses, and sports franchises are created and mutated by the
ownership screens; the registry only loads their persisted collections and
values them.
"""

from decimal import Decimal
from typing import Any

from empire_ledger.application.ports.storage import KeyValueStoragePort
from empire_ledger.domain.constants import (
    F1_TEAM_STORAGE_KEY,
    HORSE_RACING_STORAGE_KEY,
    OWNERSHIP_STORAGE_KEYS,
    SPORTS_TEAM_STORAGE_KEY,
)
from empire_ledger.domain.errors import PersistenceError
from empire_ledger.domain.models.ownership import (
    F1Staff,
    F1Team,
    F1Upgrade,
    Horse,
    HorseLine,
    OwnershipBreakdown,
    OwnershipLine,
    SportsTeam,
)
from empire_ledger.domain.services.validation import finite_or_zero
from empire_ledger.domain.services.valuation import (
    calculate_f1_team_value,
    calculate_horse_value,
    calculate_horses_value,
    calculate_sports_team_value,
)
from empire_ledger.infrastructure.logging.logger import get_app_logger


class OwnershipRegistry:
    """Load and value ownership assets from storage."""

    name = "ownership"

    def __init__(self, storage: KeyValueStoragePort, logger=None) -> None:
        """Initialize the registry.

        Args:
            storage: Storage holding the ownership collections.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._storage = storage
        self._logger = logger or get_app_logger()

    def storage_keys(self) -> tuple[str, ...]:
        return OWNERSHIP_STORAGE_KEYS

    def get_f1_team(self) -> F1Team | None:
        """Return the persisted Formula 1 team, or None."""
        payload = self._read(F1_TEAM_STORAGE_KEY)
        team = None
        if isinstance(payload, dict):
            try:
                team = self._parse_f1_team(payload)
            except (AttributeError, TypeError, ValueError) as exc:
                self._logger.warning(f"Ignoring malformed Formula 1 team data: {exc}")
        return team

    def get_horses(self) -> list[Horse]:
        """Return the persisted horses, or an empty list."""
        payload = self._read(HORSE_RACING_STORAGE_KEY)
        horses: list[Horse] = []
        if isinstance(payload, list):
            for index, item in enumerate(payload):
                if not isinstance(item, dict):
                    self._logger.warning(f"Ignoring malformed horse entry #{index}")
                    continue
                horse_id = str(item.get("id") or f"horse-{index}")
                horses.append(
                    Horse(
                        id=horse_id,
                        name=str(item.get("name") or horse_id),
                        price=self._amount(item.get("price"), "price", horse_id),
                        earnings=self._amount(
                            item.get("earnings"),
                            "earnings",
                            horse_id,
                        ),
                    )
                )
        return horses

    def get_sports_team(self) -> SportsTeam | None:
        """Return the persisted sports team, or None."""
        payload = self._read(SPORTS_TEAM_STORAGE_KEY)
        team = None
        if isinstance(payload, dict):
            try:
                team = self._parse_sports_team(payload)
            except (AttributeError, TypeError, ValueError) as exc:
                self._logger.warning(f"Ignoring malformed sports team data: {exc}")
        return team

    def get_total_ownership_value(self) -> Decimal:
        """Return the summed value of every ownership category."""
        return self.get_ownership_breakdown().total

    def get_ownership_breakdown(self) -> OwnershipBreakdown:
        """Return per-category ownership values and the grand total."""
        f1_team = self.get_f1_team()
        horses = self.get_horses()
        sports_team = self.get_sports_team()

        f1_value = calculate_f1_team_value(f1_team)
        horses_value = calculate_horses_value(horses)
        sports_value = calculate_sports_team_value(sports_team)

        return OwnershipBreakdown(
            f1_team=OwnershipLine(
                name=f1_team.name if f1_team else "",
                value=f1_value,
                owned=f1_team is not None,
            ),
            horses=HorseLine(
                count=len(horses),
                value=horses_value,
                items=tuple(
                    OwnershipLine(
                        name=horse.name,
                        value=calculate_horse_value(horse),
                        owned=True,
                    )
                    for horse in horses
                ),
            ),
            sports_team=OwnershipLine(
                name=sports_team.name if sports_team else "",
                value=sports_value,
                owned=sports_team is not None,
            ),
            total=f1_value + horses_value + sports_value,
        )

    def reset(self) -> None:
        """Nothing to drop: every read goes straight to storage.

        The ownership keys themselves are cleared by the complete reset.
        """
        self._logger.debug("Ownership registry reset")

    def _read(self, key: str) -> Any | None:
        try:
            return self._storage.get(key)
        except PersistenceError as exc:
            self._logger.error(f"Failed to read {key}: {exc.message}")
            return None

    def _amount(self, value, field_name: str, record_id: str) -> Decimal:
        return finite_or_zero(
            0 if value is None else value,
            field_name,
            record_id,
            self._logger,
        )

    def _parse_f1_team(self, payload: dict[str, Any]) -> F1Team:
        name = str(payload.get("name") or "Formula 1 Team")
        staff = payload.get("staff") or {}
        drivers = payload.get("drivers") or {}
        if isinstance(drivers, list):
            primary = drivers[0] if len(drivers) > 0 else None
            secondary = drivers[1] if len(drivers) > 1 else None
        else:
            primary = drivers.get("primary")
            secondary = drivers.get("secondary")
        upgrades_raw = payload.get("upgrades") or []
        if isinstance(upgrades_raw, dict):
            upgrades = tuple(
                F1Upgrade(id=str(key), purchased=bool(value))
                for key, value in upgrades_raw.items()
            )
        else:
            upgrades = tuple(
                F1Upgrade(
                    id=str(item.get("id", index)),
                    purchased=bool(item.get("purchased", False)),
                )
                for index, item in enumerate(upgrades_raw)
                if isinstance(item, dict)
            )
        return F1Team(
            name=name,
            budget=self._amount(payload.get("budget"), "budget", name),
            funds=self._amount(payload.get("funds"), "funds", name),
            staff=F1Staff(
                engineers=int(staff.get("engineers", 0) or 0),
                mechanics=int(staff.get("mechanics", 0) or 0),
                aerodynamicists=int(staff.get("aerodynamicists", 0) or 0),
                strategists=int(staff.get("strategists", 0) or 0),
            ),
            primary_driver=_driver_name(primary),
            secondary_driver=_driver_name(secondary),
            reputation=self._amount(payload.get("reputation"), "reputation", name),
            upgrades=upgrades,
        )

    def _parse_sports_team(self, payload: dict[str, Any]) -> SportsTeam:
        name = str(payload.get("name") or "Sports Team")
        value = payload.get("value")
        salaries = payload.get("playerSalaries")
        if salaries is None:
            players = payload.get("players") or []
            salaries = sum(
                (
                    self._amount(player.get("salary"), "salary", name)
                    for player in players
                    if isinstance(player, dict)
                ),
                Decimal("0"),
            )
        return SportsTeam(
            name=name,
            value=None if value is None else self._amount(value, "value", name),
            revenue=self._amount(payload.get("revenue"), "revenue", name),
            player_salaries=self._amount(salaries, "playerSalaries", name),
        )


def _driver_name(driver) -> str | None:
    if not driver:
        return None
    if isinstance(driver, dict):
        return str(driver.get("name") or driver.get("id") or "driver")
    return str(driver)


__all__ = ["OwnershipRegistry"]
