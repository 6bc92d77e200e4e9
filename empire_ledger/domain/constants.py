"""Domain constants for the asset ledger and its neighbours."""

from decimal import Decimal


DEFAULT_STARTING_CASH = Decimal("10000")
CASH_RECONCILIATION_TOLERANCE = Decimal("0.01")

ASSET_TRACKER_STORAGE_KEY = "business-empire-asset-tracker"
NET_WORTH_BREAKDOWN_STORAGE_KEY = "business-empire-networth-breakdown"
MARKET_PRICES_STORAGE_KEY = "business-empire-market-prices"
LEGACY_ASSETS_STORAGE_KEY = "business-empire-assets"

F1_TEAM_STORAGE_KEY = "business-empire-formula1-team"
HORSE_RACING_STORAGE_KEY = "business-empire-horse-racing"
SPORTS_TEAM_STORAGE_KEY = "business-empire-sports-team"

CHARACTER_STORAGE_KEY = "business-empire-character"
TIME_STORAGE_KEY = "business-empire-time"
ECONOMY_STORAGE_KEY = "business-empire-economy"
GAME_STORAGE_KEY = "business-empire-game"
RANDOM_EVENTS_STORAGE_KEY = "business-empire-random-events"

LEDGER_STORAGE_KEYS = (
    ASSET_TRACKER_STORAGE_KEY,
    NET_WORTH_BREAKDOWN_STORAGE_KEY,
    MARKET_PRICES_STORAGE_KEY,
    LEGACY_ASSETS_STORAGE_KEY,
)

OWNERSHIP_STORAGE_KEYS = (
    F1_TEAM_STORAGE_KEY,
    HORSE_RACING_STORAGE_KEY,
    SPORTS_TEAM_STORAGE_KEY,
)

RESET_IN_PROGRESS_FLAG = "game_reset_in_progress"
RESET_COMPLETED_FLAG = "game_reset_completed"
RESET_TIMESTAMP_FLAG = "game_reset_timestamp"

MARKET_OPEN_HOUR = 9
MARKET_CLOSE_HOUR = 16

F1_STAFF_MEMBER_VALUE = Decimal("50000")
F1_PRIMARY_DRIVER_VALUE = Decimal("500000")
F1_SECONDARY_DRIVER_VALUE = Decimal("250000")
F1_REPUTATION_POINT_VALUE = Decimal("10000")
F1_UPGRADE_VALUE = Decimal("100000")
HORSE_EARNINGS_WEIGHT = Decimal("0.5")
SPORTS_TEAM_REVENUE_MULTIPLE = Decimal("5")
SPORTS_TEAM_SALARY_MULTIPLE = Decimal("3")


__all__ = [
    "DEFAULT_STARTING_CASH",
    "CASH_RECONCILIATION_TOLERANCE",
    "ASSET_TRACKER_STORAGE_KEY",
    "NET_WORTH_BREAKDOWN_STORAGE_KEY",
    "MARKET_PRICES_STORAGE_KEY",
    "LEGACY_ASSETS_STORAGE_KEY",
    "F1_TEAM_STORAGE_KEY",
    "HORSE_RACING_STORAGE_KEY",
    "SPORTS_TEAM_STORAGE_KEY",
    "CHARACTER_STORAGE_KEY",
    "TIME_STORAGE_KEY",
    "ECONOMY_STORAGE_KEY",
    "GAME_STORAGE_KEY",
    "RANDOM_EVENTS_STORAGE_KEY",
    "LEDGER_STORAGE_KEYS",
    "OWNERSHIP_STORAGE_KEYS",
    "RESET_IN_PROGRESS_FLAG",
    "RESET_COMPLETED_FLAG",
    "RESET_TIMESTAMP_FLAG",
    "MARKET_OPEN_HOUR",
    "MARKET_CLOSE_HOUR",
    "F1_STAFF_MEMBER_VALUE",
    "F1_PRIMARY_DRIVER_VALUE",
    "F1_SECONDARY_DRIVER_VALUE",
    "F1_REPUTATION_POINT_VALUE",
    "F1_UPGRADE_VALUE",
    "HORSE_EARNINGS_WEIGHT",
    "SPORTS_TEAM_REVENUE_MULTIPLE",
    "SPORTS_TEAM_SALARY_MULTIPLE",
]
