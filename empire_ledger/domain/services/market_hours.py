"""Trading-hour rules for market-priced assets."""

from datetime import datetime

from empire_ledger.domain.constants import MARKET_CLOSE_HOUR, MARKET_OPEN_HOUR


def is_weekday(moment: datetime) -> bool:
    return moment.weekday() < 5


def is_market_open(moment: datetime) -> bool:
    """Return True on weekdays between 09:00 and 16:00 local time."""
    if not is_weekday(moment):
        return False
    return MARKET_OPEN_HOUR <= moment.hour < MARKET_CLOSE_HOUR


__all__ = ["is_weekday", "is_market_open"]
