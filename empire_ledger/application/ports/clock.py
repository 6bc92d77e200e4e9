"""Port for reading the current (game) time."""

from datetime import datetime
from typing import Protocol


class ClockPort(Protocol):
    """Port exposing the moment used for market-hours decisions."""

    def now(self) -> datetime:
        """Return the current local date and time."""


__all__ = ["ClockPort"]
