"""Application stores package."""

from .asset_ledger import AssetLedger
from .character_wealth import CharacterWealthFacade
from .events import ChangeNotifier, StoreChange
from .game_clock import GameClock
from .keyed_state_store import KeyedStateStore
from .ownership_registry import OwnershipRegistry
from .reset_flags import ResetFlags

__all__ = [
    "AssetLedger",
    "ChangeNotifier",
    "CharacterWealthFacade",
    "GameClock",
    "KeyedStateStore",
    "OwnershipRegistry",
    "ResetFlags",
    "StoreChange",
]
