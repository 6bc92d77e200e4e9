"""Composition root for wiring the engine stores and use cases."""

from collections.abc import Callable
from dataclasses import dataclass

from empire_ledger.application.ports.database import DatabaseEnginePort
from empire_ledger.application.ports.storage import KeyValueStoragePort
from empire_ledger.application.stores.asset_ledger import AssetLedger
from empire_ledger.application.stores.character_wealth import CharacterWealthFacade
from empire_ledger.application.stores.game_clock import GameClock
from empire_ledger.application.stores.keyed_state_store import KeyedStateStore
from empire_ledger.application.stores.ownership_registry import OwnershipRegistry
from empire_ledger.application.stores.reset_flags import ResetFlags
from empire_ledger.application.use_cases.get_net_worth_breakdown import (
    GetNetWorthBreakdownUseCase,
)
from empire_ledger.application.use_cases.perform_complete_reset import (
    ResetChoreographer,
)
from empire_ledger.application.use_cases.refresh_assets import RefreshCoordinator
from empire_ledger.domain.constants import (
    ECONOMY_STORAGE_KEY,
    GAME_STORAGE_KEY,
    RANDOM_EVENTS_STORAGE_KEY,
)
from empire_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from empire_ledger.infrastructure.logging.logger import get_app_logger
from empire_ledger.infrastructure.settings import EngineSettings
from empire_ledger.infrastructure.storage import (
    InMemoryKeyValueStorage,
    SqlAlchemyKeyValueStorage,
)


DEFAULT_ECONOMY_STATE = {
    "economyState": "stable",
    "marketTrend": "stable",
    "stockMarketHealth": 50,
    "realEstateMarketHealth": 50,
    "inflation": 2.5,
    "interestRate": 3.0,
}
DEFAULT_GAME_STATE = {"phase": "ready"}
DEFAULT_RANDOM_EVENTS_STATE = {"activeEvents": [], "eventHistory": []}


@dataclass(frozen=True)
class EmpireEngine:
    """Wired engine components shared by the adapters."""

    settings: EngineSettings
    storage: KeyValueStoragePort
    flags: ResetFlags
    registry: OwnershipRegistry
    clock: GameClock
    facade: CharacterWealthFacade
    ledger: AssetLedger
    adjacent_stores: tuple[KeyedStateStore, ...]
    coordinator: RefreshCoordinator
    choreographer: ResetChoreographer
    breakdown: GetNetWorthBreakdownUseCase


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_game_storage(
    settings: EngineSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> KeyValueStoragePort:
    """Return the configured game storage."""
    resolved = settings or EngineSettings.from_env()
    if resolved.storage_backend == "memory":
        return InMemoryKeyValueStorage()
    return SqlAlchemyKeyValueStorage(
        db_port or build_database_adapter(),
        logger=get_app_logger(),
    )


def build_session_storage() -> KeyValueStoragePort:
    """Return the short-lived storage holding session flags."""
    return InMemoryKeyValueStorage()


def build_adjacent_stores(
    storage: KeyValueStoragePort,
) -> tuple[KeyedStateStore, ...]:
    """Return the economy, game, and random events stores."""
    logger = get_app_logger()
    return (
        KeyedStateStore(
            "economy",
            ECONOMY_STORAGE_KEY,
            DEFAULT_ECONOMY_STATE,
            storage=storage,
            logger=logger,
        ),
        KeyedStateStore(
            "game",
            GAME_STORAGE_KEY,
            DEFAULT_GAME_STATE,
            storage=storage,
            logger=logger,
        ),
        KeyedStateStore(
            "random_events",
            RANDOM_EVENTS_STORAGE_KEY,
            DEFAULT_RANDOM_EVENTS_STATE,
            storage=storage,
            logger=logger,
        ),
    )


def build_engine(
    settings: EngineSettings | None = None,
    storage: KeyValueStoragePort | None = None,
    session_storage: KeyValueStoragePort | None = None,
    navigate: Callable[[], None] | None = None,
    load: bool = True,
) -> EmpireEngine:
    """Wire every store and use case around one game storage.

    Args:
        settings: Optional settings; read from the environment when omitted.
        storage: Optional game storage; built from settings when omitted.
        session_storage: Optional storage for reset flags.
        navigate: Optional hook called after a complete reset.
        load: Hydrate the stores from storage before returning.

    Returns:
        EmpireEngine: The wired components.
    """
    resolved = settings or EngineSettings.from_env()
    game_storage = storage or build_game_storage(resolved)
    logger = get_app_logger()

    flags = ResetFlags(session_storage or build_session_storage(), logger=logger)
    registry = OwnershipRegistry(game_storage, logger=logger)
    clock = GameClock(game_storage, logger=logger)
    facade = CharacterWealthFacade(
        game_storage,
        starting_cash=resolved.starting_cash,
        logger=logger,
    )
    ledger = AssetLedger(
        game_storage,
        registry,
        clock,
        starting_cash=resolved.starting_cash,
        flags=flags,
        logger=logger,
    )
    adjacent = build_adjacent_stores(game_storage)
    coordinator = RefreshCoordinator(
        ledger,
        facade,
        logger=logger,
        throttle_seconds=resolved.throttle_seconds,
        debounce_seconds=resolved.debounce_seconds,
        stage_delay_seconds=resolved.stage_delay_seconds,
        always_fresh_views=resolved.always_fresh_views,
    )
    choreographer = ResetChoreographer(
        game_storage,
        flags,
        ledger,
        registry,
        clock,
        facade,
        adjacent_stores=adjacent,
        navigate=navigate,
        logger=logger,
    )

    if load:
        clock.load()
        facade.load()
        ledger.load()

    return EmpireEngine(
        settings=resolved,
        storage=game_storage,
        flags=flags,
        registry=registry,
        clock=clock,
        facade=facade,
        ledger=ledger,
        adjacent_stores=adjacent,
        coordinator=coordinator,
        choreographer=choreographer,
        breakdown=GetNetWorthBreakdownUseCase(ledger, flags, logger=logger),
    )


__all__ = [
    "DEFAULT_ECONOMY_STATE",
    "DEFAULT_GAME_STATE",
    "DEFAULT_RANDOM_EVENTS_STATE",
    "EmpireEngine",
    "build_adjacent_stores",
    "build_database_adapter",
    "build_engine",
    "build_game_storage",
    "build_session_storage",
]
