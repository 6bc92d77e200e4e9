"""Use case returning every game store to its starting state."""

from collections.abc import Callable, Sequence

from empire_ledger.application.ports.resettable import ResettableStorePort
from empire_ledger.application.ports.storage import KeyValueStoragePort
from empire_ledger.application.stores.asset_ledger import AssetLedger
from empire_ledger.application.stores.character_wealth import CharacterWealthFacade
from empire_ledger.application.stores.game_clock import GameClock
from empire_ledger.application.stores.ownership_registry import OwnershipRegistry
from empire_ledger.application.stores.reset_flags import ResetFlags
from empire_ledger.domain.errors import PersistenceError, ResetVerificationFailure
from empire_ledger.domain.models.control import ResetPhase, ResetReport
from empire_ledger.infrastructure.logging.logger import get_app_logger


MAX_CLEAR_ATTEMPTS = 3


class ResetChoreographer:
    """Drive a complete reset through its ordered phases.

    Phases: flag the reset, clear game storage, reset the ledger and
    ownership registry, then time, character, and the adjacent stores,
    verify, and finally mark completion. A failing phase is logged and
    recorded in the report; later phases still run.
    """

    def __init__(
        self,
        storage: KeyValueStoragePort,
        flags: ResetFlags,
        ledger: AssetLedger,
        registry: OwnershipRegistry,
        clock: GameClock,
        facade: CharacterWealthFacade,
        adjacent_stores: Sequence[ResettableStorePort] = (),
        navigate: Callable[[], None] | None = None,
        logger=None,
        max_clear_attempts: int = MAX_CLEAR_ATTEMPTS,
    ) -> None:
        """Initialize the choreographer.

        Args:
            storage: Game storage holding every store's key.
            flags: Session reset markers.
            ledger: Asset ledger.
            registry: Ownership registry.
            clock: Game clock.
            facade: Character wealth facade.
            adjacent_stores: Economy, game, and random event stores.
            navigate: Optional hook moving the player to the start screen.
            logger: Optional logger compatible with logging.Logger-like API.
            max_clear_attempts: Passes allowed to remove reappearing keys.
        """
        self._storage = storage
        self._flags = flags
        self._ledger = ledger
        self._registry = registry
        self._clock = clock
        self._facade = facade
        self._adjacent_stores = tuple(adjacent_stores)
        self._navigate = navigate
        self._logger = logger or get_app_logger()
        self._max_clear_attempts = max(1, max_clear_attempts)

    def storage_keys(self) -> tuple[str, ...]:
        """Return the explicit list of game keys cleared by a reset."""
        keys: list[str] = []
        owners = (
            self._ledger,
            self._registry,
            self._clock,
            self._facade,
            *self._adjacent_stores,
        )
        for owner in owners:
            for key in owner.storage_keys():
                if key not in keys:
                    keys.append(key)
        return tuple(keys)

    def perform_complete_reset(self) -> ResetReport:
        """Reset every store and verify nothing from the old game remains.

        Returns:
            ResetReport: Completed phases, cleared and stray keys, failed
            steps, and the verification outcome.
        """
        report = ResetReport()
        self._logger.info("Complete game reset started")

        self._run_phase(report, ResetPhase.FLAGGED, self._flags.mark_in_progress)
        self._run_phase(
            report,
            ResetPhase.STORAGE_CLEARED,
            lambda: self._clear_storage(report),
        )
        self._run_phase(report, ResetPhase.LEDGER_RESET, self._reset_ledger)
        self._run_phase(report, ResetPhase.TIME_RESET, self._clock.reset)
        self._run_phase(report, ResetPhase.CHARACTER_RESET, self._facade.reset)
        self._run_phase(report, ResetPhase.ADJACENT_RESET, self._reset_adjacent)
        self._run_phase(report, ResetPhase.VERIFIED, lambda: self._verify(report))
        self._run_phase(report, ResetPhase.COMPLETED, self._complete)

        if report.success:
            self._logger.info(report.message)
        else:
            self._logger.error(report.message)
        return report

    def _run_phase(
        self,
        report: ResetReport,
        phase: ResetPhase,
        step: Callable[[], None],
    ) -> None:
        try:
            step()
        except Exception as exc:
            self._logger.error(f"Reset phase {phase.value} failed: {exc}")
            report.failed_steps.append(phase.value)
            return
        report.phases.append(phase)

    def _clear_storage(self, report: ResetReport) -> None:
        keys = self.storage_keys()
        for attempt in range(self._max_clear_attempts):
            present = [key for key in keys if self._contains(key)]
            if not present:
                return
            for key in present:
                self._storage.remove(key)
                if attempt == 0:
                    report.cleared_keys.append(key)
                elif key not in report.stray_keys:
                    report.stray_keys.append(key)
        remaining = [key for key in keys if self._contains(key)]
        if remaining:
            self._logger.warning(
                f"Keys still present after {self._max_clear_attempts} "
                f"clear attempts: {', '.join(remaining)}"
            )

    def _reset_ledger(self) -> None:
        if not self._ledger.reset_asset_tracker():
            self._logger.warning("Ledger needed a forced clear during reset")
        self._registry.reset()

    def _reset_adjacent(self) -> None:
        for store in self._adjacent_stores:
            store.reset()

    def _verify(self, report: ResetReport) -> None:
        problems = self._residual_state()
        if not problems:
            report.verification_passed = True
            return

        failure = ResetVerificationFailure(
            f"Residual state after reset: {', '.join(problems)}",
            {"problems": problems},
        )
        self._logger.critical(failure.message)
        report.forced_clear = True
        self._clear_storage(report)
        self._reset_ledger()
        self._clock.reset()
        self._facade.reset()
        self._reset_adjacent()

        remaining = self._residual_state()
        if remaining:
            self._logger.critical(
                f"Residual state survived forced clear: {', '.join(remaining)}"
            )

    def _residual_state(self) -> list[str]:
        problems = [
            category
            for category, count in self._ledger.counts().items()
            if count
        ]
        if self._ledger.cash != self._ledger.starting_cash:
            problems.append("ledger_cash")
        if self._registry.get_f1_team() is not None:
            problems.append("f1_team")
        if self._registry.get_horses():
            problems.append("horses")
        if self._registry.get_sports_team() is not None:
            problems.append("sports_team")
        if self._facade.wealth != self._ledger.starting_cash:
            problems.append("character_wealth")
        for store in self._adjacent_stores:
            if not store.is_default():
                problems.append(store.name)
        return problems

    def _complete(self) -> None:
        self._flags.mark_completed()
        if self._navigate is None:
            return
        try:
            self._navigate()
        except Exception as exc:
            self._logger.error(f"Post-reset navigation failed: {exc}")

    def _contains(self, key: str) -> bool:
        try:
            return self._storage.contains(key)
        except PersistenceError as exc:
            self._logger.error(f"Failed to check {key}: {exc.message}")
            return False


__all__ = ["MAX_CLEAR_ATTEMPTS", "ResetChoreographer"]
