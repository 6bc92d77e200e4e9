"""Use case coordinating asset refreshes across the character and ledger."""

import asyncio
import time
from collections.abc import Callable, Iterable
from decimal import Decimal

from empire_ledger.application.stores.asset_ledger import AssetLedger
from empire_ledger.application.stores.character_wealth import CharacterWealthFacade
from empire_ledger.application.stores.events import StoreChange
from empire_ledger.domain.constants import CASH_RECONCILIATION_TOLERANCE
from empire_ledger.domain.errors import ConsistencyError
from empire_ledger.domain.models.control import (
    RefreshControlState,
    RefreshResult,
    RefreshStatus,
)
from empire_ledger.infrastructure.logging.logger import get_app_logger


DEFAULT_THROTTLE_SECONDS = 2.0
DEFAULT_DEBOUNCE_SECONDS = 0.5
DEFAULT_STAGE_DELAY_SECONDS = 0.1
DEFAULT_ALWAYS_FRESH_VIEWS = ("assets", "net_worth")


class RefreshCoordinator:
    """Run the four-stage refresh pipeline, one run at a time.

    Stages:
        1. Copy the character wealth into the ledger cash record.
        2. Recompute the ledger totals.
        3. Compare both cash figures; the ledger wins beyond the tolerance.
        4. Recompute again so the totals reflect the reconciled cash.

    Concurrent triggers are rejected rather than queued. Triggers arriving
    inside the throttle window are skipped unless forced or issued by a view
    that must always show fresh data.
    """

    def __init__(
        self,
        ledger: AssetLedger,
        facade: CharacterWealthFacade,
        logger=None,
        throttle_seconds: float = DEFAULT_THROTTLE_SECONDS,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        stage_delay_seconds: float = DEFAULT_STAGE_DELAY_SECONDS,
        always_fresh_views: Iterable[str] = DEFAULT_ALWAYS_FRESH_VIEWS,
        tolerance: Decimal = CASH_RECONCILIATION_TOLERANCE,
        time_source: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the coordinator.

        Args:
            ledger: Authoritative asset ledger.
            facade: Character wealth facade, writer of spendable cash.
            logger: Optional logger compatible with logging.Logger-like API.
            throttle_seconds: Minimum spacing between unforced refreshes.
            debounce_seconds: Quiet period before a requested refresh runs.
            stage_delay_seconds: Pause between the sync and recompute stages.
            always_fresh_views: Views bypassing the throttle.
            tolerance: Largest cash difference accepted without correction.
            time_source: Wall clock in seconds.
        """
        self._ledger = ledger
        self._facade = facade
        self._logger = logger or get_app_logger()
        self._throttle_seconds = throttle_seconds
        self._debounce_seconds = debounce_seconds
        self._stage_delay_seconds = stage_delay_seconds
        self._always_fresh_views = frozenset(always_fresh_views)
        self._tolerance = tolerance
        self._time_source = time_source
        self._in_progress = False
        self._applying = False
        self._stale = False
        self._last_refresh: float | None = None
        self._idle = asyncio.Event()
        self._idle.set()
        self._pending: asyncio.Task | None = None
        self._pending_started = False
        self._unsubscribers: list[Callable[[], None]] = []

    @property
    def state(self) -> RefreshControlState:
        return RefreshControlState(
            last_refresh_timestamp=self._last_refresh,
            in_progress=self._in_progress,
            stale=self._stale,
        )

    @property
    def is_refreshing(self) -> bool:
        return self._in_progress

    @property
    def last_refresh_time(self) -> float | None:
        return self._last_refresh

    async def trigger_refresh(
        self,
        view: str | None = None,
        force: bool = False,
    ) -> RefreshResult:
        """Run the refresh pipeline unless it is busy or throttled.

        Args:
            view: Name of the requesting view, checked against the
                always-fresh list.
            force: Skip the throttle check (manual refresh).

        Returns:
            RefreshResult: Completed, skipped, or failed outcome. Errors are
            logged and reported, never raised.
        """
        if self._in_progress:
            self._logger.debug("Refresh already running, skipping trigger")
            return RefreshResult(
                status=RefreshStatus.SKIPPED,
                reason="in_progress",
                message="Refresh already in progress",
            )

        now = self._time_source()
        if (
            not force
            and view not in self._always_fresh_views
            and self._last_refresh is not None
            and now - self._last_refresh < self._throttle_seconds
        ):
            self._logger.debug(f"Refresh throttled for view {view}")
            return RefreshResult(
                status=RefreshStatus.SKIPPED,
                reason="throttled",
                message="Refresh throttled",
            )

        self._in_progress = True
        self._idle.clear()
        try:
            result = await self._run_pipeline()
        except Exception as exc:
            self._logger.error(f"Refresh pipeline failed: {exc}")
            return RefreshResult(
                status=RefreshStatus.FAILED,
                reason="error",
                message=f"Refresh failed: {exc}",
            )
        finally:
            self._in_progress = False
            self._applying = False
            self._idle.set()

        self._last_refresh = self._time_source()
        self._stale = False
        return result

    def request_refresh(self, view: str | None = None) -> asyncio.Task | None:
        """Schedule a trailing refresh after the debounce period.

        Each request restarts the quiet period of a trailing run that has not
        started yet. A run already inside the pipeline is never cancelled; the
        new trailing run waits for it. Without a running event loop the state
        is only marked stale.

        Returns:
            asyncio.Task | None: The scheduled task, when a loop is running.
        """
        self._stale = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._logger.debug("No running event loop, refresh left pending")
            return None
        if (
            self._pending is not None
            and not self._pending.done()
            and not self._pending_started
        ):
            self._pending.cancel()
        self._pending_started = False
        self._pending = loop.create_task(self._debounced(view))
        return self._pending

    async def wait_for_pending(self) -> RefreshResult | None:
        """Wait for the scheduled trailing refresh, if any."""
        result = None
        while self._pending is not None and not self._pending.done():
            task = self._pending
            await asyncio.wait({task})
            if not task.cancelled():
                result = task.result()
        return result

    def attach(self) -> Callable[[], None]:
        """Subscribe to ledger and character changes.

        Every external mutation requests one debounced refresh.

        Returns:
            Callable[[], None]: Function detaching the subscriptions.
        """
        self.detach()
        self._unsubscribers = [
            self._ledger.subscribe(self._on_change),
            self._facade.subscribe(self._on_change),
        ]
        return self.detach

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _on_change(self, event: StoreChange) -> None:
        if self._applying:
            return
        self._logger.debug(f"Change from {event.source} ({event.action}), refresh requested")
        self.request_refresh()

    async def _debounced(self, view: str | None) -> RefreshResult:
        try:
            await asyncio.sleep(self._debounce_seconds)
            await self._idle.wait()
            if self._pending is asyncio.current_task():
                self._pending_started = True
            return await self.trigger_refresh(view=view, force=True)
        finally:
            if self._pending is asyncio.current_task():
                self._pending = None

    async def _run_pipeline(self) -> RefreshResult:
        self._applying = True
        self._ledger.set_cash(self._facade.wealth)
        self._applying = False

        await asyncio.sleep(self._stage_delay_seconds)

        self._ledger.recalculate_totals()

        corrected = self._reconcile_cash()

        snapshot = self._ledger.recalculate_totals()
        self._logger.info(
            f"Refresh completed: net worth={snapshot.total_net_worth}, "
            f"cash={snapshot.total_cash}"
        )
        return RefreshResult(
            status=RefreshStatus.COMPLETED,
            net_worth=snapshot.total_net_worth,
            cash=snapshot.total_cash,
            corrected=corrected,
            message="Assets refreshed",
        )

    def _reconcile_cash(self) -> bool:
        ledger_cash = self._ledger.cash
        facade_cash = self._facade.wealth
        if abs(ledger_cash - facade_cash) <= self._tolerance:
            return False

        error = ConsistencyError(
            f"Cash mismatch: ledger={ledger_cash}, character={facade_cash}; "
            "using ledger value",
            {"ledger": str(ledger_cash), "character": str(facade_cash)},
        )
        self._logger.warning(error.message)
        self._applying = True
        try:
            self._facade.set_wealth(ledger_cash)
        finally:
            self._applying = False
        return True


__all__ = [
    "DEFAULT_ALWAYS_FRESH_VIEWS",
    "DEFAULT_DEBOUNCE_SECONDS",
    "DEFAULT_STAGE_DELAY_SECONDS",
    "DEFAULT_THROTTLE_SECONDS",
    "RefreshCoordinator",
]
