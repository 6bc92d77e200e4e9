"""Use case returning the current net worth breakdown to readers."""

from empire_ledger.application.stores.asset_ledger import AssetLedger
from empire_ledger.application.stores.reset_flags import ResetFlags
from empire_ledger.domain.models.snapshot import AggregateSnapshot
from empire_ledger.infrastructure.logging.logger import get_app_logger


class GetNetWorthBreakdownUseCase:
    """Serve the cached snapshot, recomputing right after a reset."""

    def __init__(
        self,
        ledger: AssetLedger,
        flags: ResetFlags | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger: Asset ledger holding the cached snapshot.
            flags: Optional reset markers.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger = ledger
        self._flags = flags
        self._logger = logger or get_app_logger()

    def execute(self) -> AggregateSnapshot:
        """Return the net worth snapshot.

        The cache is not trusted while a reset is running or just after one
        completed; the totals are recomputed instead.

        Returns:
            AggregateSnapshot: Current totals.
        """
        if self._flags is not None and (
            self._flags.is_in_progress() or self._flags.consume_completed()
        ):
            self._logger.info("Reset detected, recomputing net worth breakdown")
            return self._ledger.recalculate_totals()
        return self._ledger.get_net_worth_breakdown()


__all__ = ["GetNetWorthBreakdownUseCase"]
