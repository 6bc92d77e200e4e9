"""Control-plane models for refresh and reset orchestration."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True)
class RefreshControlState:
    """Process-wide refresh state exposed to loading indicators."""

    last_refresh_timestamp: float | None = None
    in_progress: bool = False
    stale: bool = False


class RefreshStatus(str, Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class RefreshResult:
    """Outcome of one refresh trigger.

    Attributes:
        status: Completed, skipped, or failed.
        reason: Short machine-readable reason for skips and failures.
        net_worth: Net worth after the pipeline, when completed.
        cash: Reconciled cash, when completed.
        corrected: Whether the consistency check realigned the facade.
        message: Human-readable summary for toasts.
    """

    status: RefreshStatus
    reason: str | None = None
    net_worth: Decimal | None = None
    cash: Decimal | None = None
    corrected: bool = False
    message: str = ""

    @property
    def success(self) -> bool:
        return self.status is RefreshStatus.COMPLETED


class ResetPhase(str, Enum):
    """Ordered phases of a complete reset."""

    FLAGGED = "flagged"
    STORAGE_CLEARED = "storage_cleared"
    LEDGER_RESET = "ledger_reset"
    TIME_RESET = "time_reset"
    CHARACTER_RESET = "character_reset"
    ADJACENT_RESET = "adjacent_reset"
    VERIFIED = "verified"
    COMPLETED = "completed"


@dataclass
class ResetReport:
    """Step-by-step record of a complete reset."""

    phases: list[ResetPhase] = field(default_factory=list)
    cleared_keys: list[str] = field(default_factory=list)
    stray_keys: list[str] = field(default_factory=list)
    failed_steps: list[str] = field(default_factory=list)
    verification_passed: bool = False
    forced_clear: bool = False

    @property
    def success(self) -> bool:
        return ResetPhase.COMPLETED in self.phases and not self.failed_steps

    @property
    def message(self) -> str:
        if self.success and self.verification_passed:
            return "Game reset complete"
        if self.success:
            return "Game reset complete with residual state cleared by force"
        return "Game reset finished with errors: " + ", ".join(self.failed_steps)


__all__ = [
    "RefreshControlState",
    "RefreshStatus",
    "RefreshResult",
    "ResetPhase",
    "ResetReport",
]
