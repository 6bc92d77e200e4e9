"""Application use cases package."""

from .get_net_worth_breakdown import GetNetWorthBreakdownUseCase
from .perform_complete_reset import MAX_CLEAR_ATTEMPTS, ResetChoreographer
from .refresh_assets import RefreshCoordinator

__all__ = [
    "GetNetWorthBreakdownUseCase",
    "MAX_CLEAR_ATTEMPTS",
    "RefreshCoordinator",
    "ResetChoreographer",
]
