"""Settings helpers for the engine and its adapters."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import math
import os

from empire_ledger.application.use_cases.refresh_assets import (
    DEFAULT_ALWAYS_FRESH_VIEWS,
    DEFAULT_DEBOUNCE_SECONDS,
    DEFAULT_STAGE_DELAY_SECONDS,
    DEFAULT_THROTTLE_SECONDS,
)
from empire_ledger.domain.constants import DEFAULT_STARTING_CASH
from empire_ledger.infrastructure.logging.logger import get_app_logger


STORAGE_BACKENDS = ("sqlalchemy", "memory")


@dataclass(frozen=True)
class EngineSettings:
    """Runtime settings of the asset engine.

    Attributes:
        starting_cash: Cash of a fresh game.
        throttle_seconds: Minimum spacing between unforced refreshes.
        debounce_seconds: Quiet period before a change-driven refresh.
        stage_delay_seconds: Pause between the sync and recompute stages.
        always_fresh_views: Views that bypass the refresh throttle.
        storage_backend: Game storage backend (sqlalchemy or memory).
    """

    starting_cash: Decimal = DEFAULT_STARTING_CASH
    throttle_seconds: float = DEFAULT_THROTTLE_SECONDS
    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    stage_delay_seconds: float = DEFAULT_STAGE_DELAY_SECONDS
    always_fresh_views: tuple[str, ...] = DEFAULT_ALWAYS_FRESH_VIEWS
    storage_backend: str = "sqlalchemy"

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Build settings from environment variables.

        Invalid values fall back to the defaults with a warning.

        Returns:
            EngineSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        backend = os.getenv("EMPIRE_STORAGE_BACKEND", "sqlalchemy").strip().lower()
        if backend not in STORAGE_BACKENDS:
            logger.warning(
                f"Unknown storage backend {backend!r}, using sqlalchemy"
            )
            backend = "sqlalchemy"

        raw_views = os.getenv("EMPIRE_ALWAYS_FRESH_VIEWS")
        if raw_views is None:
            views = DEFAULT_ALWAYS_FRESH_VIEWS
        else:
            views = tuple(
                view.strip() for view in raw_views.split(",") if view.strip()
            )

        return cls(
            starting_cash=cls._read_decimal(
                "EMPIRE_STARTING_CASH",
                DEFAULT_STARTING_CASH,
                logger,
            ),
            throttle_seconds=cls._read_seconds(
                "EMPIRE_REFRESH_THROTTLE_SECONDS",
                DEFAULT_THROTTLE_SECONDS,
                logger,
            ),
            debounce_seconds=cls._read_seconds(
                "EMPIRE_REFRESH_DEBOUNCE_SECONDS",
                DEFAULT_DEBOUNCE_SECONDS,
                logger,
            ),
            stage_delay_seconds=cls._read_seconds(
                "EMPIRE_REFRESH_STAGE_DELAY_SECONDS",
                DEFAULT_STAGE_DELAY_SECONDS,
                logger,
            ),
            always_fresh_views=views,
            storage_backend=backend,
        )

    @staticmethod
    def _read_decimal(name: str, default: Decimal, logger) -> Decimal:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = Decimal(raw.strip())
        except InvalidOperation:
            logger.warning(f"Invalid {name}={raw!r}, using {default}")
            return default
        if not value.is_finite() or value < 0:
            logger.warning(f"Invalid {name}={raw!r}, using {default}")
            return default
        return value

    @staticmethod
    def _read_seconds(name: str, default: float, logger) -> float:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = float(raw)
        except ValueError:
            logger.warning(f"Invalid {name}={raw!r}, using {default}")
            return default
        if value < 0 or not math.isfinite(value):
            logger.warning(f"Invalid {name}={raw!r}, using {default}")
            return default
        return value


__all__ = ["EngineSettings", "STORAGE_BACKENDS"]
