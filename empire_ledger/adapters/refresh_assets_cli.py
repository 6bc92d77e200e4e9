"""CLI adapter to run a manual asset refresh.

This module wires the refresh coordinator to the configured game storage and
runs the full pipeline once, bypassing the throttle.
"""

import asyncio

from empire_ledger.infrastructure.container import build_engine
from empire_ledger.infrastructure.logging.logger import get_usage_logger


def main() -> None:
    """Run one forced refresh and print the outcome."""
    usage_logger = get_usage_logger()
    engine = build_engine()

    usage_logger.info("Manual asset refresh requested from CLI")
    result = asyncio.run(
        engine.coordinator.trigger_refresh(view="cli", force=True)
    )

    if not result.success:
        print(f"{result.message} ({result.reason}).")
        return
    suffix = " Cash realigned with the ledger." if result.corrected else ""
    print(
        f"{result.message}: net worth {result.net_worth:,.2f}, "
        f"cash {result.cash:,.2f}.{suffix}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
