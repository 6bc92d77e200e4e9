"""CLI adapter to reset the game to its starting state."""

from empire_ledger.infrastructure.container import build_engine
from empire_ledger.infrastructure.logging.logger import get_usage_logger


def main() -> None:
    """Run a complete reset and print the report."""
    usage_logger = get_usage_logger()
    engine = build_engine(load=False)

    usage_logger.info("Complete game reset requested from CLI")
    report = engine.choreographer.perform_complete_reset()

    print(report.message)
    print("Phases: " + ", ".join(phase.value for phase in report.phases))
    if report.cleared_keys:
        print(f"Cleared {len(report.cleared_keys)} storage keys.")
    if report.stray_keys:
        print("Removed reappearing keys: " + ", ".join(report.stray_keys))


if __name__ == "__main__":  # pragma: no cover
    main()
