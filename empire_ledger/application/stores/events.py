"""Minimal publish/subscribe channel for store change events."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar


EventT = TypeVar("EventT")


@dataclass(frozen=True)
class StoreChange:
    """Change published by a store after a mutation.

    Attributes:
        source: Name of the publishing store.
        action: Mutation kind (add, update, remove, set_cash...).
        category: Affected category, when the store has categories.
        record_id: Affected record id, when applicable.
    """

    source: str
    action: str
    category: str | None = None
    record_id: str | None = None


class ChangeNotifier(Generic[EventT]):
    """Synchronous fan-out of events to subscribers.

    A failing subscriber is logged and skipped; it never aborts the
    mutation that published the event.
    """

    def __init__(self, logger) -> None:
        self._subscribers: list[Callable[[EventT], None]] = []
        self._logger = logger

    def subscribe(self, callback: Callable[[EventT], None]) -> Callable[[], None]:
        """Register a callback and return a function removing it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, event: EventT) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception as exc:
                self._logger.error(f"Change subscriber failed for {event}: {exc}")


__all__ = ["ChangeNotifier", "StoreChange"]
