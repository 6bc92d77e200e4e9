"""Port for key/value persistence.

Each persisted record lives under exactly one key and is owned by exactly
one component. Values are JSON-compatible structures.
"""

from typing import Any, Protocol


class KeyValueStoragePort(Protocol):
    """Port exposing key/value persistence.

    Implementations raise ``PersistenceError`` on backend failures.
    """

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None when the key is absent."""

    def set(self, key: str, value: Any) -> None:
        """Store the value under the key, replacing any previous value."""

    def remove(self, key: str) -> None:
        """Delete the key; missing keys are ignored."""

    def contains(self, key: str) -> bool:
        """Return True when the key is present."""

    def keys(self) -> list[str]:
        """Return every stored key."""


__all__ = ["KeyValueStoragePort"]
