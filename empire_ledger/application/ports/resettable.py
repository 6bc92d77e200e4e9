"""Port for stores taking part in a complete reset."""

from typing import Protocol


class ResettableStorePort(Protocol):
    """Store that can be returned to its starting state."""

    name: str

    def reset(self) -> None:
        """Restore the starting state, persisting it where applicable."""

    def storage_keys(self) -> tuple[str, ...]:
        """Return the storage keys owned by the store."""

    def is_default(self) -> bool:
        """Return True when the store holds its starting state."""


__all__ = ["ResettableStorePort"]
