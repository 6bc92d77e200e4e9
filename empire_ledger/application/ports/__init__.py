"""Application ports package."""

from .clock import ClockPort
from .database import DatabaseEnginePort
from .resettable import ResettableStorePort
from .storage import KeyValueStoragePort

__all__ = [
    "ClockPort",
    "DatabaseEnginePort",
    "KeyValueStoragePort",
    "ResettableStorePort",
]
