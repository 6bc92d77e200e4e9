"""Asset tracking and net worth reconciliation engine for Business Empire."""

__version__ = "1.0.0"
