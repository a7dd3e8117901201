"""Error types raised by the metrics engine.

Every error is scoped to the single operation that raised it. Nothing is
retried automatically; callers surface the message and let the user retry.
"""

from __future__ import annotations

from typing import Optional


class FitstatsError(Exception):
    """Base class for all fitstats errors."""


class ValidationError(FitstatsError):
    """Input rejected before any write (profile ranges, metric names/values)."""

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        super().__init__(message)
        self.errors = errors if errors is not None else [message]


class StoreError(FitstatsError):
    """The document store could not complete an operation."""


class WriteError(StoreError):
    """A write to the document store failed; local state must not advance."""


class ReadError(StoreError):
    """A read from the document store failed; derived views fall back to empty."""
