"""
Data models for the coordination primitives.
"""
import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable


class GuardMode(str, Enum):
    """How an exclusion guard resolves calls that arrive while it is busy."""
    DROP = "drop"  # Return None without running the operation
    QUEUE = "queue"  # Wait for the guard, then run with own arguments
    LATEST = "latest"  # Keep only the newest waiting call


class Outcome(str, Enum):
    """Outcome labels recorded for finished calls."""
    SUCCESS = "success"
    FAILURE = "failure"
    ABORTED = "aborted"
    DROPPED = "dropped"
    SUPERSEDED = "superseded"
    CANCELLED = "cancelled"


@dataclass
class QueueEntry:
    """An operation waiting in a sequential queue."""

    operation: Callable[[], Awaitable[Any]]
    future: asyncio.Future


@dataclass
class PendingCall:
    """The single call waiting to replace the in-flight one (latest mode)."""

    args: tuple
    kwargs: dict[str, Any]
    futures: list[asyncio.Future] = field(default_factory=list)


@dataclass
class QueueStats:
    """Statistics about a sequential queue."""

    pending: int
    draining: bool
    aborted: bool
    processed_total: int
    failed_total: int
    aborted_total: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for display."""
        return {
            "pending": self.pending,
            "draining": self.draining,
            "aborted": self.aborted,
            "processed_total": self.processed_total,
            "failed_total": self.failed_total,
            "aborted_total": self.aborted_total,
        }
