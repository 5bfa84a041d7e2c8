"""
Coordination primitives for user-triggered background work.

Provides a sequential queue, a debounced caller and an exclusion guard.
"""

from .debouncer import DebouncedCaller, create_debounced_caller
from .errors import CoordinationError, QueueAbortedError
from .guard import ExclusionGuard, create_exclusion_guard
from .models import GuardMode, Outcome, PendingCall, QueueEntry, QueueStats
from .sequential_queue import SequentialQueue

__all__ = [
    "CoordinationError",
    "DebouncedCaller",
    "ExclusionGuard",
    "GuardMode",
    "Outcome",
    "PendingCall",
    "QueueAbortedError",
    "QueueEntry",
    "QueueStats",
    "SequentialQueue",
    "create_debounced_caller",
    "create_exclusion_guard",
]
