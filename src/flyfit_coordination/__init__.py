"""
flyfit-coordination - concurrency primitives for user-triggered background work.
"""

from .coordination import (
    CoordinationError,
    DebouncedCaller,
    ExclusionGuard,
    GuardMode,
    QueueAbortedError,
    SequentialQueue,
    create_debounced_caller,
    create_exclusion_guard,
)

__version__ = "1.0.0"

__all__ = [
    "CoordinationError",
    "DebouncedCaller",
    "ExclusionGuard",
    "GuardMode",
    "QueueAbortedError",
    "SequentialQueue",
    "create_debounced_caller",
    "create_exclusion_guard",
]
