"""
Exceptions raised by the coordination primitives.
"""


class CoordinationError(Exception):
    """Base class for failures introduced by the coordination primitives."""

    pass


class QueueAbortedError(CoordinationError):
    """Raised for queued work that never ran because the queue was aborted."""

    pass
