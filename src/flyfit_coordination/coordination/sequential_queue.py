"""
Sequential queue that runs asynchronous operations one at a time.
"""
import asyncio
import logging
import time
from collections import deque
from typing import Any, Awaitable, Callable, Optional

from ..metrics import MetricsCollector
from .errors import QueueAbortedError
from .models import Outcome, QueueEntry, QueueStats

logger = logging.getLogger(__name__)


class SequentialQueue:
    """
    Serializes asynchronous operations in submission order.

    A single drain task pops the head of the queue and awaits it before
    starting the next entry, so entries never overlap and complete in the
    order they were enqueued. A failing operation does not stop the queue;
    only abort() does.
    """

    def __init__(
        self,
        name: str = "sequential_queue",
        metrics: Optional[MetricsCollector] = None,
    ):
        """
        Initialize the queue.

        Args:
            name: Label used in logs and metrics
            metrics: Optional metrics collector
        """
        self.name = name
        self._metrics = metrics
        self._pending: deque[QueueEntry] = deque()
        self._draining = False
        self._aborted = False
        self._drain_task: Optional[asyncio.Task] = None

        # Statistics
        self._processed = 0
        self._failed = 0
        self._aborted_count = 0

    @property
    def has_pending(self) -> bool:
        """True while any entry is queued or a drain is in progress."""
        return bool(self._pending) or self._draining

    @property
    def aborted(self) -> bool:
        """True once abort() has been called and until reset()."""
        return self._aborted

    def enqueue(self, operation: Callable[[], Awaitable[Any]]) -> asyncio.Future:
        """
        Add an operation to the queue.

        The operation is never started from inside this call; it runs once
        every entry ahead of it has finished.

        Args:
            operation: Zero-argument callable returning an awaitable

        Returns:
            Future resolved with the operation's result or failure. If the
            queue has been aborted, the future has already failed with
            QueueAbortedError.
        """
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        if self._aborted:
            future.set_exception(QueueAbortedError("Queue has been aborted"))
            self._aborted_count += 1
            self._record_outcome(Outcome.ABORTED)
            return future

        self._pending.append(QueueEntry(operation=operation, future=future))
        self._update_depth()
        self._start_drain(loop)
        return future

    def abort(self) -> None:
        """
        Abort the queue.

        Every queued entry fails with QueueAbortedError and further enqueues
        are rejected. An operation already running is not interrupted and
        still delivers its own outcome.
        """
        self._aborted = True
        rejected = self._reject_pending("Queue aborted")
        logger.debug(f"Queue {self.name} aborted, rejected {rejected} pending entries")

    def reset(self) -> None:
        """
        Return the queue to a fresh, usable state.

        Clears the aborted flag and fails any residual queued entries. A drain
        still finishing an in-flight operation keeps running and will pick up
        new work.
        """
        residual = self._reject_pending("Queue reset")
        self._aborted = False
        if residual:
            logger.debug(f"Queue {self.name} reset, rejected {residual} residual entries")

    def get_stats(self) -> QueueStats:
        """
        Get current queue statistics.

        Returns:
            Queue statistics
        """
        return QueueStats(
            pending=len(self._pending),
            draining=self._draining,
            aborted=self._aborted,
            processed_total=self._processed,
            failed_total=self._failed,
            aborted_total=self._aborted_count,
        )

    def _start_drain(self, loop: asyncio.AbstractEventLoop) -> None:
        """Start the drain task unless one is already active."""
        if self._draining:
            return
        self._draining = True
        self._drain_task = loop.create_task(self._drain())

    async def _drain(self) -> None:
        """Run queued entries one at a time until empty or aborted."""
        logger.debug(f"Queue {self.name} drain started")

        try:
            while self._pending and not self._aborted:
                entry = self._pending.popleft()
                self._update_depth()

                # Caller gave up before the entry started
                if entry.future.done():
                    self._record_outcome(Outcome.CANCELLED)
                    continue

                await self._run_entry(entry)
        except asyncio.CancelledError:
            for entry in self._pending:
                entry.future.cancel()
            self._pending.clear()
            self._update_depth()
            raise
        finally:
            self._draining = False
            self._drain_task = None
            if self._aborted:
                self._reject_pending("Queue aborted")

        logger.debug(f"Queue {self.name} drain finished")

    async def _run_entry(self, entry: QueueEntry) -> None:
        """Run one entry and deliver its outcome to the caller."""
        started = time.monotonic()
        try:
            result = await entry.operation()
        except asyncio.CancelledError:
            entry.future.cancel()
            raise
        except Exception as e:
            self._failed += 1
            if not entry.future.done():
                entry.future.set_exception(e)
            self._record_outcome(Outcome.FAILURE)
        else:
            if not entry.future.done():
                entry.future.set_result(result)
            self._record_outcome(Outcome.SUCCESS)
        finally:
            self._processed += 1
            if self._metrics:
                self._metrics.record_duration(self.name, time.monotonic() - started)

    def _reject_pending(self, message: str) -> int:
        """Fail every queued entry with QueueAbortedError."""
        rejected = 0
        while self._pending:
            entry = self._pending.popleft()
            if entry.future.done():
                continue
            entry.future.set_exception(QueueAbortedError(message))
            self._aborted_count += 1
            self._record_outcome(Outcome.ABORTED)
            rejected += 1
        self._update_depth()
        return rejected

    def _record_outcome(self, outcome: Outcome) -> None:
        if self._metrics:
            self._metrics.record_outcome(self.name, outcome.value)

    def _update_depth(self) -> None:
        if self._metrics:
            self._metrics.set_queue_pending(self.name, len(self._pending))
