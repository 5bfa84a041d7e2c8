"""
Exclusion guard allowing at most one execution of an operation at a time.
"""
import asyncio
import logging
import time
from collections import deque
from typing import Any, Awaitable, Callable, Optional, Union

from ..metrics import MetricsCollector
from .models import GuardMode, Outcome, PendingCall

logger = logging.getLogger(__name__)


class ExclusionGuard:
    """
    Wraps an async operation so that at most one call runs at a time.

    Calls arriving while the guard is busy are resolved by the mode:

    - drop: return None immediately, the operation is not invoked
    - queue: wait until the guard is free, then run with their own arguments,
      in arrival order
    - latest: keep only the newest waiting call; it runs right after the
      in-flight call and every caller it replaced receives its outcome
    """

    def __init__(
        self,
        operation: Callable[..., Awaitable[Any]],
        mode: Union[GuardMode, str] = GuardMode.DROP,
        name: str = "exclusion_guard",
        metrics: Optional[MetricsCollector] = None,
    ):
        """
        Initialize the guard.

        Args:
            operation: Async callable to guard
            mode: Policy for calls arriving while busy (drop, queue or latest)
            name: Label used in logs and metrics
            metrics: Optional metrics collector

        Raises:
            ValueError: If mode is not a known guard mode
        """
        self.mode = GuardMode(mode)
        self.name = name
        self._operation = operation
        self._metrics = metrics
        self._executing = False
        self._pending: Optional[PendingCall] = None
        self._waiters: deque[asyncio.Future] = deque()
        self._replacement_task: Optional[asyncio.Task] = None

    @property
    def is_executing(self) -> bool:
        """True while a guarded call is running."""
        return self._executing

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """
        Call the guarded operation.

        Returns:
            The operation's result, or None for a call dropped in drop mode
        """
        if not self._executing:
            self._executing = True
            return await self._execute(args, kwargs)

        if self.mode == GuardMode.DROP:
            logger.debug(f"Guard {self.name} busy, dropping call")
            self._record_outcome(Outcome.DROPPED)
            return None

        loop = asyncio.get_running_loop()

        if self.mode == GuardMode.LATEST:
            future = loop.create_future()
            futures = [future]
            if self._pending is not None:
                logger.debug(f"Guard {self.name} replacing pending call")
                self._record_outcome(Outcome.SUPERSEDED)
                futures = self._pending.futures + futures
            self._pending = PendingCall(args=args, kwargs=kwargs, futures=futures)
            return await future

        waiter = loop.create_future()
        self._waiters.append(waiter)
        try:
            await waiter
        except asyncio.CancelledError:
            # Ownership was handed over just before the caller was cancelled
            if waiter.done() and not waiter.cancelled():
                self._release()
            raise
        return await self._execute(args, kwargs)

    async def _execute(self, args: tuple, kwargs: dict[str, Any]) -> Any:
        """Run the operation while owning the guard, then release it."""
        started = time.monotonic()
        try:
            result = await self._operation(*args, **kwargs)
        except Exception:
            self._record_outcome(Outcome.FAILURE)
            raise
        finally:
            if self._metrics:
                self._metrics.record_duration(self.name, time.monotonic() - started)
            self._release()

        self._record_outcome(Outcome.SUCCESS)
        return result

    def _release(self) -> None:
        """Pass the guard to the next call in line, or mark it free."""
        if self._pending is not None:
            pending = self._pending
            self._pending = None
            self._replacement_task = asyncio.get_running_loop().create_task(
                self._run_replacement(pending)
            )
            return

        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                logger.debug(f"Guard {self.name} handing over to queued call")
                waiter.set_result(None)
                return

        self._executing = False

    async def _run_replacement(self, pending: PendingCall) -> None:
        """Run the pending replacement and deliver its outcome to every caller."""
        if all(future.done() for future in pending.futures):
            self._record_outcome(Outcome.CANCELLED)
            self._release()
            return

        try:
            result = await self._execute(pending.args, pending.kwargs)
        except asyncio.CancelledError:
            for future in pending.futures:
                future.cancel()
            raise
        except Exception as e:
            for future in pending.futures:
                if not future.done():
                    future.set_exception(e)
        else:
            for future in pending.futures:
                if not future.done():
                    future.set_result(result)

    def _record_outcome(self, outcome: Outcome) -> None:
        if self._metrics:
            self._metrics.record_outcome(self.name, outcome.value)


def create_exclusion_guard(
    operation: Callable[..., Awaitable[Any]],
    mode: Union[GuardMode, str] = GuardMode.DROP,
    **kwargs: Any,
) -> ExclusionGuard:
    """
    Wrap an async operation in an ExclusionGuard.

    Args:
        operation: Async callable to guard
        mode: drop, queue or latest
        **kwargs: Passed through to ExclusionGuard (name, metrics)

    Returns:
        Guarded callable
    """
    return ExclusionGuard(operation, mode=mode, **kwargs)
