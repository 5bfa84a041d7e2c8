"""
Trailing-edge debouncer for asynchronous operations.
"""
import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

from ..metrics import MetricsCollector
from .models import Outcome

logger = logging.getLogger(__name__)


class DebouncedCaller:
    """
    Coalesces bursts of calls into a single deferred execution.

    Each call() records its arguments and restarts the delay timer, so only
    the most recent arguments run once the calls stop. Executions never
    overlap: arguments that become due while a previous execution is still
    running wait for it to finish and then run.
    """

    def __init__(
        self,
        operation: Callable[..., Awaitable[Any]],
        delay_seconds: float,
        name: str = "debounced_caller",
        metrics: Optional[MetricsCollector] = None,
    ):
        """
        Initialize the debouncer.

        Args:
            operation: Async callable to debounce
            delay_seconds: Quiet period before the pending call runs
            name: Label used in logs and metrics
            metrics: Optional metrics collector
        """
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {delay_seconds}")

        self.delay_seconds = delay_seconds
        self.name = name
        self.last_error: Optional[Exception] = None
        self._operation = operation
        self._metrics = metrics
        self._pending_args: Optional[tuple[tuple, dict[str, Any]]] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._executing = False
        self._task: Optional[asyncio.Task] = None
        self._flush_waiters: list[asyncio.Future] = []

    @property
    def pending(self) -> bool:
        """True while arguments are waiting to run."""
        return self._pending_args is not None

    @property
    def is_executing(self) -> bool:
        """True while the wrapped operation is running."""
        return self._executing

    def call(self, *args: Any, **kwargs: Any) -> None:
        """
        Record a call and restart the delay timer.

        Any earlier pending arguments are replaced.
        """
        loop = asyncio.get_running_loop()
        self._pending_args = (args, kwargs)

        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(self.delay_seconds, self._on_timer)

        self._record_event("call")

    def cancel(self) -> None:
        """Discard the pending call and its timer without executing."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        if self._pending_args is not None:
            logger.debug(f"Debouncer {self.name} cancelled pending call")
        self._pending_args = None

        # Flushes waiting on the discarded arguments resolve empty
        waiters, self._flush_waiters = self._flush_waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(None)

        self._record_event("cancel")

    def flush(self) -> asyncio.Future:
        """
        Run the pending call now instead of waiting for the timer.

        Returns:
            Future resolved with the execution's result or failure. When
            nothing is pending the future is already resolved with None.
        """
        loop = asyncio.get_running_loop()

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        waiter = loop.create_future()
        if self._pending_args is None:
            waiter.set_result(None)
            return waiter

        self._record_event("flush")
        self._flush_waiters.append(waiter)

        # Runs as soon as the current execution finishes
        if not self._executing:
            self._start(loop)
        return waiter

    def _on_timer(self) -> None:
        self._timer = None
        self._record_event("fire")

        if self._pending_args is None or self._executing:
            return
        self._start(asyncio.get_running_loop())

    def _start(self, loop: asyncio.AbstractEventLoop) -> None:
        """Take the pending arguments and start executing them."""
        args, kwargs = self._pending_args
        self._pending_args = None
        self._executing = True

        waiters, self._flush_waiters = self._flush_waiters, []
        self._task = loop.create_task(self._execute(args, kwargs, waiters))

    async def _execute(
        self,
        args: tuple,
        kwargs: dict[str, Any],
        waiters: list[asyncio.Future],
    ) -> None:
        started = time.monotonic()
        try:
            result = await self._operation(*args, **kwargs)
        except asyncio.CancelledError:
            for waiter in waiters:
                waiter.cancel()
            raise
        except Exception as e:
            self.last_error = e
            self._record_outcome(Outcome.FAILURE)
            if waiters:
                for waiter in waiters:
                    if not waiter.done():
                        waiter.set_exception(e)
            else:
                # Timer-fired runs have nobody awaiting them
                logger.error(f"Debounced call {self.name} failed: {e}", exc_info=True)
        else:
            self.last_error = None
            self._record_outcome(Outcome.SUCCESS)
            for waiter in waiters:
                if not waiter.done():
                    waiter.set_result(result)
        finally:
            self._executing = False
            self._task = None
            if self._metrics:
                self._metrics.record_duration(self.name, time.monotonic() - started)
            self._run_follow_up()

    def _run_follow_up(self) -> None:
        """Start arguments that became due while the last execution ran."""
        if self._pending_args is None or self._timer is not None:
            return
        logger.debug(f"Debouncer {self.name} running call deferred by previous execution")
        self._start(asyncio.get_running_loop())

    def _record_event(self, event: str) -> None:
        if self._metrics:
            self._metrics.record_debounce_event(self.name, event)

    def _record_outcome(self, outcome: Outcome) -> None:
        if self._metrics:
            self._metrics.record_outcome(self.name, outcome.value)


def create_debounced_caller(
    operation: Callable[..., Awaitable[Any]],
    delay_seconds: float,
    **kwargs: Any,
) -> DebouncedCaller:
    """
    Wrap an async operation in a DebouncedCaller.

    Args:
        operation: Async callable to debounce
        delay_seconds: Quiet period before the pending call runs
        **kwargs: Passed through to DebouncedCaller (name, metrics)

    Returns:
        Debounced caller exposing call(), cancel() and flush()
    """
    return DebouncedCaller(operation, delay_seconds, **kwargs)
