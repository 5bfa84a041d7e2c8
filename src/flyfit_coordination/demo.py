"""
Simulated scenarios exercising the coordination primitives.

Each scenario stands in for a UI caller: operations sleep to simulate
backend round-trips and record when they actually ran.
"""
import asyncio
import logging
from typing import Any, Optional

from .coordination import (
    DebouncedCaller,
    ExclusionGuard,
    GuardMode,
    QueueAbortedError,
    SequentialQueue,
)
from .metrics import MetricsCollector

logger = logging.getLogger(__name__)


async def run_queue_demo(
    operations: int,
    base_delay: float,
    abort_after: Optional[int] = None,
    metrics: Optional[MetricsCollector] = None,
) -> dict[str, Any]:
    """
    Enqueue operations whose delays shrink with position.

    Later operations are faster, so any completion order other than 1..N
    would mean the queue let them overlap.

    Args:
        operations: Number of operations to enqueue
        base_delay: Delay unit in seconds
        abort_after: Abort the queue once this many operations completed
        metrics: Optional metrics collector

    Returns:
        Completion order, aborted operations and queue statistics
    """
    queue = SequentialQueue(name="demo_queue", metrics=metrics)
    completed: list[int] = []

    def make_operation(index: int):
        async def save_profile() -> int:
            await asyncio.sleep(base_delay * (operations - index + 1))
            completed.append(index)
            if abort_after is not None and len(completed) == abort_after:
                logger.info(f"Aborting queue after {abort_after} operations")
                queue.abort()
            return index

        return save_profile

    futures = [queue.enqueue(make_operation(i)) for i in range(1, operations + 1)]
    results = await asyncio.gather(*futures, return_exceptions=True)

    aborted = [
        index
        for index, result in enumerate(results, start=1)
        if isinstance(result, QueueAbortedError)
    ]
    return {
        "completed": completed,
        "aborted": aborted,
        "stats": queue.get_stats().to_dict(),
    }


async def run_debounce_demo(
    calls: int,
    delay: float,
    metrics: Optional[MetricsCollector] = None,
) -> dict[str, Any]:
    """
    Fire a burst of calls faster than the debounce delay.

    Args:
        calls: Number of calls in the burst
        delay: Debounce delay in seconds
        metrics: Optional metrics collector

    Returns:
        Number of calls and the arguments that actually executed
    """
    executed: list[int] = []

    async def submit_form(value: int) -> int:
        executed.append(value)
        return value

    caller = DebouncedCaller(submit_form, delay, name="demo_debouncer", metrics=metrics)
    for i in range(1, calls + 1):
        caller.call(i)
        await asyncio.sleep(delay / 10)

    while caller.pending or caller.is_executing:
        await asyncio.sleep(delay / 2 or 0.001)

    return {"calls": calls, "executed": executed}


async def run_guard_demo(
    mode: GuardMode,
    calls: int,
    delay: float,
    metrics: Optional[MetricsCollector] = None,
) -> dict[str, Any]:
    """
    Fire overlapping calls at a guarded operation.

    Args:
        mode: Guard mode
        calls: Number of overlapping calls
        delay: Duration of each operation in seconds
        metrics: Optional metrics collector

    Returns:
        Which calls executed and what each caller received
    """
    executed: list[int] = []

    async def refresh_data(index: int) -> int:
        await asyncio.sleep(delay)
        executed.append(index)
        return index

    guard = ExclusionGuard(refresh_data, mode=mode, name=f"demo_guard_{mode.value}", metrics=metrics)
    tasks = [asyncio.create_task(guard(i)) for i in range(1, calls + 1)]
    results = await asyncio.gather(*tasks)

    return {"mode": mode.value, "executed": executed, "results": list(results)}
