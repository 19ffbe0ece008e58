"""Paced batch execution of blocking provider calls.

Items are split into fixed-size batches. Calls inside one batch run
concurrently in worker threads; between batches the runner sleeps for the
pacing delay and checks the caller's cancellation event.
"""

import asyncio
import logging
from typing import Callable, Optional, Sequence, TypeVar

from corelens.errors import AnalysisCancelled, ProviderError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def _call_with_timeout(
    call: Callable[[T], R],
    item: T,
    timeout: Optional[float],
    provider: str,
) -> R:
    try:
        return await asyncio.wait_for(asyncio.to_thread(call, item), timeout)
    except asyncio.TimeoutError as e:
        raise ProviderError(provider, f"call timed out after {timeout}s") from e


async def run_in_batches(
    items: Sequence[T],
    call: Callable[[T], R],
    *,
    batch_size: int = 10,
    pause_seconds: float = 1.0,
    timeout: Optional[float] = None,
    cancel: Optional[asyncio.Event] = None,
    provider: str = "provider",
    on_error: Optional[Callable[[T, Exception], R]] = None,
) -> list[R]:
    """
    Run ``call`` over ``items`` in paced batches, preserving input order.

    Args:
        items: Inputs, one provider call each
        call: Blocking provider function
        batch_size: Calls issued concurrently per batch
        pause_seconds: Delay between consecutive batches
        timeout: Per-call timeout in seconds (None = no limit)
        cancel: Event checked before each batch
        provider: Name used in timeout errors and logs
        on_error: Fallback producing a result for a failed item; when absent
                  the first failure propagates and aborts the run

    Returns:
        One result per item, in input order

    Raises:
        AnalysisCancelled: If ``cancel`` is set before a batch starts
        ProviderError: On the first failure when no ``on_error`` is given
    """
    if batch_size < 1:
        raise ValueError("batch_size must be >= 1")

    async def run_one(item: T) -> R:
        try:
            return await _call_with_timeout(call, item, timeout, provider)
        except Exception as e:
            if on_error is None:
                raise
            return on_error(item, e)

    results: list[R] = []
    total_batches = (len(items) + batch_size - 1) // batch_size

    for batch_index, start in enumerate(range(0, len(items), batch_size)):
        if cancel is not None and cancel.is_set():
            raise AnalysisCancelled(
                f"{provider} run cancelled after {len(results)}/{len(items)} items"
            )

        batch = items[start:start + batch_size]
        results.extend(await asyncio.gather(*(run_one(item) for item in batch)))
        logger.debug("%s batch %d/%d done", provider, batch_index + 1, total_batches)

        if start + batch_size < len(items) and pause_seconds > 0:
            await asyncio.sleep(pause_seconds)

    return results
