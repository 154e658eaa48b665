"""
physics/sweep.py - Ordered, cancellable sweeps over independent samples

Draft tables, Bonjean curves and heel sweeps evaluate one independent
calculation per sample. run_sweep() runs them sequentially or over a
bounded thread pool, checks the cancellation flag between samples, and
always returns results in input order.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Protocol, Sequence, TypeVar
import logging

from hydrocalc.errors import CalculationCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class CancelEvent(Protocol):
    """Anything with is_set(), e.g. threading.Event."""

    def is_set(self) -> bool:
        ...


def _check_cancelled(cancel_event: Optional[CancelEvent], completed: int) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise CalculationCancelledError(
            f"Calculation cancelled after {completed} samples",
            completed=completed,
        )


def run_sweep(
    func: Callable[[T], R],
    items: Sequence[T],
    cancel_event: Optional[CancelEvent] = None,
    max_workers: int = 1,
) -> List[R]:
    """
    Apply func to every item, preserving order.

    Raises CalculationCancelledError if cancel_event is set before all
    items finish; no partial list is returned. Exceptions raised by func
    propagate unchanged.
    """
    if max_workers <= 1 or len(items) <= 1:
        results: List[R] = []
        for item in items:
            _check_cancelled(cancel_event, len(results))
            results.append(func(item))
        return results

    logger.debug(f"Fanning out {len(items)} samples over {max_workers} workers")

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(func, item) for item in items]
        results = []
        try:
            for future in futures:
                _check_cancelled(cancel_event, len(results))
                results.append(future.result())
        except BaseException:
            for future in futures:
                future.cancel()
            raise

    return results
