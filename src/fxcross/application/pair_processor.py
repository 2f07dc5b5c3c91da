# src/fxcross/application/pair_processor.py
"""
Pair Processor - Concurrent All-Pairs Cross-Rate Computation

This module derives every cross-rate from a collection of rates that share
a base currency. For N input rates it schedules the N² ordered pairs
(i, j), self-pairs included, on a thread pool. Each pair yields

    Rate(base=rates[i].target_currency,
         target=rates[j].target_currency,
         rate=rates[i].rate / rates[j].rate)

rounded half-up to 10 fractional digits, inserted into one shared output
RateCollection. The output collection's insert-if-absent is the only
synchronisation point between workers. When two inputs share a target
currency their derived pairs collide and the first insert wins; the
collapse is not reported.

Dispatch is bounded: pairs are grouped into batches, and a semaphore caps
the number of batches queued on the pool at any time. Every pair inside a
batch is still computed and inserted on its own, so a failing pair does not
stop its neighbours. The call returns only after every unit has settled.

Files that USE this module:
- fxcross.application.benchmark (times calculate_pairs)
- tests.test_pair_processor (unit tests)

Files that this module USES:
- fxcross.application.rate_collection (RateCollection input and output)
- fxcross.domain.models (Rate for derived values)
- fxcross.domain.errors (PairProcessingError, ProcessingTimeoutError)
- fxcross.shared.numeric (divide_rates with half-up rounding)
"""
from __future__ import annotations

import logging
import os
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from itertools import islice, product
from threading import BoundedSemaphore, Lock
from typing import Iterable, Iterator, List, Optional, Tuple

from fxcross.application.rate_collection import RateCollection
from fxcross.domain.errors import PairProcessingError, ProcessingTimeoutError
from fxcross.domain.models import Rate
from fxcross.shared.numeric import divide_rates

logger = logging.getLogger(__name__)

RatePair = Tuple[Rate, Rate]

DEFAULT_BATCH_SIZE = 1
PENDING_BATCHES_PER_WORKER = 4


@dataclass
class ProcessingStats:
    """Counters for one calculate_pairs call."""
    scheduled_units: int
    dispatched_units: int = 0
    completed_units: int = 0
    failed_units: int = 0
    elapsed_ms: int = 0

    @property
    def settled_units(self) -> int:
        return self.completed_units + self.failed_units


class _UnitTracker:
    """Counts settled units across worker threads and keeps the first failure."""

    def __init__(self):
        self._lock = Lock()
        self.completed = 0
        self.failed = 0
        self.first_error: Optional[BaseException] = None
        self.interrupt: Optional[BaseException] = None

    def unit_done(self) -> None:
        with self._lock:
            self.completed += 1

    def unit_failed(self, error: BaseException) -> None:
        with self._lock:
            self.failed += 1
            if self.first_error is None:
                self.first_error = error


def _batched(pairs: Iterable[RatePair], size: int) -> Iterator[List[RatePair]]:
    """Yield consecutive lists of at most ``size`` pairs."""
    it = iter(pairs)
    while True:
        batch = list(islice(it, size))
        if not batch:
            return
        yield batch


def _default_workers() -> int:
    # Same default ThreadPoolExecutor picks when max_workers is None
    return min(32, (os.cpu_count() or 1) + 4)


class PairProcessor:
    """
    Computes the full cross-product of cross-rates on a thread pool.

    Args:
        max_workers: Worker threads in the pool (None: executor default)
        batch_size: Pairs handed to a worker per submitted task
        max_pending: Submitted-but-unfinished tasks allowed at once
                     (None: PENDING_BATCHES_PER_WORKER per worker)
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_pending: Optional[int] = None,
    ):
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if max_pending is not None and max_pending < 1:
            raise ValueError("max_pending must be at least 1")

        self.max_workers = max_workers
        self.batch_size = batch_size
        self.max_pending = max_pending or (max_workers or _default_workers()) * PENDING_BATCHES_PER_WORKER
        self.last_run: Optional[ProcessingStats] = None

    @staticmethod
    def compute_pair(base_rate: Rate, quote_rate: Rate) -> Rate:
        """
        Derive the cross-rate of two rates quoted against the same base.

        Returns:
            Rate from ``base_rate.target_currency`` to ``quote_rate.target_currency``
        """
        return Rate(
            base_currency=base_rate.target_currency,
            target_currency=quote_rate.target_currency,
            rate=divide_rates(base_rate.rate, quote_rate.rate),
        )

    def _run_batch(self, batch: List[RatePair], output: RateCollection, tracker: _UnitTracker) -> None:
        for base_rate, quote_rate in batch:
            try:
                output.add_exchange_rate(self.compute_pair(base_rate, quote_rate))
            except Exception as e:
                tracker.unit_failed(e)
            else:
                tracker.unit_done()

    def calculate_pairs(
        self,
        base_rates: RateCollection,
        deadline_seconds: Optional[float] = None,
    ) -> RateCollection:
        """
        Compute every ordered cross-rate of ``base_rates``.

        Blocks until all N² units have settled.

        Args:
            base_rates: Input collection; read once before dispatch
            deadline_seconds: Stop dispatching new units after this many seconds

        Returns:
            New RateCollection with one entry per unique derived pair

        Raises:
            PairProcessingError: If any unit failed (first failure chained)
            ProcessingTimeoutError: If the deadline expired before all units
                                    were dispatched
        """
        rates = base_rates.get_all_exchange_rates()
        stats = ProcessingStats(scheduled_units=len(rates) ** 2)
        self.last_run = stats

        output = RateCollection()
        tracker = _UnitTracker()
        slots = BoundedSemaphore(self.max_pending)
        timed_out = False

        def _release_slot(future: Future) -> None:
            error = None if future.cancelled() else future.exception()
            if isinstance(error, Exception):
                tracker.unit_failed(error)
            elif error is not None:
                # KeyboardInterrupt, SystemExit: abort the whole run
                tracker.interrupt = error
            slots.release()

        logger.info(
            "Scheduling %d pair units over %d rates (workers=%s, batch=%d, max_pending=%d)",
            stats.scheduled_units, len(rates), self.max_workers or "default",
            self.batch_size, self.max_pending,
        )
        started = time.perf_counter()
        deadline = None if deadline_seconds is None else started + deadline_seconds

        pool = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="pair-worker")
        try:
            for batch in _batched(product(rates, repeat=2), self.batch_size):
                if tracker.interrupt is not None:
                    raise tracker.interrupt
                if deadline is None:
                    slots.acquire()
                else:
                    remaining = deadline - time.perf_counter()
                    if remaining <= 0 or not slots.acquire(timeout=remaining):
                        timed_out = True
                        break
                future = pool.submit(self._run_batch, batch, output, tracker)
                future.add_done_callback(_release_slot)
                stats.dispatched_units += len(batch)
            pool.shutdown(wait=True)
            if tracker.interrupt is not None:
                raise tracker.interrupt
        except BaseException:
            logger.warning("Pair processing interrupted, cancelling queued units")
            pool.shutdown(wait=True, cancel_futures=True)
            raise

        stats.completed_units = tracker.completed
        stats.failed_units = tracker.failed
        stats.elapsed_ms = int((time.perf_counter() - started) * 1000)

        if timed_out:
            logger.error(
                "Deadline of %.3fs expired after dispatching %d/%d units",
                deadline_seconds, stats.dispatched_units, stats.scheduled_units,
            )
            raise ProcessingTimeoutError(
                f"Deadline of {deadline_seconds}s expired after dispatching "
                f"{stats.dispatched_units} of {stats.scheduled_units} units",
                completed_units=stats.completed_units,
                scheduled_units=stats.scheduled_units,
            )

        if tracker.failed:
            logger.error(
                "%d of %d pair units failed; first error: %s",
                tracker.failed, stats.scheduled_units, tracker.first_error,
            )
            raise PairProcessingError(
                f"{tracker.failed} of {stats.scheduled_units} pair units failed",
                failed_units=tracker.failed,
                completed_units=tracker.completed,
            ) from tracker.first_error

        logger.info(
            "Computed %d pair units in %d ms (%d unique pairs)",
            stats.completed_units, stats.elapsed_ms, output.size(),
        )
        return output
