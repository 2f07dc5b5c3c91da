# src/fxcross/application/benchmark.py
"""
Benchmark - Timed Generation and Pair Processing

Runs the two benchmark phases back to back and collects what the console
report needs: dataset size, phase durations in milliseconds, number of
unique derived pairs, and a sample of derived rates.

Files that USE this module:
- fxcross.app (runs the benchmark and prints the report)
- tests.test_benchmark (unit tests)

Files that this module USES:
- fxcross.application.fetch_service (FetchService)
- fxcross.application.pair_processor (PairProcessor)
- fxcross.application.rate_collection (RateCollection)
- fxcross.shared.clock (elapsed_ms)
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from fxcross.application.fetch_service import FetchService
from fxcross.application.pair_processor import PairProcessor
from fxcross.application.rate_collection import RateCollection
from fxcross.domain.models import Rate
from fxcross.shared.clock import elapsed_ms

if TYPE_CHECKING:
    from fxcross.config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkReport:
    """Results of one benchmark run."""
    base_count: int
    fetch_ms: int
    process_ms: int
    pair_count: int
    sample: List[Rate] = field(default_factory=list)
    derived: Optional[RateCollection] = field(default=None, repr=False)


def build_fetch_service(settings: "Settings") -> FetchService:
    return FetchService(
        count=settings.currency_count,
        base_currency=settings.base_currency,
        min_rate=settings.min_rate,
        max_rate=settings.max_rate,
        seed=settings.seed,
    )


def build_processor(settings: "Settings") -> PairProcessor:
    return PairProcessor(
        max_workers=settings.max_workers,
        batch_size=settings.batch_size,
        max_pending=settings.max_pending,
    )


def run_benchmark(
    settings: "Settings",
    fetch_service: Optional[FetchService] = None,
    processor: Optional[PairProcessor] = None,
) -> BenchmarkReport:
    """
    Generate the base rates, derive all cross-rates and time both phases.

    Args:
        settings: Benchmark settings
        fetch_service: Generator to use (default: built from settings)
        processor: Pair processor to use (default: built from settings)

    Returns:
        BenchmarkReport for the run

    Raises:
        PairProcessingError: Propagated from the processor; no report is produced
    """
    fetch_service = fetch_service or build_fetch_service(settings)
    processor = processor or build_processor(settings)

    start = time.perf_counter()
    base_rates = fetch_service.fetch_rates()
    fetch_ms = elapsed_ms(start)
    logger.debug("Fetch phase: %d rates in %d ms", base_rates.size(), fetch_ms)

    start = time.perf_counter()
    derived = processor.calculate_pairs(base_rates, deadline_seconds=settings.deadline_seconds)
    process_ms = elapsed_ms(start)
    logger.debug("Process phase: %d unique pairs in %d ms", derived.size(), process_ms)

    rates = derived.get_all_exchange_rates()
    return BenchmarkReport(
        base_count=base_rates.size(),
        fetch_ms=fetch_ms,
        process_ms=process_ms,
        pair_count=len(rates),
        sample=rates[:settings.sample_size],
        derived=derived,
    )
