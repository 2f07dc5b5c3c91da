# src/fxcross/application/__init__.py
"""
Application Layer - Services and Use Cases

This package contains the rate store, the random rate generator, the
concurrent pair processor and the benchmark run that ties them together.
"""

from fxcross.application.rate_collection import RateCollection
from fxcross.application.fetch_service import FetchService
from fxcross.application.pair_processor import PairProcessor, ProcessingStats
from fxcross.application.benchmark import BenchmarkReport, run_benchmark

__all__ = [
    "RateCollection",
    "FetchService",
    "PairProcessor",
    "ProcessingStats",
    "BenchmarkReport",
    "run_benchmark",
]
