# src/fxcross/app.py
"""
Application Entry Point - Benchmark Startup

This module serves as the composition root for the FXCross benchmark.
It loads settings, configures logging, runs the benchmark and prints the
report to stdout.

Files that USE this module:
- fxcross console script (pyproject entry point)
- python -m fxcross.app

Files that this module USES:
- fxcross.shared.logging_conf (setup_logging for logging configuration)
- fxcross.config (settings for configuration management)
- fxcross.application.benchmark (run_benchmark for the timed run)
- fxcross.adapters.formatting.formatter (format_report for console output)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import logging  # Standard library for logging messages and errors
from typing import TYPE_CHECKING, Optional  # Type hints for optional values

from fxcross.shared.logging_conf import setup_logging  # Configure logging with file rotation
from fxcross.application.benchmark import run_benchmark  # Timed generation and pair processing
from fxcross.adapters.formatting.formatter import format_report  # Console report rendering
from fxcross.domain.errors import PairProcessingError  # Failures surfaced by the processor

if TYPE_CHECKING:
    from fxcross.config.settings import Settings


def main(settings: Optional["Settings"] = None) -> None:
    """
    Run the benchmark once and print the report.

    This function:
    1. Loads settings and sets up logging
    2. Generates the random base rates (timed)
    3. Computes every cross-rate on the thread pool (timed)
    4. Prints the summary lines and a sample of derived rates

    Any failure is logged with its traceback and re-raised so the process
    exits with a non-zero status.
    """
    if settings is None:
        # Import settings here so that a bad environment fails inside main()
        from fxcross.config import settings

    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    logger = logging.getLogger(__name__)

    logger.info(
        "Starting benchmark: %d %s rates, workers=%s, batch=%d",
        settings.currency_count,
        settings.base_currency,
        settings.max_workers or "default",
        settings.batch_size,
    )

    try:
        report = run_benchmark(settings)
    except PairProcessingError as e:
        logger.exception("Pair processing failed: %s", e)
        raise
    except KeyboardInterrupt:
        logger.info("Benchmark stopped by user (KeyboardInterrupt)")
        raise
    except Exception as e:
        logger.exception("Unexpected error during benchmark: %s (type: %s)", e, type(e).__name__)
        raise

    print(format_report(report))


if __name__ == "__main__":
    main()
