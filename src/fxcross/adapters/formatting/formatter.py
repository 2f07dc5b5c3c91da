# src/fxcross/adapters/formatting/formatter.py
"""
Report Formatter - Text Formatting and Presentation

This module handles all text formatting for the console report: the
generation summary, the processing summary and the sample of derived rates.

Files that USE this module:
- fxcross.app (prints format_report output)
- tests.test_formatter (unit tests)

Files that this module USES:
- fxcross.application.benchmark (BenchmarkReport)
- fxcross.domain.models (Rate)
"""
from __future__ import annotations

from typing import List

from fxcross.application.benchmark import BenchmarkReport
from fxcross.domain.models import Rate


def format_rate(rate: Rate) -> str:
    """
    Format a single rate as one line.

    Example:
        Rate{base=EUR, target=JPY, rate=162.3400000000, timestamp=1700000000000}
    """
    return (
        f"Rate{{base={rate.base_currency}, target={rate.target_currency}, "
        f"rate={rate.rate}, timestamp={rate.timestamp}}}"
    )


def fetch_lines(report: BenchmarkReport) -> List[str]:
    """Lines describing the generation phase."""
    return [
        f"Fetched rates: {report.base_count} rates",
        f"Fetching rates took {report.fetch_ms} milliseconds.",
    ]


def process_line(report: BenchmarkReport) -> str:
    """Line describing the processing phase."""
    return (
        f"Processing rates took {report.process_ms} milliseconds "
        f"to process {report.pair_count} unique pairs."
    )


def sample_lines(report: BenchmarkReport) -> List[str]:
    """One formatted line per sampled derived rate."""
    return [format_rate(rate) for rate in report.sample]


def format_report(report: BenchmarkReport) -> str:
    """Full console report, one item per line."""
    return "\n".join([*fetch_lines(report), process_line(report), *sample_lines(report)])
