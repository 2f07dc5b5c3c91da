# src/fxcross/adapters/formatting/__init__.py
"""
Formatting Adapters - Console Text Rendering
"""

from fxcross.adapters.formatting.formatter import (
    fetch_lines,
    format_rate,
    format_report,
    process_line,
    sample_lines,
)

__all__ = [
    "format_rate",
    "fetch_lines",
    "process_line",
    "sample_lines",
    "format_report",
]
