# src/fxcross/__init__.py
"""
FXCross - Concurrent Cross-Rate Benchmark

Generates a random set of exchange rates quoted against one base currency
and derives every cross-rate between all pairs of quoted currencies on a
thread pool, timing both phases.
"""

__version__ = "1.0.0"
