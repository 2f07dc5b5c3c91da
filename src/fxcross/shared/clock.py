# src/fxcross/shared/clock.py
"""Wall-clock helpers."""
import time


def now_ms() -> int:
    """Return the current time in milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def elapsed_ms(start: float) -> int:
    """Return whole milliseconds elapsed since a ``time.perf_counter()`` reading."""
    return int((time.perf_counter() - start) * 1000)
