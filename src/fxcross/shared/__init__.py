# src/fxcross/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Decimal rate arithmetic
- Clock helpers
- Logging configuration
"""

from fxcross.shared.validators import (
    validate_currency_code,
    validate_log_level,
    validate_positive_decimal,
)
from fxcross.shared.numeric import RATE_SCALE, divide_rates, round_rate, to_decimal
from fxcross.shared.clock import elapsed_ms, now_ms

__all__ = [
    "validate_currency_code",
    "validate_positive_decimal",
    "validate_log_level",
    "RATE_SCALE",
    "divide_rates",
    "round_rate",
    "to_decimal",
    "now_ms",
    "elapsed_ms",
]
