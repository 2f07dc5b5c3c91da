# src/fxcross/shared/validators.py
"""
Input Validation Utilities - Currency and Rate Validation

This module provides validation predicates for currency codes, rate values
and logging configuration. All predicates return a bool and never raise;
callers decide which exception a failed check turns into.

Files that USE this module:
- fxcross.domain.models (Rate invariants)
- fxcross.config.settings (uses validation functions in Settings field validators)

Files that this module USES:
- None (pure utility functions)
"""
import logging
from decimal import Decimal
from typing import Any

CURRENCY_CODE_LENGTH = 3


def validate_currency_code(code: Any) -> bool:
    """
    Validate a currency code.

    A code is valid when it is a non-empty string of exactly 3 characters.
    Case and alphabet are not checked.

    Args:
        code: Currency code to validate

    Returns:
        True if valid, False otherwise
    """
    if not code or not isinstance(code, str):
        return False

    return len(code) == CURRENCY_CODE_LENGTH


def validate_positive_decimal(value: Any) -> bool:
    """
    Validate that a value is a finite Decimal strictly greater than zero.

    Args:
        value: Value to validate

    Returns:
        True if valid, False otherwise
    """
    if not isinstance(value, Decimal):
        return False

    if not value.is_finite():
        return False

    return value > 0


def validate_log_level(level: str) -> bool:
    """
    Validate a logging level name such as "INFO" or "debug".

    Args:
        level: Level name

    Returns:
        True if the logging module knows the level, False otherwise
    """
    if not level:
        return False

    return isinstance(logging.getLevelName(level.upper()), int)
