# src/fxcross/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions that represent
business rule violations and failures of the pair computation.
"""
from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class RateValidationError(DomainError, ValueError):
    """Raised when a Rate cannot be constructed because an invariant is violated."""
    pass


class InvalidCurrencyError(RateValidationError):
    """Raised when a currency code is missing or not exactly 3 characters."""
    pass


class InvalidRateError(RateValidationError):
    """Raised when a rate value is invalid (e.g., negative or zero)."""
    pass


class PairProcessingError(DomainError):
    """
    Raised when one or more pair computations failed.

    Only raised after every scheduled unit has settled. The first failure
    is chained as ``__cause__``.
    """

    def __init__(self, message: str, failed_units: int = 0, completed_units: int = 0):
        super().__init__(message)
        self.failed_units = failed_units
        self.completed_units = completed_units


class ProcessingTimeoutError(PairProcessingError):
    """Raised when the processing deadline expired before all units were dispatched."""

    def __init__(self, message: str, completed_units: int = 0, scheduled_units: Optional[int] = None):
        super().__init__(message, failed_units=0, completed_units=completed_units)
        self.scheduled_units = scheduled_units
