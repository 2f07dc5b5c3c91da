# src/fxcross/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and business rules.
No dependencies on infrastructure or external systems.
"""

from fxcross.domain.models import CurrencyPair, Rate
from fxcross.domain.errors import (
    DomainError,
    InvalidCurrencyError,
    InvalidRateError,
    PairProcessingError,
    ProcessingTimeoutError,
    RateValidationError,
)

__all__ = [
    "Rate",
    "CurrencyPair",
    "DomainError",
    "RateValidationError",
    "InvalidCurrencyError",
    "InvalidRateError",
    "PairProcessingError",
    "ProcessingTimeoutError",
]
