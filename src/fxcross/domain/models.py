# src/fxcross/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Exchange rates between two currencies
- The currency pair key rates are stored under

Files that USE this module:
- fxcross.application.* (all services use domain models)
- fxcross.adapters.formatting (renders rates for the console)
- tests.* (tests use domain models for test data)

Files that this module USES:
- fxcross.domain.errors (validation exceptions)
- fxcross.shared.validators (currency code and rate predicates)
- fxcross.shared.numeric (Decimal normalisation)
- fxcross.shared.clock (construction timestamps)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass, field  # Decorator for creating data classes
from decimal import Decimal, InvalidOperation  # Arbitrary-precision rate values
from typing import NamedTuple  # Lightweight immutable key type

from fxcross.domain.errors import InvalidCurrencyError, InvalidRateError  # Validation failures
from fxcross.shared.clock import now_ms  # Millisecond wall-clock timestamps
from fxcross.shared.numeric import to_decimal  # Normalise int/str/float input to Decimal
from fxcross.shared.validators import validate_currency_code, validate_positive_decimal


class CurrencyPair(NamedTuple):
    """Composite key of a rate: the quoted (base, target) currencies."""
    base: str
    target: str


@dataclass(frozen=True)
class Rate:
    """
    An immutable quote between two currencies.

    Attributes:
        base_currency: 3-character code of the currency being priced
        target_currency: 3-character code of the currency it is priced in
        rate: Strictly positive Decimal amount of target per 1 base
        timestamp: Milliseconds since the Unix epoch, read at construction
                   when not given

    Raises:
        InvalidCurrencyError: If a currency code is missing or not 3 characters
        InvalidRateError: If the rate is not a finite number greater than zero
    """
    base_currency: str
    target_currency: str
    rate: Decimal
    timestamp: int = field(default_factory=now_ms)

    def __post_init__(self) -> None:
        if not validate_currency_code(self.base_currency):
            raise InvalidCurrencyError(
                f"Base currency must be a valid 3-letter code, got {self.base_currency!r}"
            )
        if not validate_currency_code(self.target_currency):
            raise InvalidCurrencyError(
                f"Target currency must be a valid 3-letter code, got {self.target_currency!r}"
            )

        if self.rate is None:
            raise InvalidRateError("A numerical exchange rate is required")
        try:
            value = to_decimal(self.rate)
        except (TypeError, InvalidOperation) as e:
            raise InvalidRateError(f"Exchange rate is not a number: {self.rate!r}") from e

        if not validate_positive_decimal(value):
            raise InvalidRateError(f"Exchange rate must be greater than zero, got {value}")

        # frozen dataclass: bypass __setattr__ to store the normalised value
        object.__setattr__(self, "rate", value)

    @property
    def pair(self) -> CurrencyPair:
        """Key this rate is stored under in a RateCollection."""
        return CurrencyPair(self.base_currency, self.target_currency)
