# src/fxcross/application/fetch_service.py
"""
Fetch Service - Random Base Rate Generator

This module stands in for a rate feed. It produces a collection of random
rates quoted from one base currency to ``count`` distinct random 3-letter
codes, each rate drawn uniformly from [min_rate, max_rate) and rounded
half-up to 10 fractional digits.

Files that USE this module:
- fxcross.application.benchmark (times fetch_rates)
- tests.test_fetch_service (unit tests)

Files that this module USES:
- fxcross.application.rate_collection (RateCollection output)
- fxcross.domain.models (Rate)
- fxcross.shared.numeric (round_rate)
"""
from __future__ import annotations

import logging
import random
import string
from decimal import Decimal
from typing import Optional, Set

from fxcross.application.rate_collection import RateCollection
from fxcross.domain.models import Rate
from fxcross.shared.numeric import round_rate

logger = logging.getLogger(__name__)

LETTERS = string.ascii_uppercase
MAX_UNIQUE_CODES = len(LETTERS) ** 3  # 17576

DEFAULT_COUNT = 2001
DEFAULT_BASE_CURRENCY = "USD"
DEFAULT_MIN_RATE = 0.05
DEFAULT_MAX_RATE = 100000.0


class FetchService:
    """Generates a RateCollection of random rates quoted from one base currency."""

    def __init__(
        self,
        count: int = DEFAULT_COUNT,
        base_currency: str = DEFAULT_BASE_CURRENCY,
        min_rate: float = DEFAULT_MIN_RATE,
        max_rate: float = DEFAULT_MAX_RATE,
        seed: Optional[int] = None,
    ):
        """
        Initialize the generator.

        Args:
            count: Number of distinct target currencies to quote
            base_currency: Currency every generated rate is quoted from
            min_rate: Lower bound of generated rates (must be > 0)
            max_rate: Upper bound of generated rates (must be > min_rate)
            seed: Seed for a reproducible dataset (None: random)

        Raises:
            ValueError: If count or the rate bounds are out of range
        """
        if not 0 <= count <= MAX_UNIQUE_CODES:
            raise ValueError(f"count must be between 0 and {MAX_UNIQUE_CODES}, got {count}")
        if min_rate <= 0:
            raise ValueError("min_rate must be greater than zero")
        if max_rate <= min_rate:
            raise ValueError("max_rate must be greater than min_rate")

        self.count = count
        self.base_currency = base_currency
        self.min_rate = min_rate
        self.max_rate = max_rate
        self._rng = random.Random(seed)

    def _random_code(self) -> str:
        return "".join(self._rng.choice(LETTERS) for _ in range(3))

    def _random_rate(self) -> Decimal:
        value = self.min_rate + (self.max_rate - self.min_rate) * self._rng.random()
        return round_rate(value)

    def fetch_rates(self) -> RateCollection:
        """
        Generate ``count`` rates from the base currency to distinct random codes.

        Returns:
            RateCollection with exactly ``count`` entries
        """
        collection = RateCollection()
        seen: Set[str] = set()

        while len(seen) < self.count:
            code = self._random_code()
            if code in seen:
                continue
            seen.add(code)
            collection.add_exchange_rate(Rate(self.base_currency, code, self._random_rate()))

        logger.info("Generated %d random %s rates", collection.size(), self.base_currency)
        return collection
