# src/fxcross/application/rate_collection.py
"""
Rate Collection - Thread-Safe Keyed Rate Store

This module provides the in-memory container rates are accumulated in.
Rates are keyed by their (base, target) currency pair and the first rate
stored for a pair wins: later inserts for the same pair are dropped
without error. Insertion is an atomic insert-if-absent, so the collection
can be filled from many worker threads without external locking.

Files that USE this module:
- fxcross.application.fetch_service (fills the base collection)
- fxcross.application.pair_processor (reads the base collection, fills the derived one)
- fxcross.application.benchmark (reports sizes and samples)
- tests.test_rate_collection (unit tests)

Files that this module USES:
- fxcross.domain.models (Rate, CurrencyPair)
"""
from __future__ import annotations

from threading import Lock
from typing import Dict, Iterable, List, Optional

from fxcross.domain.models import CurrencyPair, Rate


class RateCollection:
    """Keyed insert-once store of Rates."""

    def __init__(self, rates: Optional[Iterable[Rate]] = None):
        """
        Initialize an empty collection, optionally seeded with rates.

        Args:
            rates: Rates to insert in order (duplicates keep the first)
        """
        self._rates: Dict[CurrencyPair, Rate] = {}
        self._lock = Lock()
        if rates is not None:
            for rate in rates:
                self.add_exchange_rate(rate)

    def __repr__(self) -> str:
        return f"RateCollection(size={self.size()})"

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, pair: object) -> bool:
        with self._lock:
            return pair in self._rates

    def insert_if_absent(self, rate: Rate) -> bool:
        """
        Store ``rate`` under its currency pair unless the pair is already present.

        Args:
            rate: Rate to insert

        Returns:
            True if the rate was stored, False if an earlier rate kept the pair
        """
        key = CurrencyPair(rate.base_currency, rate.target_currency)
        with self._lock:
            if key in self._rates:
                return False
            self._rates[key] = rate
            return True

    def add_exchange_rate(self, rate: Rate) -> None:
        """Insert ``rate`` if its pair is absent; duplicates are silently dropped."""
        self.insert_if_absent(rate)

    def get_exchange_rate(self, base: str, target: str) -> Optional[Rate]:
        """
        Look up the rate stored for an exact (base, target) pair.

        Returns:
            The stored Rate, or None if the pair is not present
        """
        with self._lock:
            return self._rates.get(CurrencyPair(base, target))

    def get_all_exchange_rates(self) -> List[Rate]:
        """Return a point-in-time list of every stored rate in map order."""
        with self._lock:
            return list(self._rates.values())

    def size(self) -> int:
        """Current number of stored pairs."""
        with self._lock:
            return len(self._rates)
