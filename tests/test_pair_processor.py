# tests/test_pair_processor.py
"""
Pair Processor Tests - Unit Tests for Concurrent Cross-Rate Computation

This module contains unit tests for PairProcessor: pair counts, self-pairs,
numeric results, collapsing of duplicate target currencies, blocking until
completion, failure propagation, deadlines, interrupts and dispatch settings.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- fxcross.application.pair_processor (PairProcessor to test)
- fxcross.application.rate_collection (RateCollection input)
- fxcross.application.fetch_service (FetchService for a larger dataset)
- fxcross.domain.models (Rate for test data)
- fxcross.domain.errors (InvalidRateError, PairProcessingError, ProcessingTimeoutError)
- pytest (testing framework)
"""
import string
import time
from decimal import Decimal
from threading import Event, Lock

import pytest

from fxcross.application import pair_processor
from fxcross.application.fetch_service import FetchService
from fxcross.application.pair_processor import PairProcessor
from fxcross.application.rate_collection import RateCollection
from fxcross.domain.errors import InvalidRateError, PairProcessingError, ProcessingTimeoutError
from fxcross.domain.models import Rate


def _collection(quotes):
    """Build a USD-based collection from (target, rate) tuples."""
    return RateCollection(Rate("USD", target, Decimal(value)) for target, value in quotes)


def _distinct(n):
    return _collection((f"C{string.ascii_uppercase[i // 26]}{string.ascii_uppercase[i % 26]}", str(i + 1)) for i in range(n))


def _triples(collection):
    return {(r.base_currency, r.target_currency, r.rate) for r in collection.get_all_exchange_rates()}


class TestComputePair:
    def test_compute_pair(self):
        eur = Rate("USD", "EUR", Decimal("0.5"))
        jpy = Rate("USD", "JPY", Decimal("150"))
        derived = PairProcessor.compute_pair(jpy, eur)
        assert derived.base_currency == "JPY"
        assert derived.target_currency == "EUR"
        assert derived.rate == Decimal("300.0000000000")


class TestPairCount:
    @pytest.mark.parametrize("max_workers,batch_size", [(1, 1), (4, 1), (4, 7), (2, 1000)])
    def test_distinct_targets_give_n_squared(self, max_workers, batch_size):
        base = _distinct(12)
        processor = PairProcessor(max_workers=max_workers, batch_size=batch_size)
        result = processor.calculate_pairs(base)
        assert result.size() == 144
        assert processor.last_run.scheduled_units == 144
        assert processor.last_run.completed_units == 144
        assert processor.last_run.failed_units == 0

    def test_generated_dataset(self):
        base = FetchService(count=40, seed=7).fetch_rates()
        result = PairProcessor(max_workers=4, batch_size=64).calculate_pairs(base)
        assert result.size() == 1600

    def test_empty_input(self):
        processor = PairProcessor()
        result = processor.calculate_pairs(RateCollection())
        assert result.size() == 0
        assert processor.last_run.scheduled_units == 0

    def test_single_input(self):
        result = PairProcessor().calculate_pairs(_collection([("EUR", "0.9")]))
        assert result.size() == 1
        assert result.get_exchange_rate("EUR", "EUR").rate == Decimal("1")

    def test_input_untouched(self):
        base = _distinct(5)
        before = base.get_all_exchange_rates()
        PairProcessor().calculate_pairs(base)
        assert base.get_all_exchange_rates() == before

    def test_returns_new_collection(self):
        base = _distinct(3)
        result = PairProcessor().calculate_pairs(base)
        assert result is not base


class TestDerivedValues:
    def test_spec_example(self):
        base = _collection([("XXX", "2.0000000000"), ("YYY", "4.0000000000")])
        result = PairProcessor(max_workers=2).calculate_pairs(base)
        assert str(result.get_exchange_rate("XXX", "YYY").rate) == "0.5000000000"
        assert str(result.get_exchange_rate("YYY", "XXX").rate) == "2.0000000000"

    def test_self_pairs_are_one(self):
        base = _collection([("EUR", "0.9134567891"), ("JPY", "149.9"), ("GBP", "0.79")])
        result = PairProcessor().calculate_pairs(base)
        for rate in base.get_all_exchange_rates():
            derived = result.get_exchange_rate(rate.target_currency, rate.target_currency)
            assert derived is not None
            assert str(derived.rate) == "1.0000000000"

    def test_rounding_half_up(self):
        base = _collection([("AAA", "2"), ("BBB", "3")])
        result = PairProcessor().calculate_pairs(base)
        assert result.get_exchange_rate("AAA", "BBB").rate == Decimal("0.6666666667")
        assert result.get_exchange_rate("BBB", "AAA").rate == Decimal("1.5000000000")

    def test_same_result_set_across_runs(self):
        base = FetchService(count=15, seed=42).fetch_rates()
        first = PairProcessor(max_workers=1).calculate_pairs(base)
        second = PairProcessor(max_workers=8, batch_size=3).calculate_pairs(base)
        assert _triples(first) == _triples(second)


class TestLargeRates:
    def test_large_quotient_is_exact(self):
        base = _collection([("BIG", "1E+75"), ("BGR", "3E+75")])
        result = PairProcessor(max_workers=2).calculate_pairs(base)
        assert result.get_exchange_rate("BIG", "BGR").rate == Decimal("0.3333333333")
        assert result.get_exchange_rate("BGR", "BIG").rate == Decimal("3.0000000000")
        assert result.get_exchange_rate("BIG", "BIG").rate == Decimal("1")

    def test_only_zero_rounded_pair_fails(self):
        base = _collection([("BIG", "1E+75"), ("ONE", "1")])
        processor = PairProcessor(max_workers=2)

        with pytest.raises(PairProcessingError) as excinfo:
            processor.calculate_pairs(base)

        # ONE/BIG rounds to zero at 10 digits; BIG/ONE is 1E+75 and must succeed
        assert excinfo.value.failed_units == 1
        assert excinfo.value.completed_units == 3
        assert isinstance(excinfo.value.__cause__, InvalidRateError)


class TestCollapsing:
    def _duplicated_target_input(self):
        # EUR quoted from two different bases: both survive in the input collection
        return RateCollection([
            Rate("USD", "EUR", Decimal("2")),
            Rate("GBP", "EUR", Decimal("3")),
            Rate("USD", "JPY", Decimal("4")),
        ])

    def test_duplicate_targets_collapse(self):
        base = self._duplicated_target_input()
        assert base.size() == 3
        result = PairProcessor(max_workers=4).calculate_pairs(base)
        # 9 units scheduled, only the EUR/JPY combinations are distinct keys
        assert result.size() == 4
        assert result.size() < 3 ** 2

    def test_collapsed_pair_comes_from_one_source(self):
        result = PairProcessor(max_workers=4).calculate_pairs(self._duplicated_target_input())
        assert result.get_exchange_rate("EUR", "JPY").rate in {Decimal("0.5000000000"), Decimal("0.7500000000")}
        assert result.get_exchange_rate("JPY", "EUR").rate in {Decimal("2.0000000000"), Decimal("1.3333333333")}

    def test_collapse_is_not_an_error(self):
        processor = PairProcessor()
        processor.calculate_pairs(self._duplicated_target_input())
        assert processor.last_run.completed_units == 9
        assert processor.last_run.failed_units == 0


class TestCompletionBlocking:
    def test_returns_only_after_every_unit(self, monkeypatch):
        original = PairProcessor.compute_pair
        finished = []
        lock = Lock()

        def slow_compute(base_rate, quote_rate):
            time.sleep(0.002)
            derived = original(base_rate, quote_rate)
            with lock:
                finished.append(derived)
            return derived

        monkeypatch.setattr(PairProcessor, "compute_pair", staticmethod(slow_compute))
        processor = PairProcessor(max_workers=4, batch_size=2, max_pending=2)
        result = processor.calculate_pairs(_distinct(8))

        assert len(finished) == 64
        assert result.size() == 64
        assert processor.last_run.settled_units == 64


class TestFailures:
    def test_failure_surfaces_after_all_units_settle(self, monkeypatch):
        original = PairProcessor.compute_pair
        boom = ArithmeticError("boom")

        def failing_compute(base_rate, quote_rate):
            if base_rate.target_currency == "CAB":
                raise boom
            return original(base_rate, quote_rate)

        monkeypatch.setattr(PairProcessor, "compute_pair", staticmethod(failing_compute))
        processor = PairProcessor(max_workers=3, batch_size=4)

        with pytest.raises(PairProcessingError) as excinfo:
            processor.calculate_pairs(_distinct(6))

        assert excinfo.value.__cause__ is boom
        assert excinfo.value.failed_units == 6
        assert excinfo.value.completed_units == 30
        assert processor.last_run.settled_units == 36

    def test_timeout_stops_dispatch(self, monkeypatch):
        original = PairProcessor.compute_pair

        def slow_compute(base_rate, quote_rate):
            time.sleep(0.05)
            return original(base_rate, quote_rate)

        monkeypatch.setattr(PairProcessor, "compute_pair", staticmethod(slow_compute))
        processor = PairProcessor(max_workers=1, batch_size=1, max_pending=1)

        with pytest.raises(ProcessingTimeoutError) as excinfo:
            processor.calculate_pairs(_distinct(6), deadline_seconds=0.1)

        assert excinfo.value.scheduled_units == 36
        assert processor.last_run.dispatched_units < 36
        assert processor.last_run.settled_units == processor.last_run.dispatched_units

    def test_expired_deadline_stops_dispatch_with_free_slots(self):
        processor = PairProcessor(max_workers=2, batch_size=1, max_pending=10 ** 7)

        with pytest.raises(ProcessingTimeoutError):
            processor.calculate_pairs(_distinct(60), deadline_seconds=1e-9)

        assert processor.last_run.dispatched_units < 3600
        assert processor.last_run.settled_units == processor.last_run.dispatched_units

    def test_generous_deadline_completes(self):
        result = PairProcessor().calculate_pairs(_distinct(4), deadline_seconds=30)
        assert result.size() == 16


class TestInterrupts:
    def test_interrupt_in_worker_propagates(self, monkeypatch):
        original = PairProcessor.compute_pair

        def interrupted_compute(base_rate, quote_rate):
            if base_rate.target_currency == "CAA":
                raise KeyboardInterrupt
            return original(base_rate, quote_rate)

        monkeypatch.setattr(PairProcessor, "compute_pair", staticmethod(interrupted_compute))
        processor = PairProcessor(max_workers=1, batch_size=1, max_pending=1)

        with pytest.raises(KeyboardInterrupt):
            processor.calculate_pairs(_distinct(6))

        assert processor.last_run.dispatched_units < processor.last_run.scheduled_units

    def test_interrupt_during_dispatch_cancels_queued_units(self, monkeypatch):
        original = PairProcessor.compute_pair
        real_batched = pair_processor._batched
        released = Event()
        ran = []

        def blocking_compute(base_rate, quote_rate):
            released.wait(5)
            time.sleep(0.05)
            ran.append((base_rate, quote_rate))
            return original(base_rate, quote_rate)

        def interrupted_batched(pairs, size):
            for n, batch in enumerate(real_batched(pairs, size)):
                if n == 5:
                    released.set()
                    raise KeyboardInterrupt
                yield batch

        monkeypatch.setattr(pair_processor, "_batched", interrupted_batched)
        monkeypatch.setattr(PairProcessor, "compute_pair", staticmethod(blocking_compute))
        processor = PairProcessor(max_workers=1, batch_size=1, max_pending=100)

        with pytest.raises(KeyboardInterrupt):
            processor.calculate_pairs(_distinct(6))

        assert processor.last_run.dispatched_units == 5
        # one unit was running when the interrupt arrived; the queued ones were cancelled
        assert len(ran) < 5


class TestProcessorSettings:
    @pytest.mark.parametrize("kwargs", [
        {"max_workers": 0},
        {"batch_size": 0},
        {"max_pending": 0},
    ])
    def test_invalid_arguments(self, kwargs):
        with pytest.raises(ValueError):
            PairProcessor(**kwargs)

    def test_default_max_pending_scales_with_workers(self):
        assert PairProcessor(max_workers=3).max_pending == 12
        assert PairProcessor(max_workers=3, max_pending=5).max_pending == 5
