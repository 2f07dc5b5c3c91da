# src/fxcross/shared/numeric.py
"""
Decimal Arithmetic - Fixed-Scale Rate Math

All rate values are ``Decimal``, never float. Results are rounded half-up
(away from zero on ties) to RATE_SCALE fractional digits, computed on the
exact integer coefficients so no intermediate rounding happens.

Files that USE this module:
- fxcross.domain.models (to_decimal for Rate normalisation)
- fxcross.application.pair_processor (divide_rates for cross-rates)
- fxcross.application.fetch_service (round_rate for generated rates)

Files that this module USES:
- None (standard library decimal only)
"""
from __future__ import annotations

from decimal import Decimal, DivisionByZero, InvalidOperation
from typing import Union

RATE_SCALE = 10

Number = Union[Decimal, int, str, float]


def to_decimal(value: Number) -> Decimal:
    """
    Convert a supported numeric value to Decimal.

    Floats go through ``str()`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Raises:
        TypeError: For bool or any unsupported type
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a valid rate value")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, (int, str)):
        return Decimal(value)
    raise TypeError(f"Unsupported rate value type: {type(value).__name__}")


def _half_up(numerator: int, denominator: int) -> int:
    """Integer division of non-negative ints, rounding ties away from zero."""
    quotient, remainder = divmod(numerator, denominator)
    if 2 * remainder >= denominator:
        quotient += 1
    return quotient


def _from_scaled(sign: int, scaled: int, scale: int) -> Decimal:
    """Build ``(-1)**sign * scaled * 10**-scale`` without a context round-trip."""
    return Decimal((sign, tuple(int(d) for d in str(scaled)), -scale))


def round_rate(value: Number, scale: int = RATE_SCALE) -> Decimal:
    """Round ``value`` half-up to ``scale`` fractional digits."""
    return divide_rates(to_decimal(value), Decimal(1), scale)


def divide_rates(numerator: Decimal, denominator: Decimal, scale: int = RATE_SCALE) -> Decimal:
    """
    Divide two rates and round the quotient half-up to ``scale`` digits.

    The quotient is computed on the exact integer coefficients of both
    operands, so the result is exact for any magnitude and precision.

    >>> divide_rates(Decimal("2"), Decimal("4"))
    Decimal('0.5000000000')

    Raises:
        decimal.DivisionByZero: If ``denominator`` is zero
        decimal.InvalidOperation: If either operand is not finite
    """
    if not (numerator.is_finite() and denominator.is_finite()):
        raise InvalidOperation(f"Cannot divide non-finite values {numerator} / {denominator}")
    if not denominator:
        raise DivisionByZero(f"Division of {numerator} by zero")

    n_sign, n_digits, n_exp = numerator.as_tuple()
    d_sign, d_digits, d_exp = denominator.as_tuple()
    n_coeff = int("".join(map(str, n_digits)))
    d_coeff = int("".join(map(str, d_digits)))

    # value * 10**scale == n_coeff * 10**shift / d_coeff
    shift = n_exp - d_exp + scale
    if shift >= 0:
        scaled = _half_up(n_coeff * 10 ** shift, d_coeff)
    else:
        scaled = _half_up(n_coeff, d_coeff * 10 ** -shift)

    return _from_scaled(n_sign ^ d_sign if scaled else 0, scaled, scale)
