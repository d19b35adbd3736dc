"""Small integer utilities."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Iterable, Union

from .errors import InvalidInput, NumericOverflow

# Ledger quantities are u128.
U128_MAX = 2**128 - 1

Tolerance = Union[int, Fraction, Decimal, str, float]


def require_int(name: str, value: object) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidInput(f"{name} must be an int, got {type(value).__name__}")
    return value


def require_amount(name: str, value: object) -> int:
    """Non-negative integer within the ledger's u128 domain."""
    v = require_int(name, value)
    if v < 0:
        raise InvalidInput(f"{name} must be non-negative, got {v}")
    if v > U128_MAX:
        raise NumericOverflow(f"{name} exceeds the u128 domain: {v}")
    return v


def ceil_div(n: int, d: int) -> int:
    if d <= 0:
        raise ValueError("denominator must be positive")
    return -((-n) // d)


def product(values: Iterable[int]) -> int:
    out = 1
    for v in values:
        out *= v
    return out


def check_width(name: str, value: int, max_bits: int) -> int:
    if value.bit_length() > max_bits:
        raise NumericOverflow(
            f"{name} needs {value.bit_length()} bits, safe width is {max_bits}"
        )
    return value


def to_fraction(value: Tolerance) -> Fraction:
    """Exact rational form of a percentage.

    Floats go through their decimal repr so 0.1 means 1/10, not the nearest binary double.
    """
    if isinstance(value, bool):
        raise InvalidInput("tolerance must be a number, got bool")
    if isinstance(value, float):
        value = repr(value)
    try:
        return Fraction(value)
    except (ValueError, TypeError, OverflowError, InvalidOperation, ZeroDivisionError) as exc:
        raise InvalidInput(f"not a number: {value!r}") from exc


def percent(n: Fraction) -> str:
    """Display helper: Fraction percent -> '+1.23%'."""
    sign = "+" if n >= 0 else "-"
    hundredths = round(abs(n) * 100)
    return f"{sign}{hundredths // 100}.{hundredths % 100:02d}%"
