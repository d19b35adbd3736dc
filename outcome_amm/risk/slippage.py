"""Slippage guard: turn a quoted output into a bound the settlement layer enforces."""

from __future__ import annotations

from fractions import Fraction

from ..core.errors import InvalidInput
from ..core.utils import Tolerance, require_amount, to_fraction


def _tolerance(tolerance: Tolerance) -> Fraction:
    t = to_fraction(tolerance)
    if not 0 <= t <= 100:
        raise InvalidInput(f"slippage tolerance must be in [0, 100], got {tolerance}")
    return t


def minimum_out(quoted: int, tolerance: Tolerance) -> int:
    """floor(quoted * (100 - t) / 100); never above `quoted`."""
    quoted = require_amount("quoted", quoted)
    factor = (100 - _tolerance(tolerance)) / 100
    return quoted * factor.numerator // factor.denominator


def minimum_shares_out(quoted_shares: int, tolerance: Tolerance) -> int:
    return minimum_out(quoted_shares, tolerance)


def minimum_credits_out(quoted_credits: int, tolerance: Tolerance) -> int:
    return minimum_out(quoted_credits, tolerance)


def maximum_shares_in(shares_needed: int, tolerance: Tolerance) -> int:
    """Upper bound on shares spent when selling for a target payout."""
    shares_needed = require_amount("shares_needed", shares_needed)
    factor = (100 + _tolerance(tolerance)) / 100
    return shares_needed * factor.numerator // factor.denominator
