"""Price impact: how far a trade's average price sits from the pre-trade spot price."""

from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING, Optional

from ..core.errors import InvalidInput
from ..core.types import ReserveState
from ..core.utils import Tolerance, to_fraction

if TYPE_CHECKING:
    from .base import PricingModel

DEPTH_MAX_ITERATIONS = 136


def price_impact(average_price: Optional[Fraction], spot: Fraction) -> Fraction:
    """Signed percent: positive when paying above spot, negative when selling below it."""
    if average_price is None:
        return Fraction(0)
    return (average_price - spot) / spot * 100


def liquidity_depth(
    model: "PricingModel",
    state: ReserveState,
    outcome: int,
    max_impact: Tolerance,
    max_iterations: int = DEPTH_MAX_ITERATIONS,
) -> int:
    """Largest buy amount whose price impact stays within `max_impact` percent.

    Impact grows with trade size, so a bisection over [0, sum(reserves)] finds
    the boundary.
    """
    limit = to_fraction(max_impact)
    if limit < 0:
        raise InvalidInput(f"max_impact must be non-negative, got {max_impact}")
    lo, hi = 0, sum(state.reserves)
    if model.quote_buy(state, outcome, hi).price_impact <= limit:
        return hi
    for _ in range(max_iterations):
        if hi - lo <= 1:
            break
        mid = (lo + hi) // 2
        if model.quote_buy(state, outcome, mid).price_impact <= limit:
            lo = mid
        else:
            hi = mid
    return lo
