"""Sell-side root finding.

Selling S shares of outcome i burns C complete sets and must restore the
invariant:

    g(C) = (r_i + S - C) * prod_{j != i} (r_j - C) = k

Every factor is positive and strictly decreasing on [0, hi) where
hi = min(min_{j != i} r_j, r_i + S), so g is strictly decreasing there with
g(0) >= k and g(hi) <= 0 < k: exactly one real root exists. Both solvers
return its floor, i.e. the largest integer C with g(C) >= k, so the pool
keeps any fractional residue.
"""

from __future__ import annotations

import logging
from math import isqrt
from typing import Sequence

from ..core.errors import NonConvergence
from ..core.utils import product

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 136


def burn_product(reserves: Sequence[int], outcome: int, shares_in: int, c: int) -> int:
    """g(C): the invariant after returning `shares_in` and burning `c` complete sets."""
    return product(
        (r + shares_in - c) if idx == outcome else (r - c)
        for idx, r in enumerate(reserves, start=1)
    )


def bracket(reserves: Sequence[int], outcome: int, shares_in: int) -> int:
    """Upper end of the valid search bracket (exclusive for a positive root)."""
    others = min(r for idx, r in enumerate(reserves, start=1) if idx != outcome)
    return min(others, reserves[outcome - 1] + shares_in)


def solve_binary(reserves: Sequence[int], outcome: int, shares_in: int, k: int) -> int:
    """Closed form for two outcomes.

    With a = r_i + S and b = r_other, (a - C)(b - C) = k has the smaller root
    C = ((a + b) - sqrt((a - b)^2 + 4k)) / 2, floored exactly via isqrt.
    """
    a = reserves[outcome - 1] + shares_in
    b = reserves[2 - outcome]
    disc = (a - b) ** 2 + 4 * k
    s = isqrt(disc)
    if s * s == disc:
        return (a + b - s) // 2
    return (a + b - s - 1) // 2


def solve_bisect(
    reserves: Sequence[int],
    outcome: int,
    shares_in: int,
    k: int,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> int:
    """Integer bisection keeping g(lo) >= k > g(hi)."""
    lo, hi = 0, bracket(reserves, outcome, shares_in)
    for i in range(max_iterations):
        if hi - lo <= 1:
            logger.debug("bisection converged in %d iterations: C=%d", i, lo)
            return lo
        mid = (lo + hi) // 2
        if burn_product(reserves, outcome, shares_in, mid) >= k:
            lo = mid
        else:
            hi = mid
    if hi - lo <= 1:
        return lo
    raise NonConvergence(max_iterations, lo, hi)


def solve_collateral_out(
    reserves: Sequence[int],
    outcome: int,
    shares_in: int,
    k: int,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> int:
    """floor of the collateral C released for `shares_in` of `outcome`."""
    if shares_in == 0:
        return 0
    if len(reserves) == 2:
        c = solve_binary(reserves, outcome, shares_in, k)
    else:
        c = solve_bisect(reserves, outcome, shares_in, k, max_iterations)
    # g(c) >= k > g(c + 1) pins c to the floor of the real root
    if burn_product(reserves, outcome, shares_in, c) < k or (
        c + 1 < bracket(reserves, outcome, shares_in)
        and burn_product(reserves, outcome, shares_in, c + 1) >= k
    ):
        raise NonConvergence(max_iterations, c, c + 1)
    return c
