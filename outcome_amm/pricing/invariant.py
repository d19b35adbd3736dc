"""Reserve-state validation and the product-of-reserves invariant.

For reserves r_1..r_n the conserved quantity is k = r_1 * ... * r_n and the
implied (spot) price of outcome m is

    p_m = prod_{j != m} r_j / sum_l prod_{j != l} r_j

which sums to 1 across outcomes and falls as r_m grows.
"""

from __future__ import annotations

from fractions import Fraction
from typing import List

from ..core.errors import InvalidInput, InvalidReserves, NumericOverflow
from ..core.types import ReserveState
from ..core.utils import U128_MAX, check_width, product

MIN_OUTCOMES = 2
MAX_OUTCOMES = 4
DEFAULT_MAX_BITS = 512


def validate(state: ReserveState) -> ReserveState:
    if not MIN_OUTCOMES <= state.count <= MAX_OUTCOMES:
        raise InvalidReserves(
            f"outcome count must be in [{MIN_OUTCOMES}, {MAX_OUTCOMES}], got {state.count}"
        )
    for idx, r in enumerate(state.reserves, start=1):
        if not isinstance(r, int) or isinstance(r, bool):
            raise InvalidReserves(f"reserve {idx} must be an int, got {r!r}")
        if r <= 0:
            raise InvalidReserves(f"reserve {idx} must be positive, got {r}")
        if r > U128_MAX:
            raise NumericOverflow(f"reserve {idx} exceeds the u128 domain: {r}")
    return state


def validate_outcome(state: ReserveState, outcome: int) -> int:
    if not isinstance(outcome, int) or isinstance(outcome, bool):
        raise InvalidInput(f"outcome must be an int, got {outcome!r}")
    if not 1 <= outcome <= state.count:
        raise InvalidInput(f"outcome must be in [1, {state.count}], got {outcome}")
    return outcome


def invariant(state: ReserveState, max_bits: int = DEFAULT_MAX_BITS) -> int:
    return check_width("invariant", product(state.reserves), max_bits)


def others_product(reserves, outcome: int) -> int:
    """Product of every reserve except the given (1-based) outcome's."""
    return product(r for idx, r in enumerate(reserves, start=1) if idx != outcome)


def implied_prices(state: ReserveState) -> List[Fraction]:
    validate(state)
    weights = [others_product(state.reserves, m) for m in range(1, state.count + 1)]
    total = sum(weights)
    return [Fraction(w, total) for w in weights]


def spot_price(state: ReserveState, outcome: int) -> Fraction:
    validate_outcome(state, outcome)
    return implied_prices(state)[outcome - 1]
