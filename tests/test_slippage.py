from decimal import Decimal
from fractions import Fraction

import pytest

from outcome_amm.core.errors import InvalidInput
from outcome_amm.risk.slippage import (
    maximum_shares_in,
    minimum_credits_out,
    minimum_out,
    minimum_shares_out,
)


def test_minimum_out_floors():
    assert minimum_out(1_000, 1) == 990
    assert minimum_shares_out(187_253, 2) == 183_507
    assert minimum_credits_out(47_775, 2) == 46_819


def test_fractional_tolerances():
    assert minimum_out(1_000, "0.5") == 995
    assert minimum_out(1_000, 0.5) == 995
    assert minimum_out(1_000, Decimal("2.5")) == 975
    assert minimum_out(1_000, Fraction(1, 3)) == 996
    # 0.1 is read as one tenth, not its binary approximation
    assert minimum_out(10_000, 0.1) == 9_990


def test_tolerance_bounds():
    assert minimum_out(12_345, 0) == 12_345
    assert minimum_out(12_345, 100) == 0
    for bad in (-1, 101, "abc", True, Decimal("Infinity"), Decimal("NaN"), float("inf")):
        with pytest.raises(InvalidInput):
            minimum_out(1_000, bad)


def test_minimum_never_exceeds_quote():
    for q in (0, 1, 7, 99, 1_000_001):
        for t in (0, 1, 2, 5, 50):
            assert minimum_out(q, t) <= q


def test_maximum_shares_in():
    assert maximum_shares_in(1_000, 2) == 1_020
    assert maximum_shares_in(99_999, 2) == 101_998
    assert maximum_shares_in(500, 0) == 500
