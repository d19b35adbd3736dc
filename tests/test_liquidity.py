import pytest

from outcome_amm.core.errors import InsufficientLiquidity, InvalidInput
from outcome_amm.pricing.liquidity import lp_shares_out, lp_tokens_out


def test_first_deposit_mints_one_to_one():
    assert lp_shares_out(1_000_000, 0, 0) == 1_000_000


def test_proportional_deposit():
    assert lp_shares_out(500, 1_000, 2_000) == 250
    assert lp_shares_out(3, 1_000, 2_000) == 1


def test_withdrawal():
    assert lp_tokens_out(250, 1_000, 2_000) == 500
    assert lp_tokens_out(1, 3, 2) == 0
    assert lp_tokens_out(0, 0, 0) == 0


def test_cannot_burn_more_than_supply():
    with pytest.raises(InsufficientLiquidity):
        lp_tokens_out(1_001, 1_000, 2_000)


def test_negative_inputs():
    with pytest.raises(InvalidInput):
        lp_shares_out(-1, 10, 10)
