from fractions import Fraction

import pytest

from outcome_amm.core.config import Settings, load_settings
from outcome_amm.core.errors import InvalidInput
from outcome_amm.pricing.cpmm import FixedProductMarketMaker
from outcome_amm.risk.limits import TradeLimits


def test_defaults(monkeypatch):
    for key in (
        "AMM_PROTOCOL_FEE_BPS",
        "AMM_CREATOR_FEE_BPS",
        "AMM_FEE_DENOMINATOR",
        "AMM_SOLVER_MAX_ITERATIONS",
        "AMM_MAX_INTEGER_BITS",
        "AMM_DEFAULT_SLIPPAGE_PCT",
        "AMM_MAX_PRICE_IMPACT_PCT",
        "AMM_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    assert load_settings() == Settings()


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("AMM_PROTOCOL_FEE_BPS", "50")
    monkeypatch.setenv("AMM_CREATOR_FEE_BPS", "25")
    monkeypatch.setenv("AMM_MAX_PRICE_IMPACT_PCT", "2.5")
    monkeypatch.setenv("AMM_LOG_LEVEL", "debug")
    s = load_settings()
    assert s.protocol_fee_bps == 50
    assert s.max_price_impact_pct == Fraction(5, 2)
    assert s.log_level == "DEBUG"

    model = FixedProductMarketMaker.from_settings(s)
    assert model.fees.fee(100_000) == 750
    assert TradeLimits.from_settings(s).max_price_impact == Fraction(5, 2)


def test_malformed_env(monkeypatch):
    monkeypatch.setenv("AMM_SOLVER_MAX_ITERATIONS", "lots")
    with pytest.raises(InvalidInput):
        load_settings()
