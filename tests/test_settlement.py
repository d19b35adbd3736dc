import pytest

from outcome_amm.app.main import DEMO_MARKET, build_mock_environment
from outcome_amm.backtest.engine import run_scenario
from outcome_amm.backtest.scenarios import random_trades
from outcome_amm.core.errors import InvalidInput, MarketNotActive, SlippageExceeded
from outcome_amm.core.types import MarketStatus, ReserveState, TradeIntent, TradeSide
from outcome_amm.exec.router import intent_from_quote, route
from outcome_amm.pricing.invariant import invariant
from outcome_amm.risk.limits import TradeLimits
from outcome_amm.settlement.mock import MockSettlement
from outcome_amm.state.store import Store


def test_quote_matches_confirmed_result():
    store, settlement, model = build_mock_environment()
    reserves = store.reserves(DEMO_MARKET)
    quote = model.quote_buy(reserves, 2, 100_000)
    intent = intent_from_quote(DEMO_MARKET, quote, 1)
    assert intent.side == TradeSide.BUY
    assert intent.minimum_out == quote.shares_out * 99 // 100

    [result] = route(settlement, [intent])
    assert result.amount_out == quote.shares_out
    assert result.fee == quote.fee
    assert result.reserves_after == quote.reserves_after

    store.apply_result(result)
    assert store.reserves(DEMO_MARKET) == quote.reserves_after
    assert settlement.get_market(DEMO_MARKET).reserves == quote.reserves_after


def test_sell_intent_round_trip():
    store, settlement, model = build_mock_environment()
    buy = model.quote_buy(store.reserves(DEMO_MARKET), 1, 200_000)
    store.apply_result(settlement.submit(intent_from_quote(DEMO_MARKET, buy, 2)))
    sell = model.quote_sell(store.reserves(DEMO_MARKET), 1, buy.shares_out)
    intent = intent_from_quote(DEMO_MARKET, sell, 2)
    assert intent.side == TradeSide.SELL
    assert intent.amount == buy.shares_out
    result = settlement.submit(intent)
    assert result.amount_out == sell.credits_out
    assert result.amount_out <= 200_000
    assert settlement.fees_collected == buy.fee + sell.fee


def test_stale_quote_hits_slippage_bound():
    store, settlement, model = build_mock_environment()
    stale = model.quote_buy(store.reserves(DEMO_MARKET), 1, 300_000)
    # someone else buys first
    settlement.submit(TradeIntent(DEMO_MARKET, TradeSide.BUY, 1, 300_000))
    with pytest.raises(SlippageExceeded):
        settlement.submit(intent_from_quote(DEMO_MARKET, stale, 0))


def test_closed_market_rejects_trades():
    settlement = MockSettlement()
    settlement.open_market("M", ReserveState((1_000, 1_000)))
    settlement.set_status("M", MarketStatus.CLOSED)
    with pytest.raises(MarketNotActive):
        settlement.submit(TradeIntent("M", TradeSide.BUY, 1, 10))


def test_store_lifecycle():
    settlement = MockSettlement()
    store = Store()
    store.upsert_market(settlement.open_market("M", ReserveState((5_000, 5_000, 5_000))))
    assert store.reserves("M").count == 3
    store.upsert_market(settlement.set_status("M", MarketStatus.RESOLVED))
    with pytest.raises(MarketNotActive):
        store.reserves("M")
    store.archive("M")
    with pytest.raises(InvalidInput):
        store.get("M")
    with pytest.raises(InvalidInput):
        settlement.get_market("missing")


def test_trade_limits_flag_high_impact():
    store, _, model = build_mock_environment()
    limits = TradeLimits()
    reserves = store.reserves(DEMO_MARKET)
    assert limits.within_impact(model.quote_buy(reserves, 1, 1_000))
    assert not limits.within_impact(model.quote_buy(reserves, 1, 1_000_000))


def test_backtest_never_shrinks_invariant():
    store, settlement, model = build_mock_environment()
    start = store.reserves(DEMO_MARKET)
    book = run_scenario(
        store, settlement, model, DEMO_MARKET, random_trades(60, num_outcomes=3, seed=7)
    )
    end = store.reserves(DEMO_MARKET)
    assert book.results
    assert invariant(end) >= invariant(start)
    assert all(v >= 0 for v in book.shares.values())
    assert settlement.fees_collected > 0
    assert end == settlement.get_market(DEMO_MARKET).reserves


def test_default_slippage_from_settings(monkeypatch):
    monkeypatch.setenv("AMM_DEFAULT_SLIPPAGE_PCT", "5")
    store, _, model = build_mock_environment()
    quote = model.quote_sell(store.reserves(DEMO_MARKET), 3, 40_000)
    intent = intent_from_quote(DEMO_MARKET, quote)
    assert intent.minimum_out == quote.credits_out * 95 // 100
