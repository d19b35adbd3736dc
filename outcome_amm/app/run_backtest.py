"""Entry point for a seeded simulation against the mock ledger."""

from __future__ import annotations

from .main import DEMO_MARKET, build_mock_environment
from ..backtest.engine import run_scenario
from ..backtest.scenarios import random_trades
from ..core.config import configure_logging
from ..core.types import MICRO
from ..pricing.invariant import implied_prices


def main():  # pragma: no cover - manual run
    configure_logging()
    store, settlement, model = build_mock_environment()
    reserves = store.reserves(DEMO_MARKET)
    scenario = random_trades(steps=50, num_outcomes=reserves.count, seed=42)
    book = run_scenario(store, settlement, model, DEMO_MARKET, scenario)
    final = store.reserves(DEMO_MARKET)
    print("Backtest done. Trades:", len(book.results))
    print("Spent:", book.spent / MICRO, "Received:", book.received / MICRO)
    print("Fees collected:", settlement.fees_collected / MICRO)
    print("Final prices:", [round(float(p), 4) for p in implied_prices(final)])


if __name__ == "__main__":  # pragma: no cover
    main()
