"""Backtesting engine: replay a scenario through quote -> intent -> settlement -> store."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from ..core.types import TradeResult, TradeSide
from ..core.utils import Tolerance
from ..exec.router import intent_from_quote, route
from ..pricing.base import PricingModel
from ..settlement.base import Settlement
from ..state.store import Store
from .scenarios import Step


@dataclass
class TraderBook:
    """What one simulated trader paid, received and still holds."""

    spent: int = 0
    received: int = 0
    shares: Dict[int, int] = field(default_factory=lambda: defaultdict(int))
    results: List[TradeResult] = field(default_factory=list)


def run_scenario(
    store: Store,
    settlement: Settlement,
    model: PricingModel,
    market_id: str,
    scenario: Iterable[Step],
    tolerance: Tolerance = 1,
) -> TraderBook:
    book = TraderBook()
    for side, outcome, size in scenario:
        reserves = store.reserves(market_id)
        if side == TradeSide.BUY:
            quote = model.quote_buy(reserves, outcome, size)
        else:
            shares = book.shares[outcome] * size // 10_000
            if shares == 0:
                continue
            quote = model.quote_sell(reserves, outcome, shares)
        for result in route(settlement, [intent_from_quote(market_id, quote, tolerance)]):
            store.apply_result(result)
            book.results.append(result)
            if side == TradeSide.BUY:
                book.spent += result.intent.amount
                book.shares[outcome] += result.amount_out
            else:
                book.received += result.amount_out
                book.shares[outcome] -= result.intent.amount
    return book
