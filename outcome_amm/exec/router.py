"""Build slippage-bounded intents from quotes and route them to settlement."""

from __future__ import annotations

from typing import List, Optional, Union

from ..core.config import load_settings
from ..core.types import BuyQuote, SellQuote, TradeIntent, TradeResult, TradeSide
from ..core.utils import Tolerance
from ..settlement.base import Settlement


def intent_from_quote(
    market_id: str,
    quote: Union[BuyQuote, SellQuote],
    tolerance: Optional[Tolerance] = None,
) -> TradeIntent:
    if tolerance is None:
        tolerance = load_settings().default_slippage_pct
    bounded = quote.with_slippage(tolerance)
    if isinstance(quote, BuyQuote):
        return TradeIntent(
            market_id, TradeSide.BUY, quote.outcome, quote.amount_in, bounded.minimum_out
        )
    return TradeIntent(
        market_id, TradeSide.SELL, quote.outcome, quote.shares_in, bounded.minimum_out
    )


def route(settlement: Settlement, intents: List[TradeIntent]) -> List[TradeResult]:
    return settlement.submit_all(intents)
