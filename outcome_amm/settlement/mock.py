"""In-memory ledger for simulation and tests.

Executes intents with the same integer engine the quotes use, enforces each
intent's minimum output, and keeps the post-trade reserves as its state.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Dict, Iterable, Optional

from .base import Settlement
from ..core.errors import InvalidInput, MarketNotActive, SlippageExceeded
from ..core.types import (
    MarketRecord,
    MarketStatus,
    ReserveState,
    TradeIntent,
    TradeResult,
    TradeSide,
)
from ..pricing.cpmm import FixedProductMarketMaker, default_model

logger = logging.getLogger(__name__)


class MockSettlement(Settlement):
    def __init__(
        self, name: str = "mock", model: Optional[FixedProductMarketMaker] = None
    ):
        super().__init__(name)
        self.model = model or default_model()
        self._markets: Dict[str, MarketRecord] = {}
        self.fees_collected: int = 0

    def open_market(self, market_id: str, reserves: ReserveState) -> MarketRecord:
        record = MarketRecord(market_id=market_id, reserves=reserves)
        self._markets[market_id] = record
        logger.info("opened market %s with reserves %s", market_id, reserves.reserves)
        return record

    def set_status(self, market_id: str, status: MarketStatus) -> MarketRecord:
        record = replace(self.get_market(market_id), status=status)
        self._markets[market_id] = record
        return record

    def list_markets(self) -> Iterable[MarketRecord]:
        return list(self._markets.values())

    def get_market(self, market_id: str) -> MarketRecord:
        try:
            return self._markets[market_id]
        except KeyError:
            raise InvalidInput(f"unknown market: {market_id}") from None

    def submit(self, intent: TradeIntent) -> TradeResult:
        record = self.get_market(intent.market_id)
        if not record.is_active:
            raise MarketNotActive(record.market_id, record.status.name)
        if intent.side == TradeSide.BUY:
            q = self.model.quote_buy(record.reserves, intent.outcome, intent.amount)
            amount_out = q.shares_out
        else:
            q = self.model.quote_sell(record.reserves, intent.outcome, intent.amount)
            amount_out = q.credits_out
        if amount_out < intent.minimum_out:
            raise SlippageExceeded(amount_out, intent.minimum_out)

        self._markets[record.market_id] = replace(record, reserves=q.reserves_after)
        self.fees_collected += q.fee
        result = TradeResult(
            intent=intent,
            amount_out=amount_out,
            fee=q.fee,
            reserves_after=q.reserves_after,
            ts=time.time(),
        )
        logger.info(
            "confirmed %s %s outcome=%d amount=%d out=%d fee=%d",
            intent.market_id,
            intent.side.value,
            intent.outcome,
            intent.amount,
            amount_out,
            q.fee,
        )
        return result
