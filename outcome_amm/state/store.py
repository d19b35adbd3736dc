"""In-memory view of the markets the indexing layer has reported."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict

from ..core.errors import InvalidInput, MarketNotActive
from ..core.types import MarketRecord, ReserveState, TradeResult

logger = logging.getLogger(__name__)


@dataclass
class Store:
    markets: Dict[str, MarketRecord] = field(default_factory=dict)

    def upsert_market(self, m: MarketRecord):
        self.markets[m.market_id] = m

    def get(self, market_id: str) -> MarketRecord:
        try:
            return self.markets[market_id]
        except KeyError:
            raise InvalidInput(f"unknown market: {market_id}") from None

    def reserves(self, market_id: str) -> ReserveState:
        """Reserves of an open market, ready to quote against."""
        m = self.get(market_id)
        if not m.is_active:
            raise MarketNotActive(market_id, m.status.name)
        return m.reserves

    def apply_result(self, result: TradeResult):
        m = self.get(result.market_id)
        self.markets[m.market_id] = replace(m, reserves=result.reserves_after)
        logger.debug("refreshed %s reserves to %s", m.market_id, result.reserves_after.reserves)

    def archive(self, market_id: str) -> MarketRecord:
        m = self.get(market_id)
        del self.markets[market_id]
        logger.info("archived market %s", market_id)
        return m
