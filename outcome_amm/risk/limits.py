"""Trade limits checked before a quote is offered for submission."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Union

from ..core.config import Settings
from ..core.types import BuyQuote, SellQuote
from ..core.utils import percent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TradeLimits:
    max_price_impact: Fraction = Fraction(5)  # percent

    @classmethod
    def from_settings(cls, settings: Settings) -> "TradeLimits":
        return cls(max_price_impact=settings.max_price_impact_pct)

    def within_impact(self, quote: Union[BuyQuote, SellQuote]) -> bool:
        ok = abs(quote.price_impact) <= self.max_price_impact
        if not ok:
            logger.warning(
                "high price impact on outcome %d: %s (limit %s)",
                quote.outcome,
                percent(quote.price_impact),
                percent(self.max_price_impact),
            )
        return ok
