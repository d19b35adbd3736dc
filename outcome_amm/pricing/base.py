"""Pricing model abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from fractions import Fraction
from typing import List

from ..core.types import BuyQuote, ReserveState, SellQuote


class PricingModel(ABC):
    @abstractmethod
    def prices(self, state: ReserveState) -> List[Fraction]:
        """Return marginal prices for each outcome given the current reserves."""
        ...

    @abstractmethod
    def quote_buy(self, state: ReserveState, outcome: int, amount_in: int) -> BuyQuote: ...

    @abstractmethod
    def quote_sell(
        self, state: ReserveState, outcome: int, shares_in: int
    ) -> SellQuote: ...
