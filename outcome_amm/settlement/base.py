"""Settlement layer abstraction.

The settlement layer owns the authoritative reserves; it receives
(outcome, amount, minimum_out) intents and reports ledger-confirmed results.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List

from ..core.types import MarketRecord, TradeIntent, TradeResult


class Settlement(ABC):
    name: str

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def list_markets(self) -> Iterable[MarketRecord]: ...

    @abstractmethod
    def get_market(self, market_id: str) -> MarketRecord: ...

    @abstractmethod
    def submit(self, intent: TradeIntent) -> TradeResult: ...

    def submit_all(self, intents: List[TradeIntent]) -> List[TradeResult]:
        return [self.submit(i) for i in intents]
