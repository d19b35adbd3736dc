"""Core type definitions for the outcome AMM.

Amounts are integers in micro-units (1 unit = 10^-6 of the collateral).
Prices are exact Fractions; convert to float only for display.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from fractions import Fraction
from typing import Optional, Sequence, Tuple

from .errors import InvalidReserves

MICRO = 1_000_000  # micro-units per collateral unit


class MarketStatus(IntEnum):
    ACTIVE = 1
    CLOSED = 2
    RESOLVED = 3
    CANCELLED = 4


class TradeSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class ReserveState:
    """Per-outcome reserves of one market, in outcome order (outcome 1 first)."""

    reserves: Tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, "reserves", tuple(self.reserves))

    @property
    def count(self) -> int:
        return len(self.reserves)

    def reserve(self, outcome: int) -> int:
        return self.reserves[outcome - 1]

    def with_reserves(self, reserves: Sequence[int]) -> "ReserveState":
        return ReserveState(tuple(reserves))

    @classmethod
    def from_slots(
        cls,
        reserve_1: int,
        reserve_2: int,
        reserve_3: int = 0,
        reserve_4: int = 0,
        num_outcomes: int = 2,
    ) -> "ReserveState":
        """Build from the ledger's fixed four-slot layout; unused slots are ignored."""
        if not 2 <= num_outcomes <= 4:
            raise InvalidReserves(f"outcome count must be in [2, 4], got {num_outcomes}")
        slots = (reserve_1, reserve_2, reserve_3, reserve_4)
        return cls(slots[:num_outcomes])


@dataclass(frozen=True)
class MarketRecord:
    market_id: str
    reserves: ReserveState
    status: MarketStatus = MarketStatus.ACTIVE
    total_lp_shares: int = 0
    total_liquidity: int = 0

    @property
    def is_active(self) -> bool:
        return self.status == MarketStatus.ACTIVE


@dataclass(frozen=True)
class FeeBreakdown:
    protocol_fee: int = 0
    creator_fee: int = 0

    @property
    def total(self) -> int:
        return self.protocol_fee + self.creator_fee


@dataclass(frozen=True)
class BuyQuote:
    outcome: int
    amount_in: int
    net_amount: int
    shares_out: int
    fees: FeeBreakdown
    average_price: Optional[Fraction]
    spot_price: Fraction
    price_impact: Fraction
    reserves_after: ReserveState
    minimum_out: Optional[int] = None

    @property
    def fee(self) -> int:
        return self.fees.total

    def with_slippage(self, tolerance) -> "BuyQuote":
        from ..risk.slippage import minimum_shares_out

        return replace(self, minimum_out=minimum_shares_out(self.shares_out, tolerance))


@dataclass(frozen=True)
class SellQuote:
    outcome: int
    shares_in: int
    gross_out: int  # collateral released before fee
    credits_out: int
    fees: FeeBreakdown
    average_price: Optional[Fraction]
    spot_price: Fraction
    price_impact: Fraction
    reserves_after: ReserveState
    minimum_out: Optional[int] = None

    @property
    def fee(self) -> int:
        return self.fees.total

    def with_slippage(self, tolerance) -> "SellQuote":
        from ..risk.slippage import minimum_credits_out

        return replace(
            self, minimum_out=minimum_credits_out(self.credits_out, tolerance)
        )


@dataclass(frozen=True)
class TradeIntent:
    """What the settlement layer receives: (outcome, amount, minimumOut)."""

    market_id: str
    side: TradeSide
    outcome: int
    amount: int
    minimum_out: int = 0


@dataclass(frozen=True)
class TradeResult:
    """Ledger-confirmed trade; the only authoritative record of a fill."""

    intent: TradeIntent
    amount_out: int
    fee: int
    reserves_after: ReserveState
    ts: float = field(default=0.0, compare=False)

    @property
    def market_id(self) -> str:
        return self.intent.market_id
