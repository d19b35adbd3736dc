"""Fee model: flat protocol + creator rate, always floored.

Remainders below one micro-unit are never charged; on a buy they stay with
the pool as part of the net deposit, on a sell they stay in the payout.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.errors import InvalidInput
from ..core.types import FeeBreakdown
from ..core.utils import require_amount

BPS_DENOM = 10_000


@dataclass(frozen=True)
class FeeSchedule:
    protocol_fee_bps: int = 100
    creator_fee_bps: int = 100
    denominator: int = BPS_DENOM

    def __post_init__(self):
        for name, v in (
            ("protocol_fee_bps", self.protocol_fee_bps),
            ("creator_fee_bps", self.creator_fee_bps),
        ):
            if not isinstance(v, int) or isinstance(v, bool) or v < 0:
                raise InvalidInput(f"{name} must be a non-negative int, got {v!r}")
        if not isinstance(self.denominator, int) or self.denominator <= 0:
            raise InvalidInput(f"denominator must be a positive int, got {self.denominator!r}")
        if self.total_bps >= self.denominator:
            raise InvalidInput(
                f"total fee {self.total_bps} must be below denominator {self.denominator}"
            )

    @property
    def total_bps(self) -> int:
        return self.protocol_fee_bps + self.creator_fee_bps

    def fee(self, amount: int) -> int:
        amount = require_amount("amount", amount)
        return (amount * self.total_bps) // self.denominator

    def breakdown(self, amount: int) -> FeeBreakdown:
        total = self.fee(amount)
        protocol = (amount * self.protocol_fee_bps) // self.denominator
        return FeeBreakdown(protocol_fee=protocol, creator_fee=total - protocol)


DEFAULT_FEES = FeeSchedule()


def estimate_fee(amount: int, schedule: FeeSchedule = DEFAULT_FEES) -> int:
    """Total fee charged on `amount` (2% by default)."""
    return schedule.fee(amount)
