"""Scenario generators."""

from __future__ import annotations

import random
from typing import Iterable, Tuple

from ..core.types import TradeSide

Step = Tuple[TradeSide, int, int]  # (side, outcome, size); sell size is bps of held shares


def random_trades(
    steps: int,
    num_outcomes: int = 2,
    max_amount: int = 50_000,
    sell_prob: float = 0.4,
    seed: int | None = None,
) -> Iterable[Step]:
    rng = random.Random(seed)
    for _ in range(steps):
        outcome = rng.randint(1, num_outcomes)
        if rng.random() < sell_prob:
            yield TradeSide.SELL, outcome, rng.randint(1, 10_000)
        else:
            yield TradeSide.BUY, outcome, rng.randint(1, max_amount)
