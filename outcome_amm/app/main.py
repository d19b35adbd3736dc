"""App bootstrap for simulation runs."""

from __future__ import annotations

from ..core.types import ReserveState
from ..pricing.cpmm import FixedProductMarketMaker, default_model
from ..settlement.mock import MockSettlement
from ..state.store import Store

DEMO_MARKET = "ELECTION_2026"


def build_mock_environment(
    reserves: ReserveState = ReserveState((1_000_000, 1_000_000, 1_000_000)),
) -> tuple[Store, MockSettlement, FixedProductMarketMaker]:
    model = default_model()
    store = Store()
    settlement = MockSettlement(model=model)
    store.upsert_market(settlement.open_market(DEMO_MARKET, reserves))
    return store, settlement, model
