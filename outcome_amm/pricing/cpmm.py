"""Fixed-product market maker (FPMM) over 2-4 outcomes.

Buying deposits collateral, mints one share of every outcome per unit, and
hands the trader enough shares of the chosen outcome to bring the product of
reserves back to k. Selling is the inverse: the trader returns shares, the pool
burns complete sets and pays out their collateral. All arithmetic is integer;
the ledger contract is the authority and these quotes predict it.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from functools import lru_cache
from typing import List, Optional

from .base import PricingModel
from .fees import DEFAULT_FEES, FeeSchedule
from .fees import estimate_fee as fees_estimate_fee
from .impact import price_impact
from .invariant import (
    DEFAULT_MAX_BITS,
    implied_prices,
    invariant,
    others_product,
    validate,
    validate_outcome,
)
from .solver import DEFAULT_MAX_ITERATIONS, solve_collateral_out
from ..core.config import Settings, load_settings
from ..core.errors import InsufficientLiquidity
from ..core.types import BuyQuote, FeeBreakdown, ReserveState, SellQuote
from ..core.utils import ceil_div, check_width, product, require_amount

logger = logging.getLogger(__name__)


class FixedProductMarketMaker(PricingModel):
    def __init__(
        self,
        fees: FeeSchedule = DEFAULT_FEES,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        max_bits: int = DEFAULT_MAX_BITS,
    ):
        self.fees = fees
        self.max_iterations = max_iterations
        self.max_bits = max_bits

    @classmethod
    def from_settings(cls, settings: Settings) -> "FixedProductMarketMaker":
        return cls(
            fees=FeeSchedule(
                protocol_fee_bps=settings.protocol_fee_bps,
                creator_fee_bps=settings.creator_fee_bps,
                denominator=settings.fee_denominator,
            ),
            max_iterations=settings.solver_max_iterations,
            max_bits=settings.max_integer_bits,
        )

    def prices(self, state: ReserveState) -> List[Fraction]:
        return implied_prices(state)

    def quote_buy(self, state: ReserveState, outcome: int, amount_in: int) -> BuyQuote:
        validate(state)
        validate_outcome(state, outcome)
        amount_in = require_amount("amount_in", amount_in)
        spot = self.prices(state)[outcome - 1]
        if amount_in == 0:
            return BuyQuote(
                outcome=outcome,
                amount_in=0,
                net_amount=0,
                shares_out=0,
                fees=FeeBreakdown(),
                average_price=None,
                spot_price=spot,
                price_impact=Fraction(0),
                reserves_after=state,
            )

        fees = self.fees.breakdown(amount_in)
        net = amount_in - fees.total
        k = invariant(state, self.max_bits)
        minted = [r + net for r in state.reserves]
        # round the bought outcome's reserve up so the pool keeps the residue
        others = check_width("others", others_product(minted, outcome), self.max_bits)
        new_reserve = ceil_div(k, others)
        shares_out = minted[outcome - 1] - new_reserve
        if shares_out <= 0 or shares_out >= minted[outcome - 1]:
            raise InsufficientLiquidity(
                f"buy of {amount_in} on outcome {outcome} yields {shares_out} shares"
            )
        minted[outcome - 1] = new_reserve
        average = Fraction(net, shares_out)
        quote = BuyQuote(
            outcome=outcome,
            amount_in=amount_in,
            net_amount=net,
            shares_out=shares_out,
            fees=fees,
            average_price=average,
            spot_price=spot,
            price_impact=price_impact(average, spot),
            reserves_after=state.with_reserves(minted),
        )
        logger.debug(
            "buy quote outcome=%d in=%d net=%d shares=%d fee=%d",
            outcome,
            amount_in,
            net,
            shares_out,
            quote.fee,
        )
        return quote

    def max_credits(self, state: ReserveState, outcome: int, shares_in: int) -> int:
        """Gross collateral (before fee) released by selling `shares_in`."""
        validate(state)
        validate_outcome(state, outcome)
        shares_in = require_amount("shares_in", shares_in)
        k = invariant(state, self.max_bits)
        check_width(
            "sell product",
            (state.reserve(outcome) + shares_in) * others_product(state.reserves, outcome),
            self.max_bits,
        )
        c = solve_collateral_out(
            state.reserves, outcome, shares_in, k, self.max_iterations
        )
        if any(r - c <= 0 for idx, r in enumerate(state.reserves, start=1) if idx != outcome):
            raise InsufficientLiquidity(
                f"sell of {shares_in} shares on outcome {outcome} would drain the pool"
            )
        return c

    def quote_sell(self, state: ReserveState, outcome: int, shares_in: int) -> SellQuote:
        gross = self.max_credits(state, outcome, shares_in)
        spot = self.prices(state)[outcome - 1]
        if shares_in == 0:
            return SellQuote(
                outcome=outcome,
                shares_in=0,
                gross_out=0,
                credits_out=0,
                fees=FeeBreakdown(),
                average_price=None,
                spot_price=spot,
                price_impact=Fraction(0),
                reserves_after=state,
            )

        fees = self.fees.breakdown(gross)
        after = [
            (r + shares_in - gross) if idx == outcome else (r - gross)
            for idx, r in enumerate(state.reserves, start=1)
        ]
        average = Fraction(gross, shares_in)
        quote = SellQuote(
            outcome=outcome,
            shares_in=shares_in,
            gross_out=gross,
            credits_out=gross - fees.total,
            fees=fees,
            average_price=average,
            spot_price=spot,
            price_impact=price_impact(average, spot),
            reserves_after=state.with_reserves(after),
        )
        logger.debug(
            "sell quote outcome=%d shares=%d gross=%d credits=%d fee=%d",
            outcome,
            shares_in,
            gross,
            quote.credits_out,
            quote.fee,
        )
        return quote

    def shares_needed(self, state: ReserveState, outcome: int, credits: int) -> int:
        """Shares of `outcome` to sell so the pool releases `credits` (gross, before fee)."""
        validate(state)
        validate_outcome(state, outcome)
        credits = require_amount("credits", credits)
        if credits == 0:
            return 0
        burned = [r - credits for idx, r in enumerate(state.reserves, start=1) if idx != outcome]
        if min(burned) <= 0:
            raise InsufficientLiquidity(
                f"cannot release {credits} from reserves {state.reserves}"
            )
        k = invariant(state, self.max_bits)
        # S = k / prod_{j!=i}(r_j - C) - r_i + C, rounded up against the trader
        return ceil_div(k, product(burned)) - state.reserve(outcome) + credits

    def buy_price_impact(self, state: ReserveState, outcome: int, amount_in: int) -> Fraction:
        return self.quote_buy(state, outcome, amount_in).price_impact

    def sell_price_impact(self, state: ReserveState, outcome: int, shares_in: int) -> Fraction:
        return self.quote_sell(state, outcome, shares_in).price_impact


@lru_cache(maxsize=1)
def default_model() -> FixedProductMarketMaker:
    return FixedProductMarketMaker.from_settings(load_settings())


def quote_buy(reserves: ReserveState, outcome: int, amount_in: int) -> BuyQuote:
    return default_model().quote_buy(reserves, outcome, amount_in)


def quote_sell(reserves: ReserveState, outcome: int, shares_in: int) -> SellQuote:
    return default_model().quote_sell(reserves, outcome, shares_in)


def buy_price_impact(reserves: ReserveState, outcome: int, amount_in: int) -> Fraction:
    return default_model().buy_price_impact(reserves, outcome, amount_in)


def sell_price_impact(reserves: ReserveState, outcome: int, shares_in: int) -> Fraction:
    return default_model().sell_price_impact(reserves, outcome, shares_in)


def shares_needed(reserves: ReserveState, outcome: int, credits: int) -> int:
    return default_model().shares_needed(reserves, outcome, credits)


def estimate_fee(amount: int, model: Optional[FixedProductMarketMaker] = None) -> int:
    """Fee under the configured schedule; see `fees.estimate_fee`."""
    return fees_estimate_fee(amount, (model or default_model()).fees)
