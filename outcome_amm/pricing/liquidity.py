"""LP share accounting for liquidity deposits and withdrawals."""

from __future__ import annotations

from ..core.errors import InsufficientLiquidity
from ..core.utils import require_amount


def lp_shares_out(amount: int, total_lp_shares: int, total_liquidity: int) -> int:
    """LP shares minted for depositing `amount`; the first deposit mints 1:1."""
    amount = require_amount("amount", amount)
    total_lp_shares = require_amount("total_lp_shares", total_lp_shares)
    total_liquidity = require_amount("total_liquidity", total_liquidity)
    if total_lp_shares == 0 or total_liquidity == 0:
        return amount
    return amount * total_lp_shares // total_liquidity


def lp_tokens_out(lp_shares: int, total_lp_shares: int, total_liquidity: int) -> int:
    """Collateral returned for burning `lp_shares`, floored in the pool's favour."""
    lp_shares = require_amount("lp_shares", lp_shares)
    total_lp_shares = require_amount("total_lp_shares", total_lp_shares)
    total_liquidity = require_amount("total_liquidity", total_liquidity)
    if lp_shares > total_lp_shares:
        raise InsufficientLiquidity(
            f"cannot burn {lp_shares} LP shares, only {total_lp_shares} outstanding"
        )
    if total_lp_shares == 0:
        return 0
    return lp_shares * total_liquidity // total_lp_shares
