"""Typed failures raised by the pricing engine and its collaborators.

Error code ranges:
  1xxx: input validation
  2xxx: liquidity
  3xxx: numeric domain
  4xxx: settlement
"""

from __future__ import annotations


class AMMError(Exception):
    """Base error for everything raised by outcome_amm."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


# --- 1xxx: input validation ---


class InvalidInput(AMMError, ValueError):
    def __init__(self, message: str, code: int = 1001) -> None:
        super().__init__(code, message)


class InvalidReserves(InvalidInput):
    def __init__(self, message: str) -> None:
        super().__init__(message, code=1002)


class MarketNotActive(InvalidInput):
    def __init__(self, market_id: str, status: object) -> None:
        super().__init__(f"Market is not active: {market_id} ({status})", code=1003)
        self.market_id = market_id


# --- 2xxx: liquidity ---


class InsufficientLiquidity(AMMError):
    def __init__(self, message: str) -> None:
        super().__init__(2001, message)


# --- 3xxx: numeric domain ---


class NumericOverflow(AMMError, OverflowError):
    def __init__(self, message: str) -> None:
        super().__init__(3001, message)


class NonConvergence(AMMError, ArithmeticError):
    def __init__(self, iterations: int, lo: int, hi: int) -> None:
        super().__init__(
            3002,
            f"Root search did not converge after {iterations} iterations "
            f"(bracket [{lo}, {hi}])",
        )
        self.iterations = iterations


# --- 4xxx: settlement ---


class SlippageExceeded(AMMError):
    def __init__(self, executed: int, minimum_out: int) -> None:
        super().__init__(
            4001, f"Executed output {executed} is below minimum {minimum_out}"
        )
        self.executed = executed
        self.minimum_out = minimum_out
