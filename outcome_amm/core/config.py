"""Environment-backed settings.

Values come from the process environment (and a local .env file, if present).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from fractions import Fraction

from dotenv import load_dotenv

from .errors import InvalidInput
from .utils import to_fraction


@dataclass(frozen=True)
class Settings:
    protocol_fee_bps: int = 100  # 1%
    creator_fee_bps: int = 100  # 1%
    fee_denominator: int = 10_000
    solver_max_iterations: int = 136
    max_integer_bits: int = 512
    default_slippage_pct: Fraction = Fraction(2)
    max_price_impact_pct: Fraction = Fraction(5)
    log_level: str = "WARNING"


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidInput(f"{key} must be an integer, got {raw!r}") from exc


def _pct_env(key: str, default: Fraction) -> Fraction:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    return to_fraction(raw.strip())


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        protocol_fee_bps=_int_env("AMM_PROTOCOL_FEE_BPS", 100),
        creator_fee_bps=_int_env("AMM_CREATOR_FEE_BPS", 100),
        fee_denominator=_int_env("AMM_FEE_DENOMINATOR", 10_000),
        solver_max_iterations=_int_env("AMM_SOLVER_MAX_ITERATIONS", 136),
        max_integer_bits=_int_env("AMM_MAX_INTEGER_BITS", 512),
        default_slippage_pct=_pct_env("AMM_DEFAULT_SLIPPAGE_PCT", Fraction(2)),
        max_price_impact_pct=_pct_env("AMM_MAX_PRICE_IMPACT_PCT", Fraction(5)),
        log_level=(os.getenv("AMM_LOG_LEVEL") or "WARNING").upper(),
    )


def configure_logging(level: str | None = None) -> None:
    """Basic console logging for entry points; library code only creates loggers."""
    logging.basicConfig(
        level=level or load_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
