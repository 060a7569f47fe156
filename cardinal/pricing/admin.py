"""
Admin pricing configuration.

A single static AdminConfig is built on first use and shared by every
request handler. There is no write path: changing rates means changing
the defaults below or the CARDINAL_ADMIN_MULTIPLIER environment variable
and restarting the process.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Mapping

from cardinal.observability.logging import get_logger
from cardinal.pricing.models import Complexity, JobType

logger = get_logger(__name__)

# Dollars per square foot
DEFAULT_BASE_RATES: dict[str, float] = {
    JobType.MOWING.value: 0.03,
    JobType.MULCH.value: 0.12,
    JobType.CLEANUP.value: 0.09,
    JobType.EDGING.value: 0.05,
    JobType.HEDGE.value: 0.07,
    JobType.AERATION.value: 0.04,
    JobType.SOD.value: 1.10,
}

DEFAULT_COMPLEXITY_MULTIPLIERS: dict[str, float] = {
    Complexity.EASY.value: 0.9,
    Complexity.NORMAL.value: 1.0,
    Complexity.HARD.value: 1.25,
    Complexity.EXTREME.value: 1.5,
}

DEFAULT_ADMIN_MULTIPLIER = 1.10
DEFAULT_RISK_DIVISOR = 200.0
DEFAULT_BAND_LOW_PCT = 0.12
DEFAULT_BAND_HIGH_PCT = 0.18
DEFAULT_UPSELL_SHARE = 0.25


@dataclass(frozen=True)
class AdminConfig:
    """Rates and multipliers the price pipeline reads."""

    base_rates: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_BASE_RATES))
    )
    complexity_multipliers: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_COMPLEXITY_MULTIPLIERS))
    )
    admin_multiplier: float = DEFAULT_ADMIN_MULTIPLIER
    risk_divisor: float = DEFAULT_RISK_DIVISOR
    band_low_pct: float = DEFAULT_BAND_LOW_PCT
    band_high_pct: float = DEFAULT_BAND_HIGH_PCT
    upsell_share: float = DEFAULT_UPSELL_SHARE

    def __post_init__(self) -> None:
        if self.admin_multiplier <= 0:
            raise ValueError(f"admin_multiplier must be positive, got {self.admin_multiplier}")
        if self.risk_divisor <= 0:
            raise ValueError(f"risk_divisor must be positive, got {self.risk_divisor}")
        if not 0 <= self.band_low_pct < 1:
            raise ValueError(f"band_low_pct must be in [0, 1), got {self.band_low_pct}")
        if self.band_high_pct < 0:
            raise ValueError(f"band_high_pct must be non-negative, got {self.band_high_pct}")
        for name, rate in self.base_rates.items():
            if rate < 0:
                raise ValueError(f"Base rate for {name!r} must be non-negative")

    @property
    def job_types(self) -> list[str]:
        return sorted(self.base_rates)

    @property
    def complexities(self) -> list[str]:
        return list(self.complexity_multipliers)

    def to_dict(self) -> dict[str, Any]:
        return {
            "baseRates": dict(self.base_rates),
            "complexityMultipliers": dict(self.complexity_multipliers),
            "adminMultiplier": self.admin_multiplier,
            "riskDivisor": self.risk_divisor,
            "bandLowPct": self.band_low_pct,
            "bandHighPct": self.band_high_pct,
            "upsellShare": self.upsell_share,
        }


def _admin_multiplier_from_env() -> float:
    raw = os.getenv("CARDINAL_ADMIN_MULTIPLIER")
    if not raw:
        return DEFAULT_ADMIN_MULTIPLIER
    try:
        return float(raw)
    except ValueError:
        logger.warning(
            "Ignoring invalid CARDINAL_ADMIN_MULTIPLIER=%r, using %.2f",
            raw,
            DEFAULT_ADMIN_MULTIPLIER,
        )
        return DEFAULT_ADMIN_MULTIPLIER


@lru_cache(maxsize=1)
def get_admin_config() -> AdminConfig:
    """Return the process-wide admin config."""
    config = AdminConfig(admin_multiplier=_admin_multiplier_from_env())
    logger.info(
        "Loaded admin pricing config: %d job types, admin multiplier %.2f",
        len(config.base_rates),
        config.admin_multiplier,
    )
    return config


def clear_admin_config_cache() -> None:
    """Drop the cached config so the next call re-reads the environment."""
    get_admin_config.cache_clear()
