"""
Closed-form price pipeline.

    core = sqft x base rate x complexity x risk x admin

The target is core rounded to the nearest 5; low and high apply the admin
band offsets to core before rounding, so low <= target <= high always holds.
"""

from __future__ import annotations

import math

from cardinal.pricing.admin import AdminConfig, get_admin_config
from cardinal.pricing.models import (
    Complexity,
    PriceBand,
    PriceInput,
    PriceQuote,
    PricingError,
    ScoreSet,
    UnknownComplexityError,
    UnknownJobTypeError,
)

ROUNDING_STEP = 5


def round_to_5(value: float) -> int:
    """Round to the nearest multiple of 5, ties going up."""
    return int(math.floor(value / ROUNDING_STEP + 0.5)) * ROUNDING_STEP


def risk_multiplier(risk_level: float, config: AdminConfig) -> float:
    return 1 + risk_level / config.risk_divisor


def estimate_price(price_input: PriceInput, config: AdminConfig | None = None) -> PriceQuote:
    """
    Compute the price band for a job.

    Args:
        price_input: Square footage, job type, complexity and 0-100 risk/upsell scores
        config: Admin config to price against (defaults to the process-wide one)

    Returns:
        PriceQuote with the unrounded core price, the rounded band and the
        multipliers that produced it

    Raises:
        UnknownJobTypeError: base_type has no configured rate
        UnknownComplexityError: complexity has no configured multiplier
        PricingError: negative square footage or scores outside 0-100
    """
    config = config or get_admin_config()

    if price_input.sqft < 0:
        raise PricingError(f"sqft must be non-negative, got {price_input.sqft}")
    if not 0 <= price_input.risk_level <= 100:
        raise PricingError(f"risk_level must be between 0 and 100, got {price_input.risk_level}")
    if not 0 <= price_input.upsell_score <= 100:
        raise PricingError(
            f"upsell_score must be between 0 and 100, got {price_input.upsell_score}"
        )

    base_type = price_input.base_type.strip().lower()
    if base_type not in config.base_rates:
        raise UnknownJobTypeError(
            f"Unknown job type {price_input.base_type!r}. "
            f"Expected one of: {', '.join(config.job_types)}"
        )

    complexity = price_input.complexity.strip().lower()
    if complexity not in config.complexity_multipliers:
        raise UnknownComplexityError(
            f"Unknown complexity {price_input.complexity!r}. "
            f"Expected one of: {', '.join(config.complexities)}"
        )

    base_rate = config.base_rates[base_type]
    complexity_mult = config.complexity_multipliers[complexity]
    risk_mult = risk_multiplier(price_input.risk_level, config)
    admin_mult = config.admin_multiplier

    core_price = price_input.sqft * base_rate * complexity_mult * risk_mult * admin_mult

    band = PriceBand(
        low=round_to_5(core_price * (1 - config.band_low_pct)),
        target=round_to_5(core_price),
        high=round_to_5(core_price * (1 + config.band_high_pct)),
    )
    upsell_add_on = round_to_5(core_price * price_input.upsell_score / 100 * config.upsell_share)

    return PriceQuote(
        core_price=core_price,
        band=band,
        upsell_add_on=upsell_add_on,
        base_rate=base_rate,
        complexity_mult=complexity_mult,
        risk_mult=risk_mult,
        admin_mult=admin_mult,
        inputs=price_input,
    )


def quote_for_scores(
    scores: ScoreSet,
    sqft: float | None,
    base_type: str | None,
    complexity: str | None = None,
    config: AdminConfig | None = None,
) -> PriceQuote | None:
    """
    Price a job using heuristic scores as the risk and upsell inputs.

    Returns None when the size or job type is unknown, since there is
    nothing to multiply.
    """
    if not sqft or not base_type:
        return None

    return estimate_price(
        PriceInput(
            sqft=sqft,
            base_type=base_type,
            complexity=complexity or Complexity.NORMAL.value,
            risk_level=scores.risk_pct,
            upsell_score=scores.upsell_pct,
        ),
        config,
    )
