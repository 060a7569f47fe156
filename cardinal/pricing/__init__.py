"""
Cardinal pricing - heuristic scores and price bands.
"""

from cardinal.pricing.admin import AdminConfig, clear_admin_config_cache, get_admin_config
from cardinal.pricing.engine import estimate_price, quote_for_scores, round_to_5
from cardinal.pricing.heuristics import score_summary
from cardinal.pricing.models import (
    Complexity,
    JobType,
    PriceBand,
    PriceInput,
    PriceQuote,
    PricingError,
    ScoreSet,
    UnknownComplexityError,
    UnknownJobTypeError,
)

__all__ = [
    # Config
    "AdminConfig",
    "clear_admin_config_cache",
    "get_admin_config",
    # Engine
    "estimate_price",
    "quote_for_scores",
    "round_to_5",
    # Heuristics
    "score_summary",
    # Models
    "Complexity",
    "JobType",
    "PriceBand",
    "PriceInput",
    "PriceQuote",
    "PricingError",
    "ScoreSet",
    "UnknownComplexityError",
    "UnknownJobTypeError",
]
