"""Value types for the pricing engine and heuristic scorer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class JobType(str, Enum):
    """Yard jobs the calculator can price."""

    MOWING = "mowing"
    MULCH = "mulch"
    CLEANUP = "cleanup"
    EDGING = "edging"
    HEDGE = "hedge"
    AERATION = "aeration"
    SOD = "sod"


class Complexity(str, Enum):
    """Site difficulty, applied as a price multiplier."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    EXTREME = "extreme"


class PricingError(ValueError):
    """Raised when pricing inputs cannot be mapped to the admin config."""


class UnknownJobTypeError(PricingError):
    """Raised for a job type with no configured base rate."""


class UnknownComplexityError(PricingError):
    """Raised for a complexity level with no configured multiplier."""


@dataclass(frozen=True)
class ScoreSet:
    """Heuristic sales scores derived from a yard summary."""

    close_pct: int
    upsell_pct: int
    risk_pct: int
    signals: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "closePct": self.close_pct,
            "upsellPct": self.upsell_pct,
            "riskPct": self.risk_pct,
            "signals": list(self.signals),
        }


@dataclass(frozen=True)
class PriceInput:
    """Structured inputs for a price estimate."""

    sqft: float
    base_type: str
    complexity: str = Complexity.NORMAL.value
    risk_level: float = 30
    upsell_score: float = 45


@dataclass(frozen=True)
class PriceBand:
    """Low/target/high price, each a multiple of 5."""

    low: int
    target: int
    high: int


@dataclass(frozen=True)
class PriceQuote:
    """Full result of the price pipeline, including the multipliers used."""

    core_price: float
    band: PriceBand
    upsell_add_on: int
    base_rate: float
    complexity_mult: float
    risk_mult: float
    admin_mult: float
    inputs: PriceInput | None = field(default=None, repr=False)

    def to_dict(self) -> dict[str, object]:
        return {
            "corePrice": round(self.core_price, 2),
            "price": {
                "low": self.band.low,
                "target": self.band.target,
                "high": self.band.high,
            },
            "upsellAddOn": self.upsell_add_on,
            "multipliers": {
                "baseRate": self.base_rate,
                "complexity": self.complexity_mult,
                "risk": round(self.risk_mult, 4),
                "admin": self.admin_mult,
            },
        }
