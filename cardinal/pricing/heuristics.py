"""
Keyword heuristics that turn a yard summary into sales scores.

The summary is usually model-written prose ("overgrown beds along the fence,
patchy lawn"), so the scorer only looks for cue words. Each cue category
adjusts the base scores once, no matter how many of its words appear.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from cardinal.pricing.models import ScoreSet

BASE_CLOSE_PCT = 60
BASE_UPSELL_PCT = 45
BASE_RISK_PCT = 30

CLOSE_RANGE = (5, 98)
UPSELL_RANGE = (5, 98)
RISK_RANGE = (3, 95)


@dataclass(frozen=True)
class CueCategory:
    name: str
    pattern: re.Pattern[str]
    close_delta: int = 0
    upsell_delta: int = 0
    risk_delta: int = 0


CUE_CATEGORIES: tuple[CueCategory, ...] = (
    CueCategory(
        name="cleanliness",
        pattern=re.compile(
            r"\b(clean|neat|tidy|well[- ]?(?:kept|maintained|manicured)|manicured|healthy|lush)\b",
            re.IGNORECASE,
        ),
        close_delta=15,
    ),
    CueCategory(
        name="upsell",
        pattern=re.compile(
            r"\b(mulch\w*|edging|beds?|shrubs?|hedges?|bushes|planters?|landscap\w*)\b",
            re.IGNORECASE,
        ),
        upsell_delta=20,
    ),
    CueCategory(
        name="degradation",
        pattern=re.compile(
            r"\b(overgrown|weeds?|weedy|patchy|bare|dead|dying|debris|neglected|messy|"
            r"erosion|eroded|thinning)\b",
            re.IGNORECASE,
        ),
        close_delta=-10,
        upsell_delta=25,
        risk_delta=25,
    ),
)


def clamp(value: int, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return max(low, min(high, value))


def score_summary(summary: str | None) -> ScoreSet:
    """
    Score a yard summary for close, upsell and risk likelihood.

    Starts from 60/45/30 and applies the deltas of every cue category
    present in the text, then clamps each score to its allowed range.

    Args:
        summary: Free-text description of the yard (may be empty)

    Returns:
        ScoreSet with clamped percentages and the matched category names
    """
    close = BASE_CLOSE_PCT
    upsell = BASE_UPSELL_PCT
    risk = BASE_RISK_PCT
    signals: list[str] = []

    text = summary or ""
    for category in CUE_CATEGORIES:
        if category.pattern.search(text):
            signals.append(category.name)
            close += category.close_delta
            upsell += category.upsell_delta
            risk += category.risk_delta

    return ScoreSet(
        close_pct=clamp(close, CLOSE_RANGE),
        upsell_pct=clamp(upsell, UPSELL_RANGE),
        risk_pct=clamp(risk, RISK_RANGE),
        signals=tuple(signals),
    )
