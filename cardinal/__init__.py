"""Cardinal Calculator - yard pricing, risk and upsell estimates for lawn crews"""

from __future__ import annotations

__version__ = "1.0.0"


# Lazy imports so importing the package does not pull in FastAPI or model SDKs
def __getattr__(name: str):
    if name in ("score_summary", "estimate_price", "round_to_5"):
        from cardinal import pricing

        return getattr(pricing, name)

    if name == "AdminConfig":
        from cardinal.pricing.admin import AdminConfig

        return AdminConfig

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "AdminConfig",
    "estimate_price",
    "round_to_5",
    "score_summary",
]
