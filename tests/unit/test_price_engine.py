"""Unit tests for the price pipeline"""

from __future__ import annotations

import pytest

from cardinal.pricing import (
    AdminConfig,
    PriceInput,
    PricingError,
    UnknownComplexityError,
    UnknownJobTypeError,
    estimate_price,
    quote_for_scores,
    round_to_5,
    score_summary,
)
from cardinal.pricing.admin import DEFAULT_BASE_RATES, DEFAULT_COMPLEXITY_MULTIPLIERS


@pytest.fixture
def config():
    return AdminConfig()


class TestRoundTo5:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, 0),
            (1.2, 0),
            (2.5, 5),
            (7.49, 5),
            (7.5, 10),
            (151.8, 150),
            (152.5, 155),
            (179.124, 180),
        ],
    )
    def test_nearest_multiple_ties_up(self, value, expected):
        assert round_to_5(value) == expected


class TestEstimatePrice:
    def test_reference_mulch_job(self, config):
        quote = estimate_price(
            PriceInput(sqft=1000, base_type="mulch", complexity="normal", risk_level=30, upsell_score=40),
            config,
        )

        assert quote.core_price == pytest.approx(151.8)
        assert quote.band.target == 150
        assert quote.band.low == 135
        assert quote.band.high == 180
        assert quote.upsell_add_on == 15

    def test_multipliers_reported(self, config):
        quote = estimate_price(PriceInput(sqft=500, base_type="sod", complexity="hard", risk_level=50), config)

        assert quote.base_rate == 1.10
        assert quote.complexity_mult == 1.25
        assert quote.risk_mult == pytest.approx(1.25)
        assert quote.admin_mult == 1.10
        assert quote.core_price == pytest.approx(500 * 1.10 * 1.25 * 1.25 * 1.10)

    def test_inputs_are_normalized(self, config):
        quote = estimate_price(PriceInput(sqft=1000, base_type="  Mulch ", complexity="NORMAL"), config)

        assert quote.base_rate == 0.12

    def test_zero_sqft_prices_to_zero(self, config):
        quote = estimate_price(PriceInput(sqft=0, base_type="mowing"), config)

        assert (quote.band.low, quote.band.target, quote.band.high) == (0, 0, 0)
        assert quote.upsell_add_on == 0

    def test_unknown_job_type(self, config):
        with pytest.raises(UnknownJobTypeError, match="gravel"):
            estimate_price(PriceInput(sqft=100, base_type="gravel"), config)

    def test_unknown_complexity(self, config):
        with pytest.raises(UnknownComplexityError, match="impossible"):
            estimate_price(PriceInput(sqft=100, base_type="mowing", complexity="impossible"), config)

    def test_unknown_inputs_are_pricing_errors(self, config):
        with pytest.raises(PricingError):
            estimate_price(PriceInput(sqft=100, base_type="gravel"), config)

    @pytest.mark.parametrize(
        "price_input",
        [
            PriceInput(sqft=-1, base_type="mowing"),
            PriceInput(sqft=100, base_type="mowing", risk_level=101),
            PriceInput(sqft=100, base_type="mowing", upsell_score=-5),
        ],
    )
    def test_out_of_range_inputs(self, config, price_input):
        with pytest.raises(PricingError):
            estimate_price(price_input, config)

    def test_admin_multiplier_scales_core(self):
        plain = estimate_price(PriceInput(sqft=1000, base_type="mulch"), AdminConfig(admin_multiplier=1.0))
        marked_up = estimate_price(PriceInput(sqft=1000, base_type="mulch"), AdminConfig(admin_multiplier=2.0))

        assert marked_up.core_price == pytest.approx(plain.core_price * 2)

    def test_band_ordering_and_rounding_hold_across_inputs(self, config):
        for base_type in DEFAULT_BASE_RATES:
            for complexity in DEFAULT_COMPLEXITY_MULTIPLIERS:
                for sqft in (0, 37, 250, 1000, 4321, 20000):
                    for risk in (0, 30, 55, 95, 100):
                        quote = estimate_price(
                            PriceInput(sqft=sqft, base_type=base_type, complexity=complexity, risk_level=risk),
                            config,
                        )
                        band = quote.band
                        assert band.low <= band.target <= band.high
                        assert band.low % 5 == band.target % 5 == band.high % 5 == 0
                        assert quote.upsell_add_on % 5 == 0

    def test_to_dict_shape(self, config):
        quote = estimate_price(PriceInput(sqft=1000, base_type="mulch", upsell_score=40), config)

        assert quote.to_dict() == {
            "corePrice": 151.8,
            "price": {"low": 135, "target": 150, "high": 180},
            "upsellAddOn": 15,
            "multipliers": {"baseRate": 0.12, "complexity": 1.0, "risk": 1.15, "admin": 1.10},
        }


class TestQuoteForScores:
    def test_uses_scores_as_risk_and_upsell(self, config):
        scores = score_summary("Overgrown lawn, weedy mulch beds")  # risk 55, upsell 90
        quote = quote_for_scores(scores, sqft=1000, base_type="mulch", config=config)

        assert quote is not None
        assert quote.core_price == pytest.approx(1000 * 0.12 * 1.275 * 1.10)
        assert quote.band.target == 170
        assert quote.band.low == 150
        assert quote.band.high == 200
        assert quote.upsell_add_on == 40

    def test_defaults_to_normal_complexity(self, config):
        quote = quote_for_scores(score_summary(""), sqft=1000, base_type="mowing", config=config)

        assert quote.complexity_mult == 1.0

    @pytest.mark.parametrize(("sqft", "base_type"), [(None, "mulch"), (0, "mulch"), (1000, None), (1000, "")])
    def test_missing_size_or_type_gives_no_quote(self, config, sqft, base_type):
        assert quote_for_scores(score_summary(""), sqft=sqft, base_type=base_type, config=config) is None
