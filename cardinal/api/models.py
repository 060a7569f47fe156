"""Pydantic request/response models for the Cardinal Calculator API.

JSON bodies use camelCase keys (``baseType``, ``riskLevel``); snake_case
names are accepted too.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cardinal.config import SPEECH_MAX_CHARS

MAX_TEXT_LENGTH = 10_000
MAX_SQFT = 1_000_000


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# =============================================================================
# REQUESTS
# =============================================================================


class SignupRequest(ApiModel):
    email: str = Field(min_length=1, max_length=254)
    role: str | None = Field(default=None, max_length=40)


class TextRequest(ApiModel):
    text: str = Field(min_length=1, max_length=MAX_TEXT_LENGTH)


class InferenceRequest(TextRequest):
    """Yard description plus optional overrides for what the model infers."""

    sqft: float | None = Field(default=None, gt=0, le=MAX_SQFT)
    base_type: str | None = Field(default=None, max_length=40)
    complexity: str | None = Field(default=None, max_length=40)


class JobIntelRequest(InferenceRequest):
    pass


class SpeakRequest(ApiModel):
    text: str = Field(min_length=1, max_length=SPEECH_MAX_CHARS)
    voice: str | None = Field(default=None, max_length=20)


class PriceRequest(ApiModel):
    sqft: float = Field(gt=0, le=MAX_SQFT)
    base_type: str = Field(min_length=1, max_length=40)
    complexity: str = Field(default="normal", max_length=40)
    risk_level: float = Field(default=30, ge=0, le=100)
    upsell_score: float = Field(default=45, ge=0, le=100)


class SalesScriptRequest(TextRequest):
    customer_name: str | None = Field(default=None, max_length=80)
    price: int | None = Field(default=None, ge=0)
    close_pct: int | None = Field(default=None, ge=0, le=100)
    upsell_pct: int | None = Field(default=None, ge=0, le=100)
    tone: str | None = Field(default=None, max_length=40)


# =============================================================================
# RESPONSES
# =============================================================================


class ErrorResponse(ApiModel):
    """Standard error envelope."""

    ok: bool = False
    error: str
    invalid_fields: list[str] | None = None


class SignupResponse(ApiModel):
    ok: bool = True
    email: str
    role: str
    timestamp: str
    count: int


class PriceBandResponse(ApiModel):
    low: int
    target: int
    high: int


class MultipliersResponse(ApiModel):
    base_rate: float
    complexity: float
    risk: float
    admin: float


class PriceResponse(ApiModel):
    ok: bool = True
    core_price: float
    price: PriceBandResponse
    upsell_add_on: int
    multipliers: MultipliersResponse


class SalesScriptResponse(ApiModel):
    ok: bool = True
    script: str
