"""
Yard Analyzer - turns a yard photo or description into an estimator's summary.

Gemini does the looking; this module only builds the prompt, parses the JSON
it returns and normalizes job type / complexity to values the pricing engine
knows. Scoring and pricing happen in cardinal.pricing.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from pydantic import BaseModel, Field, ValidationError, field_validator

from cardinal.config import LLM_INPUT_MAX_CHARS
from cardinal.llm.gemini import make_image_part
from cardinal.llm.prompts import get_yard_photo_prompt, get_yard_text_prompt
from cardinal.llm.retry import call_llm
from cardinal.observability.logging import get_logger
from cardinal.observability.telemetry import counter, log_event
from cardinal.pricing.models import Complexity, JobType
from cardinal.utils.json_extract import extract_json
from cardinal.utils.redaction import sanitize_for_prompt

logger = get_logger(__name__)

MAX_ESTIMATED_SQFT = 1_000_000


@dataclass(frozen=True)
class YardAssessment:
    """What the model saw, normalized for pricing."""

    summary: str
    estimated_sqft: float | None = None
    job_type: str | None = None
    complexity: str | None = None
    parsed: bool = True

    def to_dict(self) -> dict[str, object]:
        return {
            "summary": self.summary,
            "estimatedSqft": self.estimated_sqft,
            "jobType": self.job_type,
            "complexity": self.complexity,
        }


class YardAssessmentSchema(BaseModel):
    """Schema for LLM response validation."""

    summary: str = Field(min_length=1)
    estimated_sqft: float | None = Field(default=None)
    job_type: str | None = None
    complexity: str | None = None

    @field_validator("estimated_sqft")
    @classmethod
    def plausible_sqft(cls, v: float | None) -> float | None:
        if v is None or v <= 0 or v > MAX_ESTIMATED_SQFT:
            return None
        return v

    @field_validator("job_type")
    @classmethod
    def known_job_type(cls, v: str | None) -> str | None:
        if not v:
            return None
        v = v.strip().lower()
        return v if v in {j.value for j in JobType} else None

    @field_validator("complexity")
    @classmethod
    def known_complexity(cls, v: str | None) -> str | None:
        if not v:
            return None
        v = v.strip().lower()
        return v if v in {c.value for c in Complexity} else None


class YardAnalyzer:
    """Vision and text analysis of a yard through Gemini."""

    def analyze_photo(self, image: bytes, mime_type: str) -> YardAssessment:
        """
        Describe a yard from a photo.

        Side Effects:
            - Calls Gemini API (vision)
            - Logs analysis events, increments telemetry counters
        """
        contents = [get_yard_photo_prompt(), make_image_part(image, mime_type)]

        logger.info("YARD ANALYZER: photo analysis (%d bytes, %s)", len(image), mime_type)
        response_text = call_llm(contents, counter_prefix="yard_photo", json_output=True)

        assessment = self._parse_response(response_text)
        counter("analysis.yard_photo.success")
        log_event(
            "analysis.yard_photo.result",
            parsed=assessment.parsed,
            job_type=assessment.job_type,
            complexity=assessment.complexity,
            has_sqft=assessment.estimated_sqft is not None,
        )
        return assessment

    def analyze_text(self, text: str) -> YardAssessment:
        """
        Describe a yard from a written description.

        Side Effects:
            - Calls Gemini API
            - Logs analysis events, increments telemetry counters
        """
        prompt = get_yard_text_prompt(text=sanitize_for_prompt(text, max_length=LLM_INPUT_MAX_CHARS))

        logger.info("YARD ANALYZER: text analysis (%d chars)", len(text))
        response_text = call_llm(prompt, counter_prefix="yard_text", json_output=True)

        assessment = self._parse_response(response_text)
        counter("analysis.yard_text.success")
        log_event(
            "analysis.yard_text.result",
            parsed=assessment.parsed,
            job_type=assessment.job_type,
            complexity=assessment.complexity,
        )
        return assessment

    def _parse_response(self, response_text: str) -> YardAssessment:
        """Parse LLM response into a YardAssessment."""
        try:
            data = extract_json(response_text)
            validated = YardAssessmentSchema.model_validate(data)
            return YardAssessment(
                summary=validated.summary.strip(),
                estimated_sqft=validated.estimated_sqft,
                job_type=validated.job_type,
                complexity=validated.complexity,
            )

        except (json.JSONDecodeError, ValidationError, ValueError) as e:
            logger.warning("Failed to parse yard assessment, using raw text: %s", e)
            counter("analysis.yard.parse_error")

            # The prose is still worth scoring even when the structure is lost
            return YardAssessment(summary=response_text.strip(), parsed=False)
