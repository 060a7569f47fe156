"""
Job Intel Analyst - crew plan for pro-tier callers.

The model proposes crew size, hours, materials and hazards; numbers that come
back out of range are clamped rather than trusted.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from pydantic import BaseModel, Field, ValidationError, field_validator

from cardinal.llm.prompts import get_job_intel_prompt
from cardinal.llm.retry import call_llm
from cardinal.observability.logging import get_logger
from cardinal.observability.telemetry import counter, log_event
from cardinal.utils.json_extract import extract_json
from cardinal.utils.redaction import sanitize_for_prompt

logger = get_logger(__name__)

MAX_CREW_SIZE = 12
MAX_HOURS = 80.0
MAX_LIST_ITEMS = 10


@dataclass(frozen=True)
class JobIntel:
    crew_size: int
    estimated_hours: float
    materials: list[str] = field(default_factory=list)
    hazards: list[str] = field(default_factory=list)
    notes: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "crewSize": self.crew_size,
            "estimatedHours": self.estimated_hours,
            "materials": list(self.materials),
            "hazards": list(self.hazards),
            "notes": self.notes,
        }


class JobIntelSchema(BaseModel):
    """Schema for LLM response validation."""

    crew_size: int = Field(default=2)
    estimated_hours: float = Field(default=2.0)
    materials: list[str] = Field(default_factory=list)
    hazards: list[str] = Field(default_factory=list)
    notes: str = ""

    @field_validator("crew_size")
    @classmethod
    def clamp_crew(cls, v: int) -> int:
        return max(1, min(MAX_CREW_SIZE, v))

    @field_validator("estimated_hours")
    @classmethod
    def clamp_hours(cls, v: float) -> float:
        return round(max(0.5, min(MAX_HOURS, v)), 1)

    @field_validator("materials", "hazards")
    @classmethod
    def trim_list(cls, v: list[str]) -> list[str]:
        return [item.strip() for item in v if item and item.strip()][:MAX_LIST_ITEMS]


class JobIntelAnalyst:
    def brief(
        self,
        text: str,
        job_type: str | None,
        complexity: str | None,
        sqft: float | None,
        risk_pct: int,
    ) -> JobIntel:
        """
        Plan crew and materials for a job.

        Raises:
            ValueError: If the model response is not usable JSON

        Side Effects:
            - Calls Gemini API
            - Logs events, increments telemetry counters
        """
        prompt = get_job_intel_prompt(
            text=sanitize_for_prompt(text, max_length=2000),
            job_type=job_type or "unspecified",
            complexity=complexity or "unspecified",
            sqft=f"{sqft:,.0f}" if sqft else "unknown",
            risk_pct=risk_pct,
        )

        response_text = call_llm(prompt, counter_prefix="job_intel", json_output=True)

        try:
            validated = JobIntelSchema.model_validate(extract_json(response_text))
        except (json.JSONDecodeError, ValidationError, ValueError) as e:
            counter("analysis.job_intel.parse_error")
            logger.warning("Failed to parse job intel response: %s", e)
            raise ValueError(f"Unusable job intel response: {e}") from e

        intel = JobIntel(
            crew_size=validated.crew_size,
            estimated_hours=validated.estimated_hours,
            materials=validated.materials,
            hazards=validated.hazards,
            notes=validated.notes.strip(),
        )
        counter("analysis.job_intel.success")
        log_event(
            "analysis.job_intel.result",
            crew_size=intel.crew_size,
            hours=intel.estimated_hours,
            hazards=len(intel.hazards),
        )
        return intel
