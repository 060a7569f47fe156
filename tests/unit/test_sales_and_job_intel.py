"""Unit tests for the sales script writer and job intel analyst"""

from __future__ import annotations

import json

import pytest

from cardinal.analysis import JobIntel, JobIntelAnalyst, SalesScriptWriter, ScriptRequest
from cardinal.analysis.sales import SALES_SYSTEM_INSTRUCTION


@pytest.fixture
def llm_calls():
    return []


@pytest.fixture
def patch_llm(monkeypatch, llm_calls):
    def install(module: str, response: str):
        def fake_call_llm(contents, counter_prefix="llm", system_instruction=None, json_output=False):
            llm_calls.append(
                {
                    "contents": contents,
                    "counter_prefix": counter_prefix,
                    "system_instruction": system_instruction,
                    "json_output": json_output,
                }
            )
            return response

        monkeypatch.setattr(f"cardinal.analysis.{module}.call_llm", fake_call_llm)

    return install


class TestSalesScriptWriter:
    def test_prompt_carries_job_details(self, patch_llm, llm_calls):
        patch_llm("sales", "  Hi Dana, I noticed your beds could use fresh mulch...  ")

        script = SalesScriptWriter().write(
            ScriptRequest(
                text="Front beds are bare",
                customer_name="Dana",
                price=150,
                close_pct=55,
                upsell_pct=65,
                tone="relaxed",
            )
        )

        assert script == "Hi Dana, I noticed your beds could use fresh mulch..."
        call = llm_calls[0]
        assert call["counter_prefix"] == "sales_script"
        assert call["system_instruction"] == SALES_SYSTEM_INSTRUCTION
        assert call["json_output"] is False
        prompt = call["contents"]
        assert "Customer name: Dana" in prompt
        assert "Quoted price: $150" in prompt
        assert "Likelihood the customer says yes: 55%" in prompt
        assert "Tone: relaxed" in prompt

    def test_defaults_for_missing_details(self, patch_llm, llm_calls):
        patch_llm("sales", "Hello there.")

        SalesScriptWriter().write(ScriptRequest(text="Small front lawn"))

        prompt = llm_calls[0]["contents"]
        assert "Customer name: the homeowner" in prompt
        assert "Quoted price: not quoted yet" in prompt
        assert "Tone: friendly" in prompt

    def test_empty_script_raises(self, patch_llm):
        patch_llm("sales", "   ")

        with pytest.raises(ValueError, match="empty"):
            SalesScriptWriter().write(ScriptRequest(text="lawn"))


class TestJobIntelAnalyst:
    def test_response_clamped_and_trimmed(self, patch_llm, llm_calls):
        patch_llm(
            "job_intel",
            json.dumps(
                {
                    "crew_size": 40,
                    "estimated_hours": 0.1,
                    "materials": ["6 yards mulch", " ", "edging stakes"],
                    "hazards": ["steep slope by the creek"],
                    "notes": "  Bring the dog gate key.  ",
                }
            ),
        )

        intel = JobIntelAnalyst().brief(
            "Steep backyard by the creek", job_type="mulch", complexity="hard", sqft=3000, risk_pct=55
        )

        assert intel == JobIntel(
            crew_size=12,
            estimated_hours=0.5,
            materials=["6 yards mulch", "edging stakes"],
            hazards=["steep slope by the creek"],
            notes="Bring the dog gate key.",
        )
        call = llm_calls[0]
        assert call["counter_prefix"] == "job_intel"
        assert call["json_output"] is True
        assert "Area: 3,000 sq ft" in call["contents"]
        assert "Risk score: 55%" in call["contents"]

    def test_unknown_job_details_in_prompt(self, patch_llm, llm_calls):
        patch_llm("job_intel", '{"crew_size": 2, "estimated_hours": 3}')

        JobIntelAnalyst().brief("lawn", job_type=None, complexity=None, sqft=None, risk_pct=30)

        prompt = llm_calls[0]["contents"]
        assert "Job type: unspecified" in prompt
        assert "Area: unknown sq ft" in prompt

    def test_unusable_response_raises(self, patch_llm):
        patch_llm("job_intel", "Sorry, I can't help with that.")

        with pytest.raises(ValueError, match="Unusable job intel response"):
            JobIntelAnalyst().brief("lawn", job_type=None, complexity=None, sqft=None, risk_pct=30)

    def test_to_dict(self):
        intel = JobIntel(crew_size=3, estimated_hours=4.5, materials=["sod"], hazards=[], notes="")

        assert intel.to_dict() == {
            "crewSize": 3,
            "estimatedHours": 4.5,
            "materials": ["sod"],
            "hazards": [],
            "notes": "",
        }
