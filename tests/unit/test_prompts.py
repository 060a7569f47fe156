"""Unit tests for prompt templates"""

from __future__ import annotations

import pytest

from cardinal.llm.prompts import (
    PromptLoader,
    get_job_intel_prompt,
    get_sales_script_prompt,
    get_yard_photo_prompt,
    get_yard_text_prompt,
)


def test_yard_photo_prompt_is_raw_json_instructions():
    prompt = get_yard_photo_prompt()

    assert '"summary"' in prompt
    assert "job_type" in prompt


def test_yard_text_prompt_renders_literal_braces():
    prompt = get_yard_text_prompt(text="Weedy side yard")

    assert "Weedy side yard" in prompt
    assert '{\n  "summary"' in prompt


def test_sales_prompt_needs_every_field():
    with pytest.raises(KeyError):
        get_sales_script_prompt(text="lawn")


def test_job_intel_prompt_renders():
    prompt = get_job_intel_prompt(text="slope", job_type="sod", complexity="hard", sqft="1,200", risk_pct=55)

    assert "Job type: sod" in prompt
    assert '"crew_size": 2' in prompt


def test_loader_caches_until_reload(tmp_path):
    (tmp_path / "greeting.txt").write_text("Hello {name}")
    loader = PromptLoader(tmp_path)

    assert loader.render("greeting", name="Dana") == "Hello Dana"

    (tmp_path / "greeting.txt").write_text("Howdy {name}")
    assert loader.render("greeting", name="Dana") == "Hello Dana"

    loader.reload()
    assert loader.render("greeting", name="Dana") == "Howdy Dana"


def test_missing_prompt_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        PromptLoader(tmp_path).load_prompt("nope")
