"""
JSON extraction and repair for model responses.

Models asked for "ONLY the JSON" still wrap it in code fences, add a lead-in
sentence or drop a comma now and then.
"""

from __future__ import annotations

import json
import re
from typing import Any

from cardinal.observability.logging import get_logger

logger = get_logger(__name__)


def extract_json(text: str) -> dict[str, Any]:
    """Extract a JSON object from model output with repair attempts.

    Handles common LLM JSON formatting issues:
    - Markdown code blocks
    - Surrounding prose
    - Missing commas between fields
    - Trailing commas

    Raises:
        json.JSONDecodeError: If no repair produces valid JSON
        ValueError: If the JSON is valid but not an object
    """
    text = re.sub(r"```json\s*", "", text)
    text = re.sub(r"```\s*", "", text)
    text = text.strip()

    try:
        return _require_object(json.loads(text))
    except json.JSONDecodeError as e:
        logger.warning("JSON parse error (attempting repair): %s", e)

        # Greedy match so nested objects stay intact
        match = re.search(r"\{.*\}", text, re.DOTALL)
        if not match:
            raise

        json_text = match.group(0)
        try:
            return _require_object(json.loads(json_text))
        except json.JSONDecodeError:
            pass

        repaired = re.sub(r'"\s*\n\s*"', '",\n"', json_text)
        repaired = re.sub(r"(\d+\.?\d*|true|false|null)\s*\n\s*\"", r'\1,\n"', repaired)
        repaired = re.sub(r'\}\s*\n\s*"', '},\n"', repaired)
        repaired = re.sub(r'\]\s*\n\s*"', '],\n"', repaired)
        repaired = re.sub(r",\s*([\}\]])", r"\1", repaired)

        result = _require_object(json.loads(repaired))
        logger.info("JSON repair succeeded")
        return result


def _require_object(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"Expected a JSON object, got {type(value).__name__}")
    return value
