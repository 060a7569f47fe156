"""Sales Script Writer - natural-sounding pitch for a quoted yard job."""

from __future__ import annotations

from dataclasses import dataclass

from cardinal.llm.prompts import get_sales_script_prompt
from cardinal.llm.retry import call_llm
from cardinal.observability.logging import get_logger
from cardinal.observability.telemetry import counter, log_event
from cardinal.utils.redaction import sanitize_for_prompt

logger = get_logger(__name__)

DEFAULT_TONE = "friendly"
SALES_SYSTEM_INSTRUCTION = (
    "You write short spoken sales scripts for a local lawn care crew. "
    "Never invent prices, discounts or guarantees that are not in the job details."
)


@dataclass(frozen=True)
class ScriptRequest:
    text: str
    customer_name: str | None = None
    price: int | None = None
    close_pct: int | None = None
    upsell_pct: int | None = None
    tone: str | None = None


class SalesScriptWriter:
    def write(self, request: ScriptRequest) -> str:
        """
        Generate a sales script.

        Side Effects:
            - Calls Gemini API
            - Logs events, increments telemetry counters
        """
        prompt = get_sales_script_prompt(
            text=sanitize_for_prompt(request.text, max_length=2000),
            customer_name=sanitize_for_prompt(request.customer_name, max_length=80) or "the homeowner",
            price=f"${request.price}" if request.price is not None else "not quoted yet",
            close_pct=request.close_pct if request.close_pct is not None else "unknown",
            upsell_pct=request.upsell_pct if request.upsell_pct is not None else "unknown",
            tone=sanitize_for_prompt(request.tone, max_length=40) or DEFAULT_TONE,
        )

        script = call_llm(
            prompt,
            counter_prefix="sales_script",
            system_instruction=SALES_SYSTEM_INSTRUCTION,
        ).strip()

        if not script:
            counter("analysis.sales_script.empty")
            raise ValueError("Model returned an empty sales script")

        counter("analysis.sales_script.success")
        log_event("analysis.sales_script.result", words=len(script.split()), priced=request.price is not None)
        return script
