"""FastAPI server for Cardinal Calculator"""

from __future__ import annotations

from typing import Any

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cardinal.api.middleware.rate_limit import RateLimitMiddleware
from cardinal.api.models import ErrorResponse
from cardinal.api.routes.analysis import router as analysis_router
from cardinal.api.routes.health import router as health_router
from cardinal.api.routes.pricing import router as pricing_router
from cardinal.api.routes.pro import router as pro_router
from cardinal.api.routes.sales import router as sales_router
from cardinal.api.routes.signup import router as signup_router
from cardinal.api.routes.speech import router as speech_router
from cardinal.config import (
    API_HOST,
    API_PORT,
    APP_NAME,
    APP_VERSION,
    CORS_ORIGINS,
    ENV,
    LOG_LEVEL,
    RATE_LIMIT_RPH,
    RATE_LIMIT_RPM,
    TIER_HEADER,
    is_development,
)
from cardinal.observability.logging import get_logger
from cardinal.observability.telemetry import counter, log_event
from cardinal.pricing import PricingError
from cardinal.utils.error_sanitizer import sanitize_error_message
from cardinal.utils.redaction import redact

logger = get_logger(__name__)

app = FastAPI(title=APP_NAME, version=APP_VERSION)

MISSING_ERROR_TYPES = frozenset({"missing", "string_too_short"})


def _error_body(message: str, invalid_fields: list[str] | None = None) -> dict[str, Any]:
    return ErrorResponse(error=message, invalid_fields=invalid_fields).model_dump(exclude_none=True)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Turn validation failures into a 400 that names the offending fields.

    Side Effects:
        - Logs detailed validation errors for debugging (with PII redaction)
        - Increments validation error counter for monitoring
    """
    errors = exc.errors()
    logger.warning("Validation error on %s: %s", redact(str(request.url)), errors)
    counter("api.validation_errors")

    invalid_fields = [str(err["loc"][-1]) for err in errors]
    missing = [str(err["loc"][-1]) for err in errors if err["type"] in MISSING_ERROR_TYPES]

    if missing:
        label = "field" if len(missing) == 1 else "fields"
        message = f"Missing required {label}: {', '.join(missing)}"
    else:
        # Only expose field names, not validation logic
        message = "Invalid request format. Please check your request and try again."

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(message, invalid_fields=invalid_fields),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(PricingError)
async def pricing_exception_handler(request: Request, exc: PricingError) -> JSONResponse:
    counter("api.pricing_errors")
    logger.info("Pricing error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(sanitize_error_message(str(exc), 400)),
    )


# Rate limiting - every non-health call can reach a paid model API
app.add_middleware(
    RateLimitMiddleware,
    requests_per_minute=RATE_LIMIT_RPM,
    requests_per_hour=RATE_LIMIT_RPH,
)

# CORS is added last so it wraps the limiter and 429s still carry CORS headers.
# Unset CARDINAL_CORS_ORIGINS means any origin, without credentials.
if CORS_ORIGINS:
    ALLOWED_ORIGINS = list(CORS_ORIGINS)
    if is_development():
        ALLOWED_ORIGINS.extend(
            [
                "http://localhost:3000",
                "http://localhost:5173",
                "http://127.0.0.1:3000",
                "http://127.0.0.1:5173",
            ]
        )
else:
    ALLOWED_ORIGINS = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials="*" not in ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", TIER_HEADER],
)

app.include_router(health_router)
app.include_router(signup_router)
app.include_router(analysis_router)
app.include_router(speech_router)
app.include_router(pricing_router)
app.include_router(sales_router)
app.include_router(pro_router)


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return f"🚀 {APP_NAME} backend running on port {API_PORT}"


log_event("api.startup", service="cardinal", version=APP_VERSION, env=ENV)


def main() -> None:
    """Console entry point: serve the app with uvicorn."""
    logger.info("🚀 %s backend running on port %d", APP_NAME, API_PORT)
    uvicorn.run(app, host=API_HOST, port=API_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
