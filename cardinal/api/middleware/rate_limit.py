"""Rate limiting middleware for the Cardinal Calculator API

Per-IP sliding-window limits keep one caller from running up the model bill.

Security features:
- IP spoofing protection (X-Forwarded-For only trusted behind a known proxy)
- Memory leak prevention via TTL-bounded buckets
"""

from __future__ import annotations

import ipaddress
import secrets
import time
from collections.abc import Callable
from typing import Any

from cachetools import TTLCache
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from cardinal.config import RATE_LIMIT_MAX_IPS
from cardinal.observability.telemetry import counter, log_event

EXEMPT_PATHS = frozenset({"/", "/health"})
EXEMPT_PREFIXES = ("/health/",)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Rate limiting middleware.

    Limits requests per IP address per minute and per hour. Buckets live in
    process memory, so limits are per instance.
    """

    def __init__(
        self,
        app: Any,
        requests_per_minute: int = 60,
        requests_per_hour: int = 1000,
        trusted_proxy_header: str = "X-Forwarded-Proto",
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.requests_per_hour = requests_per_hour

        # Request tracking: {ip: [timestamp, ...]}, auto-evicted after ttl seconds
        self.minute_buckets: TTLCache[str, list[float]] = TTLCache(maxsize=RATE_LIMIT_MAX_IPS, ttl=120)
        self.hour_buckets: TTLCache[str, list[float]] = TTLCache(maxsize=RATE_LIMIT_MAX_IPS, ttl=7200)

        # Hosting proxies set this header; only trust X-Forwarded-For when present
        self._trusted_proxy_header = trusted_proxy_header

    def _is_valid_ip(self, ip_str: str) -> bool:
        """Validate that a string is a valid IPv4 or IPv6 address."""
        try:
            ipaddress.ip_address(ip_str)
            return True
        except ValueError:
            return False

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP with spoofing protection.

        Only trusts X-Forwarded-For when the request came through the hosting
        proxy. Direct connections use the socket IP.
        """
        is_from_trusted_proxy = self._trusted_proxy_header in request.headers

        if is_from_trusted_proxy:
            forwarded = request.headers.get("X-Forwarded-For")
            if forwarded:
                ip = forwarded.split(",")[0].strip()
                if self._is_valid_ip(ip):
                    return ip

        return request.client.host if request.client else "unknown"

    def _clean_old_requests(self, bucket: list[float], max_age_seconds: int) -> list[float]:
        """Remove requests older than max_age_seconds"""
        now = time.time()
        return [ts for ts in bucket if now - ts < max_age_seconds]

    def _cleanup_old_buckets(self) -> None:
        """Drop IPs idle for two hours. TTLCache expires most of them already."""
        now = time.time()
        max_idle_time = 7200

        for ip in list(self.minute_buckets.keys()):
            bucket = self.minute_buckets.get(ip, [])
            if not bucket or now - max(bucket) > max_idle_time:
                self.minute_buckets.pop(ip, None)
                self.hour_buckets.pop(ip, None)

    def _limit_response(self, limit: str, maximum: int, retry_after: int) -> JSONResponse:
        return JSONResponse(
            status_code=429,
            content={
                "ok": False,
                "error": f"Rate limit exceeded. Maximum {maximum} requests per {limit}.",
                "retry_after": retry_after,
            },
            headers={"Retry-After": str(retry_after)},
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Check rate limits before processing request."""
        path = request.url.path
        if (
            request.method == "OPTIONS"
            or path in EXEMPT_PATHS
            or path.startswith(EXEMPT_PREFIXES)
        ):
            return await call_next(request)

        # Occasional sweep (1% of requests); secrets avoids predictable timing
        if secrets.randbelow(100) == 0:
            self._cleanup_old_buckets()

        client_ip = self._get_client_ip(request)
        now = time.time()

        self.minute_buckets[client_ip] = self._clean_old_requests(
            self.minute_buckets.get(client_ip, []), 60
        )
        self.hour_buckets[client_ip] = self._clean_old_requests(
            self.hour_buckets.get(client_ip, []), 3600
        )

        minute_requests = len(self.minute_buckets.get(client_ip, []))
        if minute_requests >= self.requests_per_minute:
            counter("api.rate_limit.exceeded")
            log_event("api.rate_limit.exceeded", ip=client_ip, limit="minute", count=minute_requests)
            return self._limit_response("minute", self.requests_per_minute, 60)

        hour_requests = len(self.hour_buckets.get(client_ip, []))
        if hour_requests >= self.requests_per_hour:
            counter("api.rate_limit.exceeded")
            log_event("api.rate_limit.exceeded", ip=client_ip, limit="hour", count=hour_requests)
            return self._limit_response("hour", self.requests_per_hour, 3600)

        minute_bucket = self.minute_buckets.get(client_ip, [])
        minute_bucket.append(now)
        self.minute_buckets[client_ip] = minute_bucket

        hour_bucket = self.hour_buckets.get(client_ip, [])
        hour_bucket.append(now)
        self.hour_buckets[client_ip] = hour_bucket

        response = await call_next(request)

        response.headers["X-RateLimit-Limit-Minute"] = str(self.requests_per_minute)
        response.headers["X-RateLimit-Remaining-Minute"] = str(
            self.requests_per_minute - minute_requests - 1
        )
        response.headers["X-RateLimit-Limit-Hour"] = str(self.requests_per_hour)
        response.headers["X-RateLimit-Remaining-Hour"] = str(
            self.requests_per_hour - hour_requests - 1
        )

        return response
