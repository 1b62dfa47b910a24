"""CORS, rate limiting, and security headers middleware."""

import time
from collections import defaultdict
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from election_api.core.config import Settings

_DEFAULT_TRUSTED_HEADERS = ["CF-Connecting-IP", "X-Forwarded-For", "X-Real-IP"]
_WRITE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
_WINDOW_SECONDS = 60.0


def get_client_ip(request: Request, trusted_headers: list[str] | None = None) -> str:
    """Extract the real client IP from proxy headers or direct connection.

    For X-Forwarded-For the leftmost (client-supplied) IP is used. Falls back
    to ``request.client.host``, then ``"unknown"``.
    """
    headers = trusted_headers if trusted_headers is not None else _DEFAULT_TRUSTED_HEADERS

    for header in headers:
        value = request.headers.get(header, "").strip()
        if not value:
            continue
        if header.lower() == "x-forwarded-for":
            return value.split(",")[0].strip()
        return value

    if request.client:
        return request.client.host
    return "unknown"


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware on the FastAPI app."""
    kwargs: dict[str, Any] = {
        "allow_credentials": True,
        "allow_methods": ["GET", "POST", "DELETE", "OPTIONS"],
        "allow_headers": ["Content-Type", "Authorization"],
    }
    if settings.cors_origin_list:
        kwargs["allow_origins"] = settings.cors_origin_list
    if settings.cors_origin_regex.strip():
        kwargs["allow_origin_regex"] = settings.cors_origin_regex.strip()
    app.add_middleware(CORSMiddleware, **kwargs)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """In-memory per-IP rate limiting over a sliding one-minute window.

    Every request counts against ``requests_per_minute``; mutating requests
    additionally count against the tighter ``writes_per_minute``.
    """

    def __init__(
        self,
        app: ASGIApp,
        requests_per_minute: int = 200,
        writes_per_minute: int = 60,
        trusted_proxy_headers: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.writes_per_minute = writes_per_minute
        self.trusted_proxy_headers = trusted_proxy_headers
        self._request_times: dict[str, list[float]] = defaultdict(list)
        self._write_times: dict[str, list[float]] = defaultdict(list)
        self._last_sweep = 0.0

    @staticmethod
    def _prune(times: dict[str, list[float]], client_ip: str, window_start: float) -> int:
        """Drop timestamps outside the window and return how many remain.

        A client with nothing left in the window is evicted from ``times``.
        """
        recent = [t for t in times.get(client_ip, ()) if t > window_start]
        if recent:
            times[client_ip] = recent
        else:
            times.pop(client_ip, None)
        return len(recent)

    def _sweep(self, now: float) -> None:
        """Evict every client idle for a full window, at most once per window."""
        if now - self._last_sweep < _WINDOW_SECONDS:
            return
        self._last_sweep = now
        window_start = now - _WINDOW_SECONDS
        for times in (self._request_times, self._write_times):
            for client_ip in list(times):
                self._prune(times, client_ip, window_start)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        client_ip = get_client_ip(request, self.trusted_proxy_headers)
        now = time.time()
        window_start = now - _WINDOW_SECONDS
        is_write = request.method.upper() in _WRITE_METHODS

        self._sweep(now)
        requests = self._prune(self._request_times, client_ip, window_start)
        writes = self._prune(self._write_times, client_ip, window_start)

        if requests >= self.requests_per_minute or (is_write and writes >= self.writes_per_minute):
            return Response(
                content='{"detail":"Rate limit exceeded"}',
                status_code=429,
                media_type="application/json",
                headers={"Retry-After": str(int(_WINDOW_SECONDS))},
            )

        self._request_times[client_ip].append(now)
        if is_write:
            self._write_times[client_ip].append(now)
        return await call_next(request)
