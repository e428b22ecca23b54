"""Security Headers Middleware

Adds security headers to HTTP responses to protect against common web vulnerabilities.

The API only serves JSON to the marketplace front end, so the policies are
restrictive. Both middlewares can be switched off via configuration when the
API sits behind a proxy that already sets these headers.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import config


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that adds security headers to all HTTP responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        if not config.SECURITY_HEADERS_ENABLED:
            return response

        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"

        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"

        response.headers["X-XSS-Protection"] = "1; mode=block"

        # Only when served over HTTPS
        if config.HSTS_ENABLED:
            # max-age: 31536000 seconds = 1 year
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        # The marketplace is used over Tor, leak as little as possible
        response.headers["Referrer-Policy"] = "no-referrer"

        response.headers["Permissions-Policy"] = (
            "geolocation=(), microphone=(), camera=(), "
            "payment=(), usb=(), magnetometer=(), gyroscope=()"
        )

        return response


class CSPMiddleware(BaseHTTPMiddleware):
    """Middleware that adds Content Security Policy headers."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        if not config.CSP_ENABLED:
            return response

        # JSON API, nothing to load or embed
        csp_directives = [
            "default-src 'none'",
            "frame-ancestors 'none'",
            "base-uri 'none'",
            "form-action 'none'",
        ]

        response.headers["Content-Security-Policy"] = "; ".join(csp_directives)

        return response
