"""Request pipeline: headers, size limit, rate limits, auth, sanitization."""

from fastapi import Depends

from .auth import extract_token, require_actor
from .content_length import check_content_length
from .headers import install_security_headers, security_headers
from .rate_limit import (
    RateLimitBucket,
    RateLimiterRegistry,
    SlidingWindowRateLimiter,
    client_id,
    rate_limit,
)
from .sanitize import sanitize_html, sanitize_payload, sanitize_string


def guard(bucket: RateLimitBucket) -> list:
    """Pipeline dependencies that run before auth and body validation."""
    return [Depends(check_content_length), Depends(rate_limit(bucket))]


__all__ = [
    "guard",
    "extract_token",
    "require_actor",
    "check_content_length",
    "install_security_headers",
    "security_headers",
    "RateLimitBucket",
    "RateLimiterRegistry",
    "SlidingWindowRateLimiter",
    "client_id",
    "rate_limit",
    "sanitize_html",
    "sanitize_payload",
    "sanitize_string",
]
