"""Interface layer errors.

Each error knows its HTTP status and error code and renders as the
``{error, code}`` body shared by every endpoint.
"""

from typing import Any

from grove.domain.value import ErrorCode


class InterfaceError(Exception):
    """Base interface error."""

    status_code: int = 500
    code: ErrorCode = ErrorCode.INTERNAL

    def __init__(
        self,
        message: str,
        details: list[str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.message = message
        self.details = details
        self.headers = headers
        super().__init__(message)

    def body(self) -> dict[str, Any]:
        """JSON body for the error response."""
        body: dict[str, Any] = {"error": self.message, "code": self.code.value}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(InterfaceError):
    """Request validation error."""

    status_code = 400
    code = ErrorCode.VALIDATION_ERROR


class AuthenticationError(InterfaceError):
    """Missing or invalid credentials."""

    status_code = 401
    code = ErrorCode.UNAUTHENTICATED


class PayloadTooLargeError(InterfaceError):
    """Request body exceeds the size limit."""

    status_code = 413
    code = ErrorCode.PAYLOAD_TOO_LARGE


class RateLimitedError(InterfaceError):
    """Client exceeded a rate limit bucket."""

    status_code = 429
    code = ErrorCode.RATE_LIMITED

    def __init__(self, message: str, retry_after: int) -> None:
        self.retry_after = retry_after
        super().__init__(message, headers={"Retry-After": str(retry_after)})

    def body(self) -> dict[str, Any]:
        return {**super().body(), "retryAfter": self.retry_after}
