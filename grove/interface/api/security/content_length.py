"""Request size limit."""

from fastapi import Request

from grove.config import SecuritySettings
from grove.interface.error import PayloadTooLargeError, ValidationError


async def check_content_length(request: Request) -> None:
    """FastAPI dependency refusing bodies over the configured size.

    Raises:
        PayloadTooLargeError: If Content-Length exceeds the limit
    """
    header = request.headers.get("content-length")
    if not header:
        return
    try:
        length = int(header)
    except ValueError:
        raise ValidationError("Invalid Content-Length header")

    security = await request.state.dishka_container.get(SecuritySettings)
    if length > security.upload.max_request_size:
        raise PayloadTooLargeError("Request too large")
