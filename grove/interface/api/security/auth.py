"""Request authentication from the session token."""

import logfire
from fastapi import Request

from grove.config import AuthSettings
from grove.domain.service import JWTService
from grove.interface.error import AuthenticationError
from grove.util.jwt import JWTError, TokenPayload


def extract_token(request: Request, cookie_name: str) -> str | None:
    """Bearer token from the Authorization header, else the session cookie."""
    authorization = request.headers.get("authorization")
    if authorization and authorization.startswith("Bearer "):
        token = authorization[len("Bearer ") :].strip()
        if token:
            return token
    return request.cookies.get(cookie_name) or None


async def require_actor(request: Request) -> TokenPayload:
    """FastAPI dependency returning the authenticated user's token payload.

    Raises:
        AuthenticationError: If no token is sent or it doesn't verify
    """
    container = request.state.dishka_container
    auth_settings = await container.get(AuthSettings)

    token = extract_token(request, auth_settings.cookie_name)
    if not token:
        raise AuthenticationError("Authentication required")

    jwt_service = await container.get(JWTService)
    try:
        return jwt_service.verify_token(token)
    except JWTError as e:
        logfire.warn("Rejected session token", path=request.url.path, error=str(e))
        raise AuthenticationError("Invalid or expired token")
