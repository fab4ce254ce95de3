"""Security headers added to every response."""

from fastapi import FastAPI, Request

from grove.config import Settings


def security_headers(settings: Settings) -> dict[str, str]:
    """Standard headers plus the CSP for the current environment."""
    headers = dict(settings.security.standard_headers)
    headers["Content-Security-Policy"] = settings.content_security_policy
    return headers


def install_security_headers(app: FastAPI, settings: Settings) -> None:
    """Register middleware setting the standard headers and the CSP.

    Unhandled exceptions are answered outside this middleware, so the 500
    handler in ``errors.py`` sets the same headers itself.

    Args:
        app: FastAPI application
        settings: Application settings (CSP depends on environment)
    """
    headers = security_headers(settings)

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in headers.items():
            response.headers[name] = value
        return response
