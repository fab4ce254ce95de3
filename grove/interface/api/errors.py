"""Error handlers rendering every failure as ``{error, code}``."""

import logfire
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from grove.config import Settings
from grove.domain.value import ErrorCode
from grove.interface.api.security.headers import security_headers
from grove.interface.error import InterfaceError


def format_validation_errors(errors) -> list[str]:
    """Turn pydantic errors into ``"/path: message"`` strings."""
    details = []
    for error in errors:
        # Drop the leading "body"/"query" segment
        location = [str(part) for part in error.get("loc", ())[1:]]
        details.append(f"/{'/'.join(location)}: {error.get('msg', 'invalid')}")
    return details


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Install exception handlers on the app.

    Args:
        app: FastAPI application
        settings: Application settings (production hides internal messages)
    """

    @app.exception_handler(InterfaceError)
    async def handle_interface_error(request: Request, exc: InterfaceError):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.body(),
            headers=exc.headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": str(exc.detail),
                "code": ErrorCode.from_status(exc.status_code).value,
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        details = format_validation_errors(exc.errors())
        logfire.info(
            "Request validation failed", path=request.url.path, details=details
        )
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid input",
                "code": ErrorCode.VALIDATION_ERROR.value,
                "details": details,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logfire.error(
            "Unhandled API error",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        message = "Internal server error" if settings.is_production else str(exc)
        return JSONResponse(
            status_code=500,
            content={"error": message, "code": ErrorCode.INTERNAL.value},
            headers=security_headers(settings),
        )
