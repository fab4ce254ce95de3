"""Adapter layer errors."""

from grove.domain.value import ErrorCode


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ApiError(AdapterError):
    """A call to the Grove API failed.

    Carries the ``code`` from the ``{error, code}`` body, or a code derived
    from the HTTP status, or NETWORK/TIMEOUT when no response arrived.
    """

    def __init__(
        self, code: ErrorCode, message: str, status_code: int | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(f"{code.value}: {message}")
