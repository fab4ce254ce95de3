"""Domain value objects for Grove."""

import re
from enum import Enum

from pydantic import field_validator

from grove.domain.value.common import RootValueObject

IMAGE_DATA_URL_PATTERN = re.compile(r"^data:image/(jpeg|png|gif|webp);base64,")
HOSTED_URL_PATTERN = re.compile(r"^https?://\S+$")


class CollapseState(str, Enum):
    """Whether a comment's replies are rendered."""

    EXPANDED = "expanded"
    COLLAPSED = "collapsed"


class ErrorCode(str, Enum):
    """Error codes shared by the API error body and the client."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL = "INTERNAL"
    NETWORK = "NETWORK"
    TIMEOUT = "TIMEOUT"

    @classmethod
    def from_status(cls, status_code: int) -> "ErrorCode":
        """Best-effort code for an HTTP status without an error body."""
        return _STATUS_CODES.get(status_code, cls.INTERNAL)


_STATUS_CODES = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHENTICATED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    413: ErrorCode.PAYLOAD_TOO_LARGE,
    422: ErrorCode.VALIDATION_ERROR,
    429: ErrorCode.RATE_LIMITED,
}


class ImageUrl(RootValueObject[str]):
    """Image attached to a post or comment.

    Either an inline base64 data URL (jpeg, png, gif, webp) or a hosted
    http(s) URL.
    """

    @field_validator("root")
    @classmethod
    def validate_image_url(cls, v: str) -> str:
        """Validate image reference format."""
        if not (IMAGE_DATA_URL_PATTERN.match(v) or HOSTED_URL_PATTERN.match(v)):
            raise ValueError(
                "Image must be a base64 data URL (jpeg, png, gif, webp) or an http(s) URL"
            )
        return v
