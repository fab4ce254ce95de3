"""Input sanitization applied after schema validation."""

import re
from typing import TypeVar

from pydantic import BaseModel

from grove.interface.error import ValidationError

# Free text fields: markup is kept, active content removed
HTML_FIELDS = frozenset({"content", "description"})

_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.I)
_IFRAME_BLOCK = re.compile(r"<iframe\b[^<]*(?:(?!</iframe>)<[^<]*)*</iframe>", re.I)
_EVENT_HANDLER = re.compile(r'on\w+="[^"]*"', re.I)
_JAVASCRIPT_URL = re.compile(r"javascript:", re.I)
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_WHITESPACE = re.compile(r"\s+")

M = TypeVar("M", bound=BaseModel)


def sanitize_html(value: str) -> str:
    """Strip script/iframe blocks, inline event handlers and javascript: URLs."""
    value = _SCRIPT_BLOCK.sub("", value)
    value = _IFRAME_BLOCK.sub("", value)
    value = _EVENT_HANDLER.sub("", value)
    return _JAVASCRIPT_URL.sub("", value)


def sanitize_string(value: str) -> str:
    """Trim, drop control characters and collapse whitespace."""
    value = _CONTROL_CHARS.sub("", value.strip())
    return _WHITESPACE.sub(" ", value)


def sanitize_payload(payload: M) -> M:
    """Sanitize every string field of a validated request model.

    Raises:
        ValidationError: If a free text field is blank once sanitized
    """
    updates: dict[str, str] = {}
    for name, value in payload:
        if not isinstance(value, str):
            continue
        if name in HTML_FIELDS:
            cleaned = sanitize_html(value)
            if not cleaned.strip():
                raise ValidationError(
                    "Invalid input", details=[f"/{name}: must not be empty"]
                )
        else:
            cleaned = sanitize_string(value)
        if cleaned != value:
            updates[name] = cleaned
    return payload.model_copy(update=updates) if updates else payload
