"""Unit tests for input sanitization and token extraction."""

import pytest
from pydantic import BaseModel
from starlette.requests import Request

from grove.interface.api.security import (
    extract_token,
    sanitize_html,
    sanitize_payload,
    sanitize_string,
)
from grove.interface.error import ValidationError


class Payload(BaseModel):
    content: str
    post_id: str
    count: int = 0


def request_with(headers: list[tuple[bytes, bytes]]) -> Request:
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


class TestSanitizeHtml:
    """Tests for sanitize_html."""

    def test_strips_script_blocks(self):
        assert sanitize_html("hi<script>alert(1)</script>!") == "hi!"

    def test_strips_iframes_handlers_and_javascript_urls(self):
        dirty = '<iframe src="x"></iframe><a href="javascript:go()" onclick="x()">l</a>'

        assert sanitize_html(dirty) == '<a href="go()" >l</a>'

    def test_keeps_plain_markup(self):
        assert sanitize_html("<b>bold</b> text") == "<b>bold</b> text"


class TestSanitizeString:
    """Tests for sanitize_string."""

    def test_trims_and_collapses_whitespace(self):
        assert sanitize_string("  a \n\t b  ") == "a b"

    def test_drops_control_characters(self):
        assert sanitize_string("a\x00b\x07c") == "abc"


class TestSanitizePayload:
    """Tests for sanitize_payload."""

    def test_cleans_each_string_field_by_kind(self):
        # Arrange
        payload = Payload(content="ok<script>x</script>", post_id="  post-1 ")

        # Act
        cleaned = sanitize_payload(payload)

        # Assert
        assert cleaned.content == "ok"
        assert cleaned.post_id == "post-1"
        assert cleaned.count == 0

    def test_unchanged_payload_is_returned_as_is(self):
        payload = Payload(content="hello", post_id="post-1")

        assert sanitize_payload(payload) is payload

    def test_content_empty_after_sanitizing_is_rejected(self):
        payload = Payload(content="<script>alert(1)</script>", post_id="post-1")

        with pytest.raises(ValidationError) as exc_info:
            sanitize_payload(payload)
        assert exc_info.value.details == ["/content: must not be empty"]


class TestExtractToken:
    """Tests for extract_token."""

    def test_bearer_header_wins_over_cookie(self):
        request = request_with(
            [(b"authorization", b"Bearer header-token"), (b"cookie", b"authToken=c")]
        )

        assert extract_token(request, "authToken") == "header-token"

    def test_cookie_fallback(self):
        request = request_with([(b"cookie", b"authToken=cookie-token")])

        assert extract_token(request, "authToken") == "cookie-token"

    def test_no_credentials(self):
        request = request_with([(b"authorization", b"Basic abc")])

        assert extract_token(request, "authToken") is None
