"""Grove API client adapter."""

from .client import HttpCommentApi, MockCommentApi

__all__ = ["HttpCommentApi", "MockCommentApi"]
