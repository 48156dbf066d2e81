"""Upstream provider error types."""
from __future__ import annotations

from typing import Optional


class UpstreamError(Exception):
    """Base class for failures talking to the chat-completion provider."""


class UpstreamStatusError(UpstreamError):
    """Provider answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        message = f"API Error {status_code}"
        if body:
            message = f"{message}: {body}"
        super().__init__(message)


class UpstreamConnectionError(UpstreamError):
    """Provider could not be reached (DNS, connect, timeout, dropped stream)."""


class UpstreamEmptyResponseError(UpstreamError):
    """Provider returned success but no usable generated text."""


class UpstreamStreamError(UpstreamError):
    """Provider reported an error in-band while streaming."""

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        self.code = code
        if code is not None:
            message = f"Stream error {code}: {message}"
        super().__init__(message)
