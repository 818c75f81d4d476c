"""Exceptions raised by the site-info pipeline.

Every failure is scoped to a single fetch call.  Callers distinguish
outcomes by class; ``BadStatusError`` carries the remote status code.
"""

from __future__ import annotations


class FetchError(Exception):
    """Raised when site information cannot be collected."""


class InvalidRequestError(FetchError):
    """The outgoing request (target URL or proxy) could not be constructed."""


class NetworkError(FetchError):
    """Connection, TLS, timeout or other transport-level failure."""


class BadStatusError(FetchError):
    """The site answered, but not with ``200 OK``."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"website request error with {status_code} response code")
        self.status_code = status_code


class DecodeError(FetchError):
    """The declared content encoding could not be decoded."""


class ParseError(FetchError):
    """The response body could not be consumed into a document tree."""
