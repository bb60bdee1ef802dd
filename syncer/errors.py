"""
Module: errors.py
Description:
    Exception types shared by the SeerrNotify engine.

Usage:
    Imported by other modules; not intended to be executed directly.
"""

from __future__ import annotations


class SeerrNotifyError(Exception):
    """Base class for every error raised by SeerrNotify."""


class ConfigError(SeerrNotifyError):
    """Missing or invalid configuration detected at startup."""


class TransportError(SeerrNotifyError):
    """The request never produced an HTTP response (DNS, refused, timeout...)."""

    def __init__(self, method: str, endpoint: str, reason: str):
        self.method = method
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"{method} {endpoint} failed: {reason}")


class ApiError(SeerrNotifyError):
    """The service answered with a non-2xx status."""

    def __init__(
        self,
        method: str,
        endpoint: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        self.method = method
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body
        detail = f" - {body[:200]}" if body else ""
        super().__init__(f"{method} {endpoint} returned {status_code}{detail}")


class EnumerationFailure(SeerrNotifyError):
    """The user listing could not be retrieved in full."""
