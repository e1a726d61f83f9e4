"""Exception hierarchy for the cpanel_uploader library."""

from __future__ import annotations

from typing import Any


class CpanelError(Exception):
    """Base exception for all cpanel_uploader errors."""

    pass


class ConfigurationError(CpanelError):
    """Raised when a required setting is missing or invalid."""

    pass


class TransportError(CpanelError):
    """Raised when the connection to cPanel could not be made or was interrupted."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class HttpStatusError(CpanelError):
    """Raised when cPanel answers with a non-2xx status code."""

    def __init__(self, status_code: int, reason: str, body: str = "") -> None:
        super().__init__(f"HTTP {status_code}: {reason}")
        self.status_code = status_code
        self.reason = reason
        self.body = body


class ApplicationError(CpanelError):
    """Raised when a 2xx response does not report success.

    The payload attribute holds the decoded response (or the raw text when
    the body was not JSON) for diagnostics.
    """

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class CleanupWarning(CpanelError):
    """Raised when temporary local files could not be removed.

    Never fatal: callers log it and carry on.
    """

    pass
