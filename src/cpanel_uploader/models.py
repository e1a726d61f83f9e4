"""Data models for the cpanel_uploader library."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cpanel_uploader.exceptions import ApplicationError, CpanelError


@dataclass(frozen=True)
class Credentials:
    """Account credentials, resolved once at startup."""

    username: str
    api_token: str
    host_base_url: str

    @property
    def authorization_header(self) -> str:
        return f"cpanel {self.username}:{self.api_token}"


class FailureKind(str, Enum):
    """Category of a failed operation."""

    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    APPLICATION = "application"


@dataclass(frozen=True)
class OperationResult:
    """Result of a single remote filesystem operation."""

    success: bool
    operation: str
    target: str
    error: str | None = None
    error_kind: FailureKind | None = None
    status_code: int | None = None
    payload: Any = None
    already_existed: bool = False
    exception: CpanelError | None = field(default=None, compare=False, repr=False)

    def raise_for_failure(self) -> None:
        """Raise the exception matching this result's failure kind.

        Does nothing for a successful result.
        """
        if self.success:
            return
        if self.exception is not None:
            raise self.exception
        raise ApplicationError(
            f"{self.operation} {self.target} failed: {self.error}", payload=self.payload
        )

    def describe_payload(self) -> str:
        """Pretty-print the raw payload for console diagnostics."""
        if self.payload is None:
            return ""
        if isinstance(self.payload, str):
            return self.payload
        return json.dumps(self.payload, indent=2, default=str)


@dataclass(frozen=True)
class DemoReport:
    """Remote artifacts produced by the demonstration sequence."""

    timestamp: str
    web_root: str
    first_file: str
    directory: str
    second_file: str
    created: tuple[str, ...] = ()
