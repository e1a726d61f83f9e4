"""RemoteFilesystemClient for filesystem operations on a cPanel account."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import httpx

from cpanel_uploader._internal.transport import CpanelTransport
from cpanel_uploader.config import DEFAULT_TIMEOUT
from cpanel_uploader.exceptions import (
    ApplicationError,
    CpanelError,
    HttpStatusError,
    TransportError,
)
from cpanel_uploader.models import Credentials, FailureKind, OperationResult
from cpanel_uploader.responses import Outcome, decode_fileop, decode_mkdir, decode_upload

logger = logging.getLogger(__name__)

DEFAULT_PERMISSIONS = "0755"
UPLOAD_CONTENT_TYPE = "text/plain"

UploadParts = list[tuple[str, tuple[str, bytes, str]]]


def build_upload_parts(local_files: Sequence[str | Path]) -> UploadParts:
    """Read local files into multipart parts named file-1..file-N in order."""
    parts: UploadParts = []
    for index, local_file in enumerate(local_files, start=1):
        path = Path(local_file)
        parts.append((f"file-{index}", (path.name, path.read_bytes(), UPLOAD_CONTENT_TYPE)))
    return parts


def _require_relative(path: str) -> str:
    if not path or path.startswith("/"):
        raise ValueError(f"Expected a path relative to the account home, got {path!r}")
    return path


class RemoteFilesystemClient:
    """Client for filesystem operations on a cPanel hosting account.

    Directory creation takes an absolute parent path plus a bare name.
    Uploads and deletions take paths relative to the account home.

    Example:
        with RemoteFilesystemClient(settings.credentials) as client:
            client.create_directory("/home2/acct/public_html", "reports")
            client.upload_files("public_html/reports", ["summary.txt"])
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            credentials: Account credentials and base URL
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self._credentials = credentials
        self._transport: CpanelTransport | None = CpanelTransport(
            credentials, timeout=timeout, transport=transport
        )

    def __enter__(self) -> RemoteFilesystemClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()

    def _get_transport(self) -> CpanelTransport:
        if self._transport is None:
            raise CpanelError("Client is closed")
        return self._transport

    def _execute(
        self,
        operation: str,
        target: str,
        call: Callable[[CpanelTransport], Any],
        decode: Callable[[Any], Outcome],
    ) -> OperationResult:
        """Run one request and fold every failure mode into an OperationResult."""
        transport = self._get_transport()
        try:
            payload = call(transport)
        except TransportError as e:
            return self._failure(operation, target, e, FailureKind.TRANSPORT)
        except HttpStatusError as e:
            return self._failure(
                operation, target, e, FailureKind.HTTP_STATUS, status_code=e.status_code
            )
        except ApplicationError as e:
            return self._failure(
                operation, target, e, FailureKind.APPLICATION, payload=e.payload
            )

        outcome = decode(payload)
        if outcome.success:
            return OperationResult(
                success=True,
                operation=operation,
                target=target,
                payload=payload,
                already_existed=outcome.already_existed,
            )

        reason = outcome.reason or f"{operation} failed"
        logger.error(f"{operation} {target} failed: {reason}")
        return OperationResult(
            success=False,
            operation=operation,
            target=target,
            error=reason,
            error_kind=FailureKind.APPLICATION,
            payload=payload,
            exception=ApplicationError(f"{operation} {target} failed: {reason}", payload),
        )

    def _failure(
        self,
        operation: str,
        target: str,
        error: CpanelError,
        kind: FailureKind,
        *,
        status_code: int | None = None,
        payload: Any = None,
    ) -> OperationResult:
        logger.error(f"{operation} {target} failed: {error}")
        return OperationResult(
            success=False,
            operation=operation,
            target=target,
            error=str(error),
            error_kind=kind,
            status_code=status_code,
            payload=payload,
            exception=error,
        )

    def create_directory(
        self,
        parent_absolute_path: str,
        name: str,
        permissions: str = DEFAULT_PERMISSIONS,
    ) -> OperationResult:
        """Create a directory, treating "already exists" as success.

        Args:
            parent_absolute_path: Absolute path of the parent, e.g. /home2/acct/public_html
            name: Bare name of the new directory
            permissions: Octal permission string

        Returns:
            OperationResult; already_existed is set when the directory was there
        """
        if not parent_absolute_path.startswith("/"):
            raise ValueError(f"Parent must be an absolute path, got {parent_absolute_path!r}")
        if not name or "/" in name:
            raise ValueError(f"Directory name must be a bare name, got {name!r}")

        target = f"{parent_absolute_path.rstrip('/')}/{name}"
        logger.info(f"Creating directory: {name} in {parent_absolute_path}")
        result = self._execute(
            "mkdir",
            target,
            lambda t: t.api2(
                "Fileman",
                "mkdir",
                {"path": parent_absolute_path, "name": name, "permissions": permissions},
            ),
            decode_mkdir,
        )
        if result.already_existed:
            logger.info(f"Directory already exists: {name}")
        elif result.success:
            logger.info(f"Directory created successfully: {name}")
        return result

    def upload_files(
        self, remote_directory: str, local_files: Sequence[str | Path]
    ) -> OperationResult:
        """Upload local files into a directory relative to the account home.

        The whole batch succeeds or fails together.

        Raises:
            ValueError: If no files are given or the directory is absolute
            FileNotFoundError: If a local file does not exist
        """
        _require_relative(remote_directory)
        if not local_files:
            raise ValueError("At least one local file is required")

        logger.info(f"Uploading {len(local_files)} file(s) to {remote_directory}")
        parts = build_upload_parts(local_files)
        for _, (file_name, _, _) in parts:
            logger.info(f"  - Adding file: {file_name}")

        result = self._execute(
            "upload",
            remote_directory,
            lambda t: t.uapi_post(
                "Fileman", "upload_files", data={"dir": remote_directory}, files=parts
            ),
            decode_upload,
        )
        if result.success:
            logger.info(f"Files uploaded successfully to {remote_directory}")
        return result

    def delete_file(self, relative_path: str) -> OperationResult:
        """Delete one file given its path relative to the account home."""
        return self.delete_files([relative_path])

    def delete_files(self, relative_paths: Sequence[str]) -> OperationResult:
        """Delete several files in a single request."""
        if not relative_paths:
            raise ValueError("At least one path is required")
        for path in relative_paths:
            _require_relative(path)
            # sourcefiles is a comma-separated list
            if "," in path:
                raise ValueError(f"Paths to delete cannot contain a comma, got {path!r}")

        target = ",".join(relative_paths)
        logger.info(f"Deleting file(s): {target}")
        return self._execute(
            "unlink",
            target,
            lambda t: t.api2(
                "Fileman",
                "fileop",
                # doubledecode=0 keeps percent-encoded names from being decoded twice
                {"op": "unlink", "sourcefiles": target, "doubledecode": "0"},
            ),
            decode_fileop,
        )

    def delete_directory(self, relative_path: str) -> OperationResult:
        """Ask cPanel to remove a directory.

        Success means the request was accepted. cPanel may leave a non-empty
        directory in place, so delete its files first.
        """
        _require_relative(relative_path)
        logger.info(f"Deleting directory: {relative_path}")
        return self._execute(
            "rmdir",
            relative_path,
            lambda t: t.api2("Fileman", "fileop", {"op": "rmdir", "sourcefiles": relative_path}),
            lambda payload: decode_fileop(payload, require_event_result=False),
        )

    def close(self) -> None:
        """Close the client and clean up resources."""
        if self._transport is not None:
            self._transport.close()
            self._transport = None
