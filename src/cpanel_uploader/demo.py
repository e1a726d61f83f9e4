"""Scripted demonstration: upload a file, create a directory, upload into it."""

from __future__ import annotations

import contextlib
import logging
import shutil
import tempfile
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from cpanel_uploader.client import RemoteFilesystemClient
from cpanel_uploader.config import WEB_ROOT, Settings
from cpanel_uploader.exceptions import CleanupWarning
from cpanel_uploader.models import DemoReport

logger = logging.getLogger(__name__)

FILE_CONTENT = "hello world"
TOTAL_STEPS = 4


def make_timestamp(now: datetime | None = None) -> str:
    """Format an instant as YYYYMMDDHHMMSS (local time)."""
    return (now or datetime.now()).strftime("%Y%m%d%H%M%S")


def remove_workspace(path: Path) -> None:
    """Delete a local work area.

    Raises:
        CleanupWarning: If the directory exists but could not be removed
    """
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return
    except OSError as e:
        raise CleanupWarning(f"Could not clean up temporary files in {path}: {e}") from e


@contextlib.contextmanager
def temporary_workspace(path: Path | str | None = None) -> Iterator[Path]:
    """Provide a local directory that is removed on every exit path.

    When path is given, a fresh subdirectory is created inside it and only
    that subdirectory is removed; the rest of path is left untouched.
    Removal problems are logged and never replace the original outcome.
    """
    parent = None
    if path is not None:
        parent = Path(path)
        parent.mkdir(parents=True, exist_ok=True)
    workspace = Path(tempfile.mkdtemp(prefix="cpanel_upload_", dir=parent))
    try:
        yield workspace
    finally:
        try:
            remove_workspace(workspace)
            logger.info("Cleaned up temporary files")
        except CleanupWarning as e:
            logger.warning(f"Warning: {e}")


def _write_local_file(workspace: Path, name: str) -> Path:
    local_path = workspace / name
    local_path.write_text(FILE_CONTENT)
    return local_path


def run_demo(
    client: RemoteFilesystemClient,
    settings: Settings,
    workspace: Path,
    now: datetime | None = None,
) -> DemoReport:
    """Run the four-step demonstration sequence.

    Args:
        client: Client bound to the target account
        settings: Resolved settings (for the absolute web root path)
        workspace: Local directory for the generated files
        now: Instant used to name everything; defaults to the current time

    Returns:
        DemoReport with the remote paths that were created

    Raises:
        CpanelError: On the first failed step; later steps are not attempted
    """
    timestamp = make_timestamp(now)
    logger.info(f"Timestamp: {timestamp}")

    first_name = f"{timestamp}.txt"
    first_path = _write_local_file(workspace, first_name)
    logger.info(f"[1/{TOTAL_STEPS}] Created local file: {first_name}")

    client.upload_files(WEB_ROOT, [first_path]).raise_for_failure()
    logger.info(f"[2/{TOTAL_STEPS}] Uploaded {first_name} to {WEB_ROOT}")

    dir_name = f"{timestamp}_test_dir"
    client.create_directory(settings.web_root_path, dir_name).raise_for_failure()
    logger.info(f"[3/{TOTAL_STEPS}] Created directory: {dir_name}")

    second_name = f"{timestamp}_file2.txt"
    second_path = _write_local_file(workspace, second_name)
    remote_dir = f"{WEB_ROOT}/{dir_name}"
    client.upload_files(remote_dir, [second_path]).raise_for_failure()
    logger.info(f"[4/{TOTAL_STEPS}] Uploaded {second_name} to {dir_name}")

    return DemoReport(
        timestamp=timestamp,
        web_root=WEB_ROOT,
        first_file=f"{WEB_ROOT}/{first_name}",
        directory=remote_dir,
        second_file=f"{remote_dir}/{second_name}",
        created=(
            f"{WEB_ROOT}/{first_name}",
            f"{remote_dir}/",
            f"{remote_dir}/{second_name}",
        ),
    )


def remove_demo_artifacts(client: RemoteFilesystemClient, report: DemoReport) -> None:
    """Delete what run_demo created: both files first, then the directory.

    Raises:
        CpanelError: On the first failed deletion
    """
    client.delete_files([report.second_file, report.first_file]).raise_for_failure()
    client.delete_directory(report.directory).raise_for_failure()
    logger.info(f"Removed demo artifacts for {report.timestamp}")
