"""Pytest fixtures for cpanel_uploader tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from helpers import FakeCpanel

from cpanel_uploader import RemoteFilesystemClient, Settings

ENV_VARS = (
    "USERNAME",
    "SUBDOMAINNAME",
    "BLUEHOSTAPI",
    "HOME_BASE",
    "CPANEL_HOST",
    "CPANEL_TIMEOUT",
)


@pytest.fixture
def settings() -> Settings:
    """Settings for a test account."""
    return Settings(username="acct", subdomain="example", api_token="TOKEN123")


@pytest.fixture
def fake_cpanel() -> FakeCpanel:
    """Create a fake cPanel server."""
    return FakeCpanel()


@pytest.fixture
def client(settings: Settings, fake_cpanel: FakeCpanel) -> Iterator[RemoteFilesystemClient]:
    """Client wired to the fake cPanel server."""
    with RemoteFilesystemClient(
        settings.credentials, timeout=5.0, transport=fake_cpanel.transport
    ) as remote:
        yield remote


@pytest.fixture
def temp_text(tmp_path: Path) -> Path:
    """Create a temporary text file for upload tests."""
    path = tmp_path / "note.txt"
    path.write_text("hello world")
    return path


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    """Remove configuration variables and run from an empty directory (no .env)."""
    for name in ENV_VARS:
        # setenv first so values loaded from a .env file are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return monkeypatch
