"""Tests for directory operations."""

from __future__ import annotations

import pytest
from helpers import FakeCpanel, api2_failure, api2_success

from cpanel_uploader import FailureKind, RemoteFilesystemClient

WEB_ROOT = "/home2/acct/public_html"


class TestCreateDirectory:
    """Tests for create_directory."""

    def test_request_parameters(
        self, client: RemoteFilesystemClient, fake_cpanel: FakeCpanel
    ) -> None:
        """Test that mkdir is called with parent, name and permissions."""
        client.create_directory(WEB_ROOT, "reports")

        request = fake_cpanel.requests[0]
        assert request.method == "GET"
        assert request.url.params["cpanel_jsonapi_func"] == "mkdir"
        assert request.url.params["path"] == WEB_ROOT
        assert request.url.params["name"] == "reports"
        assert request.url.params["permissions"] == "0755"

    def test_custom_permissions(
        self, client: RemoteFilesystemClient, fake_cpanel: FakeCpanel
    ) -> None:
        """Test that a custom permission mode is sent."""
        client.create_directory(WEB_ROOT, "private", permissions="0700")

        assert fake_cpanel.requests[0].url.params["permissions"] == "0700"

    def test_created(self, client: RemoteFilesystemClient) -> None:
        """Test a fresh directory creation."""
        result = client.create_directory(WEB_ROOT, "reports")

        assert result.success
        assert not result.already_existed
        assert result.target == f"{WEB_ROOT}/reports"

    def test_create_twice_is_idempotent(
        self, client: RemoteFilesystemClient, fake_cpanel: FakeCpanel
    ) -> None:
        """Test that creating the same directory twice succeeds both times."""
        fake_cpanel.queue(
            "mkdir",
            api2_success(),
            api2_failure(f"mkdir {WEB_ROOT}/reports: File exists"),
        )

        first = client.create_directory(WEB_ROOT, "reports")
        second = client.create_directory(WEB_ROOT, "reports")

        assert first.success
        assert second.success
        assert second.already_existed
        assert len(fake_cpanel.calls("mkdir")) == 2

    def test_other_failure(
        self, client: RemoteFilesystemClient, fake_cpanel: FakeCpanel
    ) -> None:
        """Test that a non-exists failure carries the raw payload."""
        payload = api2_failure("Permission denied")
        fake_cpanel.queue("mkdir", payload)

        result = client.create_directory(WEB_ROOT, "reports")

        assert not result.success
        assert result.error_kind is FailureKind.APPLICATION
        assert result.error == "Permission denied"
        assert result.payload == payload
        assert "Permission denied" in result.describe_payload()

    @pytest.mark.parametrize("parent", ["public_html", "", "home2/acct"])
    def test_relative_parent_rejected(
        self, parent: str, client: RemoteFilesystemClient, fake_cpanel: FakeCpanel
    ) -> None:
        """Test that the parent must be absolute."""
        with pytest.raises(ValueError, match="absolute"):
            client.create_directory(parent, "reports")
        assert fake_cpanel.requests == []

    @pytest.mark.parametrize("name", ["", "a/b", "/reports"])
    def test_name_must_be_bare(
        self, name: str, client: RemoteFilesystemClient, fake_cpanel: FakeCpanel
    ) -> None:
        """Test that the new directory name cannot contain a slash."""
        with pytest.raises(ValueError, match="bare name"):
            client.create_directory(WEB_ROOT, name)
        assert fake_cpanel.requests == []


class TestDeleteDirectory:
    """Tests for delete_directory."""

    def test_request_parameters(
        self, client: RemoteFilesystemClient, fake_cpanel: FakeCpanel
    ) -> None:
        """Test that rmdir goes through fileop with the relative path."""
        client.delete_directory("public_html/old")

        params = fake_cpanel.requests[0].url.params
        assert params["cpanel_jsonapi_func"] == "fileop"
        assert params["op"] == "rmdir"
        assert params["sourcefiles"] == "public_html/old"
        assert "doubledecode" not in params

    def test_non_empty_directory_is_accepted_not_removed(
        self, client: RemoteFilesystemClient, fake_cpanel: FakeCpanel
    ) -> None:
        """Test that an empty-result answer counts as accepted.

        cPanel answers this way even when it leaves a non-empty directory in
        place, and the client does not re-list to check.
        """
        fake_cpanel.queue("fileop", {"cpanelresult": {"data": [], "event": {}}})

        result = client.delete_directory("public_html/full_dir")

        assert result.success
        assert len(fake_cpanel.requests) == 1

    def test_reported_error(
        self, client: RemoteFilesystemClient, fake_cpanel: FakeCpanel
    ) -> None:
        """Test that an explicit per-path error is a failure."""
        fake_cpanel.queue(
            "fileop",
            {"cpanelresult": {"event": {"result": 1}, "data": [{"result": 0, "err": "Busy"}]}},
        )

        result = client.delete_directory("public_html/old")

        assert not result.success
        assert result.error == "Busy"

    def test_absolute_path_rejected(
        self, client: RemoteFilesystemClient, fake_cpanel: FakeCpanel
    ) -> None:
        """Test that delete_directory requires a path relative to the home."""
        with pytest.raises(ValueError, match="relative"):
            client.delete_directory("/home2/acct/public_html/old")
        assert fake_cpanel.requests == []
